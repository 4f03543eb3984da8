"""Command implementations and their summaries."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from dlsclient import BootstrapConfig, NullEditorUI, ServerBootstrapper, ToolchainProbe, default_config, load_config
from dlsclient.cli.progress.rich import RichEditorUI


def resolve_config(args: argparse.Namespace) -> BootstrapConfig:
    if args.config:
        return load_config(args.config, environ=os.environ)
    return default_config(os.environ)


def _describe(path: Path | None) -> str:
    return str(path) if path is not None else "not found"


def format_probe_summary(probe: ToolchainProbe, config: BootstrapConfig) -> str:
    lines = [
        "",
        "dlsclient - toolchain",
        "",
        f"  Dub:       {_describe(probe.package_manager)}",
        f"  Compiler:  {_describe(probe.compiler)}",
        f"  Server:    {config.server_path}",
        f"  Status:    {'ready to install' if probe.ready else 'missing tools'}",
        "",
    ]
    return "\n".join(lines)


def run_probe(args: argparse.Namespace) -> ToolchainProbe:
    config = resolve_config(args)
    probe = ServerBootstrapper(config).probe_toolchain()
    print(format_probe_summary(probe, config))
    return probe


async def run_install(args: argparse.Namespace) -> Path:
    config = resolve_config(args)
    if args.verbose or args.no_progress:
        server_path = await ServerBootstrapper(config, ui=NullEditorUI()).resolve_server_path()
    else:
        with RichEditorUI() as ui:
            server_path = await ServerBootstrapper(config, ui=ui).resolve_server_path()
    print(server_path)
    return server_path


def run_path(args: argparse.Namespace) -> bool:
    config = resolve_config(args)
    installed = config.server_path.is_file()
    suffix = "" if installed else " (not installed)"
    print(f"{config.server_path}{suffix}")
    return installed
