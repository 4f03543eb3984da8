"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("dlsclient")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dlsclient")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    probe_parser = subparsers.add_parser("probe", help="Look for dub and a D compiler on the search path")
    install_parser = subparsers.add_parser("install", help="Install DLS through dub unless already installed")
    path_parser = subparsers.add_parser("path", help="Print where the DLS binary is expected")

    for sub in (probe_parser, install_parser, path_parser):
        sub.add_argument("--config", default=None, help="Path to a dlsclient JSON config (default: environment)")
        sub.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    install_parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    return parser
