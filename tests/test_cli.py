"""Tests for the dlsclient CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pytest

from dlsclient.cli import build_parser, main
from dlsclient.cli.commands import format_probe_summary, run_install, run_path, run_probe
from dlsclient.contracts.config import BootstrapConfig
from dlsclient.contracts.exceptions import (
    ConfigError,
    InstallFailedError,
    LaunchError,
    ProtocolViolationError,
    ToolchainMissingError,
)
from dlsclient.contracts.install import ToolchainProbe
from tests.fakes.fs import make_executable


def _args(command: str, **overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {"command": command, "config": None, "verbose": False, "no_progress": True}
    values.update(overrides)
    return argparse.Namespace(**values)


def test_parser_version(capsys: pytest.CaptureFixture[str]) -> None:
    parser = build_parser()

    with pytest.raises(SystemExit) as exc:
        parser.parse_args(["--version"])

    assert exc.value.code == 0
    assert "dlsclient" in capsys.readouterr().out


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_install_flags() -> None:
    args = build_parser().parse_args(["install", "--config", "dls.json", "--no-progress", "-v"])

    assert args.command == "install"
    assert args.config == "dls.json"
    assert args.no_progress is True
    assert args.verbose is True


def test_format_probe_summary_reports_missing_tools(config: BootstrapConfig) -> None:
    summary = format_probe_summary(ToolchainProbe(package_manager=Path("/usr/bin/dub"), compiler=None), config)

    assert f"Dub:       {Path('/usr/bin/dub')}" in summary
    assert "Compiler:  not found" in summary
    assert "missing tools" in summary


def test_run_probe_reads_search_path(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = BootstrapConfig(server_path=tmp_path / "dls")
    dub = make_executable(tmp_path / "bin", config.package_manager[0])
    dmd = make_executable(tmp_path / "bin", config.compilers[0])
    monkeypatch.setenv("PATH", str(tmp_path / "bin"))
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))

    probe = run_probe(_args("probe"))

    assert probe == ToolchainProbe(package_manager=dub, compiler=dmd)
    assert "ready to install" in capsys.readouterr().out


def test_run_path_reports_install_state(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))

    assert run_path(_args("path")) is False
    assert "(not installed)" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_install_prints_installed_path(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    server = tmp_path / "dub" / "packages" / ".bin" / "dls-latest" / "dls.exe"
    make_executable(server.parent, server.name)

    result = await run_install(_args("install"))

    assert result == server
    assert capsys.readouterr().out.strip() == str(server)


def test_main_probe_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dlsclient.cli._run_probe", lambda _: ToolchainProbe(Path("dub"), Path("dmd")))
    assert main(["probe"]) == 0

    monkeypatch.setattr("dlsclient.cli._run_probe", lambda _: ToolchainProbe(Path("dub"), None))
    assert main(["probe"]) == 4


def test_main_path_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dlsclient.cli._run_path", lambda _: True)
    assert main(["path"]) == 0

    monkeypatch.setattr("dlsclient.cli._run_path", lambda _: False)
    assert main(["path"]) == 1


def test_main_returns_zero_on_install_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dlsclient.cli.asyncio.run", lambda coro: coro.close())

    assert main(["install"]) == 0


def test_main_enables_verbose_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dlsclient.cli.asyncio.run", lambda coro: coro.close())
    captured: dict[str, object] = {}

    def _fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("dlsclient.cli.logging.basicConfig", _fake_basic_config)

    main(["install", "--verbose"])

    assert captured["level"] == logging.DEBUG
    assert captured["stream"] == sys.stderr


@pytest.mark.parametrize(
    ("error", "exit_code"),
    [
        (ConfigError("bad config"), 3),
        (ToolchainMissingError("package-manager", "Dub not found"), 4),
        (InstallFailedError("fetch", "fetch failed"), 5),
        (ProtocolViolationError("garbled progress"), 5),
        (LaunchError("cannot start"), 6),
    ],
)
def test_main_maps_errors_to_exit_codes(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], error: Exception, exit_code: int
) -> None:
    def _raise(coro: object) -> None:
        coro.close()  # type: ignore[attr-defined]
        raise error

    monkeypatch.setattr("dlsclient.cli.asyncio.run", _raise)

    assert main(["install"]) == exit_code
    assert f"error: {error}" in capsys.readouterr().err
