"""Shared test fixtures for dlsclient tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from dlsclient.contracts.config import BootstrapConfig
from dlsclient.locator import PathLocator
from tests.fakes.fs import make_executable


@pytest.fixture
def config(tmp_path: Path) -> BootstrapConfig:
    """Config whose server path lives under tmp_path and does not exist yet."""
    return BootstrapConfig(server_path=tmp_path / "dub" / "packages" / ".bin" / "dls-latest" / "dls")


@pytest.fixture
def toolchain_environ(tmp_path: Path, config: BootstrapConfig) -> dict[str, str]:
    """A search path holding dub in one directory and a D compiler in another."""
    dub_dir = tmp_path / "tools" / "dub"
    compiler_dir = tmp_path / "tools" / "dmd"
    make_executable(dub_dir, config.package_manager[0])
    make_executable(compiler_dir, config.compilers[0])
    return {"PATH": os.pathsep.join([str(dub_dir), str(compiler_dir)])}


@pytest.fixture
def toolchain_locator(toolchain_environ: dict[str, str]) -> PathLocator:
    return PathLocator(toolchain_environ)
