"""Configuration contracts."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


def _executable_names(*names: str) -> list[str]:
    if sys.platform == "win32":
        return [f"{name}.exe" for name in names]
    return list(names)


class BootstrapConfig(BaseModel):
    server_path: Path
    package_manager: list[str] = Field(default_factory=lambda: _executable_names("dub"))
    compilers: list[str] = Field(default_factory=lambda: _executable_names("dmd", "ldc2"))
    server_package: str = "dls"
    search_path_var: str = "PATH"
    path_separator: str = os.pathsep
    check_exit_codes: bool = True
    ignore_remove_failure: bool = True
    lock_timeout: float | None = Field(default=None, gt=0)
    lock_path: Path | None = None

    model_config = {"frozen": True}

    @field_validator("package_manager", "compilers")
    @classmethod
    def validate_candidates(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value if name.strip()]
        if not names:
            raise ValueError("at least one candidate executable name is required")
        return names

    @field_validator("server_package")
    @classmethod
    def validate_server_package(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("server_package must be non-empty")
        return value

    @field_validator("path_separator")
    @classmethod
    def validate_path_separator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("path_separator must be a single character")
        return value

    @property
    def install_root(self) -> Path:
        """Directory that holds the installed server; shared by every bootstrap attempt."""
        return self.server_path.parent

    @property
    def resolved_lock_path(self) -> Path:
        if self.lock_path is not None:
            return self.lock_path
        return self.install_root.parent / ".dlsclient-install.lock"
