"""Install-domain types shared by the bootstrapper, the progress parser and UIs."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class InstallPhase(StrEnum):
    EXTRACTING = "Extracting"
    INSTALLING = "Installing"


class Severity(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ToolchainProbe:
    """Result of searching the search path for the tools needed to build the server."""

    package_manager: Path | None
    compiler: Path | None

    @property
    def ready(self) -> bool:
        return self.package_manager is not None and self.compiler is not None


@dataclass(frozen=True)
class InstallProgressEvent:
    phase: InstallPhase
    current: int
    total: int


@dataclass(frozen=True)
class ProgressCleared:
    """Trailing signal emitted once the installer's progress stream has ended."""


_handle_ids = itertools.count(1)


@dataclass
class ProgressHandle:
    """Correlates progress updates from one bootstrap run with a single UI widget.

    UIs may stash whatever they need in ``cookie`` (a task id, a status bar
    cookie) on the first report and read it back on later ones.
    """

    id: int = field(default_factory=lambda: next(_handle_ids))
    cookie: object | None = None
