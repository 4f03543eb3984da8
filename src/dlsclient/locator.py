"""Executable lookup on the search path."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class PathLocator:
    """Finds the first of several candidate executables on a search-path variable.

    Directories are visited in listed order and, within each directory, the
    candidates in the order given, so an earlier directory always wins over a
    preferred name found further down the path.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        variable: str = "PATH",
        separator: str = os.pathsep,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._variable = variable
        self._separator = separator

    def directories(self) -> list[Path]:
        raw = self._environ.get(self._variable, "")
        return [Path(entry.strip().strip('"')) for entry in raw.split(self._separator) if entry.strip()]

    def find(self, candidates: Sequence[str]) -> Path | None:
        for directory in self.directories():
            for name in candidates:
                path = directory / name
                if path.is_file():
                    logger.debug("Found %s at %s", name, path)
                    return path
        logger.debug("None of %s found on %s", ", ".join(candidates), self._variable)
        return None
