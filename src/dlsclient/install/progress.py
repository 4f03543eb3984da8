"""Parser for the line protocol ``dls:bootstrap --progress`` writes to stderr.

The first line carries the total amount of work as a decimal integer. Every
following line is either the literal ``extract`` (a phase marker) or the
decimal amount of work completed so far. Any other line means the installer
speaks a protocol we do not understand, and the install attempt is aborted.
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from dlsclient.contracts.exceptions import ProtocolViolationError
from dlsclient.contracts.install import InstallPhase, InstallProgressEvent, ProgressCleared

EXTRACT_TOKEN = "extract"

_DECIMAL = re.compile(r"[0-9]+")

ProgressSignal = InstallProgressEvent | ProgressCleared


def _decode(line: str | bytes) -> str:
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    return line.strip()


def _parse_count(text: str, *, what: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ProtocolViolationError(f"expected {what} as a decimal integer, got {text!r}", line=text)
    return int(text)


class InstallProgressParser:
    """Turns installer status lines into :class:`InstallProgressEvent` values.

    A parser holds the total announced by the first line, so it consumes
    exactly one stream; create a new parser for each install run.
    """

    def __init__(self) -> None:
        self._total: int | None = None
        self._consumed = False

    @property
    def total(self) -> int | None:
        return self._total

    def feed(self, line: str | bytes) -> InstallProgressEvent | None:
        """Consume one line; returns ``None`` for the total line, an event otherwise."""
        text = _decode(line)
        if self._total is None:
            self._total = _parse_count(text, what="total")
            return None
        if text == EXTRACT_TOKEN:
            return InstallProgressEvent(InstallPhase.EXTRACTING, 0, 0)
        current = _parse_count(text, what="progress")
        if current > self._total:
            raise ProtocolViolationError(f"progress {current} exceeds total {self._total}", line=text)
        return InstallProgressEvent(InstallPhase.INSTALLING, current, self._total)

    def finish(self) -> ProgressCleared:
        if self._total is None:
            raise ProtocolViolationError("progress stream ended before announcing a total")
        return ProgressCleared()

    def _claim(self) -> None:
        if self._consumed:
            raise RuntimeError("InstallProgressParser has already consumed a stream")
        self._consumed = True

    async def parse(self, lines: AsyncIterable[str | bytes]) -> AsyncIterator[ProgressSignal]:
        """Yield one event per status line, then a single :class:`ProgressCleared`.

        *lines* is typically the installer's stderr ``asyncio.StreamReader``.
        """
        self._claim()
        async for line in lines:
            event = self.feed(line)
            if event is not None:
                yield event
        yield self.finish()

    def parse_lines(self, lines: Iterable[str | bytes]) -> Iterator[ProgressSignal]:
        """Synchronous counterpart of :meth:`parse` for already-captured output."""
        self._claim()
        for line in lines:
            event = self.feed(line)
            if event is not None:
                yield event
        yield self.finish()
