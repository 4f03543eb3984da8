"""Mutual exclusion around the shared dub install state.

Two activations (two editor windows, two CLI runs) must not run
remove/fetch/bootstrap against the same package directory at once. The lock
has two layers: a ``threading.Lock`` per lock path for activations inside
this process, and an OS file lock for other processes. Both are polled with
non-blocking attempts so a waiting task stays cancellable and never blocks
the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import threading
import time
from pathlib import Path
from types import TracebackType

from dlsclient.contracts.exceptions import InstallFailedError

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.1

_process_locks: dict[str, threading.Lock] = {}
_process_locks_guard = threading.Lock()


def _process_lock(path: Path) -> threading.Lock:
    key = os.path.normcase(os.path.abspath(path))
    with _process_locks_guard:
        return _process_locks.setdefault(key, threading.Lock())


def _try_lock_fd(fd: int) -> bool:
    if sys.platform == "win32":
        import msvcrt

        try:
            msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)  # type: ignore[attr-defined]
        except OSError:
            return False
        return True

    import fcntl

    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError:
        return False
    return True


def _unlock_fd(fd: int) -> None:
    if sys.platform == "win32":
        import msvcrt

        os.lseek(fd, 0, os.SEEK_SET)
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)  # type: ignore[attr-defined]
        return

    import fcntl

    fcntl.flock(fd, fcntl.LOCK_UN)


class InstallLock:
    """Async context manager serializing install runs that share *path*.

    Usage::

        async with InstallLock(config.resolved_lock_path):
            ...  # remove, fetch, bootstrap

    The lock file is left in place on release; deleting it would let a
    waiter lock an unlinked inode while a newcomer locks a fresh one.
    """

    def __init__(self, path: Path, *, timeout: float | None = None) -> None:
        self.path = path
        self.timeout = timeout
        self._thread_lock = _process_lock(path)
        self._fd: int | None = None
        self._holds_thread_lock = False

    @property
    def held(self) -> bool:
        return self._fd is not None

    async def acquire(self) -> None:
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        waited = False

        while not self._thread_lock.acquire(blocking=False):
            waited = self._wait_notice(waited)
            await self._sleep_or_timeout(deadline)
        self._holds_thread_lock = True

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_CREAT | os.O_RDWR)
        except OSError as exc:
            self._release_thread_lock()
            raise InstallFailedError("lock", f"cannot open install lock {self.path}: {exc}") from exc

        try:
            while not _try_lock_fd(fd):
                waited = self._wait_notice(waited)
                await self._sleep_or_timeout(deadline)
        except BaseException:
            os.close(fd)
            self._release_thread_lock()
            raise

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode())
        self._fd = fd
        logger.debug("Acquired install lock %s", self.path)

    def release(self) -> None:
        fd, self._fd = self._fd, None
        if fd is not None:
            try:
                _unlock_fd(fd)
            finally:
                os.close(fd)
            logger.debug("Released install lock %s", self.path)
        self._release_thread_lock()

    def _release_thread_lock(self) -> None:
        if self._holds_thread_lock:
            self._holds_thread_lock = False
            self._thread_lock.release()

    def _wait_notice(self, waited: bool) -> bool:
        if not waited:
            logger.info("Waiting for another DLS install to finish (%s)", self.path)
        return True

    async def _sleep_or_timeout(self, deadline: float | None) -> None:
        if deadline is not None and time.monotonic() >= deadline:
            raise InstallFailedError("lock", f"timed out waiting for install lock {self.path}")
        await asyncio.sleep(_POLL_INTERVAL)

    async def __aenter__(self) -> InstallLock:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()
