"""Async wrapper around child processes with captured standard streams."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from dlsclient.contracts.exceptions import LaunchError

logger = logging.getLogger(__name__)


@dataclass
class CompletedProcess:
    """Result of a fully drained process run."""

    returncode: int
    stdout: str
    stderr: str


class SubprocessHandle:
    """A started child process and its piped standard streams.

    The handle belongs to whoever called :meth:`ProcessRunner.start`. Each
    stream must have a single reader; hand it on rather than sharing it.
    """

    def __init__(self, executable: str, args: Sequence[str], process: asyncio.subprocess.Process) -> None:
        self.executable = executable
        self.args = tuple(args)
        self._process = process

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def stdin(self) -> asyncio.StreamWriter:
        assert self._process.stdin is not None
        return self._process.stdin

    @property
    def stdout(self) -> asyncio.StreamReader:
        assert self._process.stdout is not None
        return self._process.stdout

    @property
    def stderr(self) -> asyncio.StreamReader:
        assert self._process.stderr is not None
        return self._process.stderr

    @property
    def returncode(self) -> int | None:
        """Exit status, or ``None`` while the process is still running."""
        return self._process.returncode

    async def wait_for_exit(self) -> int:
        """Suspend until the process terminates. Callers impose any timeout."""
        return await self._process.wait()

    async def communicate(self) -> tuple[bytes, bytes]:
        return await self._process.communicate()

    def close_stdin(self) -> None:
        """Signal end-of-input to a child that is not expected to read anything."""
        self.stdin.close()

    def terminate(self) -> None:
        """Ask the process to stop; a no-op once it has exited."""
        if self._process.returncode is not None:
            return
        try:
            self._process.terminate()
        except ProcessLookupError:
            pass

    def __repr__(self) -> str:
        return f"SubprocessHandle({self.command_line!r}, returncode={self.returncode!r})"

    @property
    def command_line(self) -> str:
        return " ".join([self.executable, *self.args])


class ProcessRunner:
    """Launches external programs with stdin, stdout and stderr always piped."""

    async def start(
        self,
        executable: str | Path,
        args: Sequence[str] = (),
        *,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> SubprocessHandle:
        """Spawn *executable* with *args*.

        Raises:
            LaunchError: If the OS refuses to create the process.
        """
        program = os.fspath(executable)
        logger.debug("Starting: %s", " ".join([program, *args]))
        try:
            process = await asyncio.create_subprocess_exec(
                program,
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=dict(env) if env is not None else None,
            )
        except OSError as exc:
            raise LaunchError(f"Failed to start {program}: {exc}") from exc
        return SubprocessHandle(program, args, process)

    async def run(
        self,
        executable: str | Path,
        args: Sequence[str] = (),
        *,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CompletedProcess:
        """Start *executable* with no input, drain both output streams and wait for it to exit.

        Stdin is closed straight away, so a child that prompts sees end-of-input
        instead of waiting for an answer nobody will type.
        """
        handle = await self.start(executable, args, cwd=cwd, env=env)
        handle.close_stdin()
        try:
            stdout_bytes, stderr_bytes = await handle.communicate()
        except asyncio.CancelledError:
            handle.terminate()
            raise
        result = CompletedProcess(
            returncode=handle.returncode or 0,
            stdout=stdout_bytes.decode(errors="replace") if stdout_bytes else "",
            stderr=stderr_bytes.decode(errors="replace") if stderr_bytes else "",
        )
        logger.debug("Exited %d: %s", result.returncode, handle.command_line)
        return result
