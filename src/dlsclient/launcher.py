"""Start the language server and expose its standard streams as a duplex channel."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from dlsclient.process import ProcessRunner, SubprocessHandle

logger = logging.getLogger(__name__)


@dataclass
class ServerConnection:
    """Byte channel to a running server: read its stdout, write its stdin.

    The protocol client that receives a connection owns it, including the
    process behind it.
    """

    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter
    process: SubprocessHandle

    async def close(self) -> int:
        """Close the server's stdin, stop the process and return its exit status."""
        if not self.writer.is_closing():
            self.writer.close()
        self.process.terminate()
        return await self.process.wait_for_exit()


class ServerLauncher:
    def __init__(self, runner: ProcessRunner | None = None) -> None:
        self._runner = runner or ProcessRunner()

    async def launch(self, path: Path) -> ServerConnection:
        """Start *path* with no arguments; no handshake is attempted.

        Raises:
            LaunchError: If the process cannot be started.
        """
        handle = await self._runner.start(path)
        logger.info("Started DLS (pid %d): %s", handle.pid, path)
        return ServerConnection(reader=handle.stdout, writer=handle.stdin, process=handle)
