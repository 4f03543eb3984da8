"""Locate or install the DLS server binary."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from dlsclient.contracts.config import BootstrapConfig
from dlsclient.contracts.exceptions import InstallFailedError, ProtocolViolationError, ToolchainMissingError
from dlsclient.contracts.install import ProgressCleared, ProgressHandle, ToolchainProbe
from dlsclient.contracts.ui import EditorUI, NullEditorUI
from dlsclient.install.lock import InstallLock
from dlsclient.install.progress import InstallProgressParser
from dlsclient.locator import PathLocator
from dlsclient.process import ProcessRunner, SubprocessHandle

logger = logging.getLogger(__name__)

STATUS_REMOVING = "Removing any previous DLS version"
STATUS_FETCHING = "Fetching DLS"
STATUS_INSTALLING = "Installing DLS"

EXIT_GRACE_PERIOD = 1.0


class ServerBootstrapper:
    """Returns a runnable server binary, installing it through dub when missing.

    The install is three strictly sequential dub invocations sharing one
    package directory: ``remove``, ``fetch`` and ``run dls:bootstrap``. The
    last one reports progress on stderr and prints the installed binary's
    path on stdout.
    """

    def __init__(
        self,
        config: BootstrapConfig,
        *,
        locator: PathLocator | None = None,
        runner: ProcessRunner | None = None,
        ui: EditorUI | None = None,
    ) -> None:
        self._config = config
        self._locator = locator or PathLocator(variable=config.search_path_var, separator=config.path_separator)
        self._runner = runner or ProcessRunner()
        self._ui = ui or NullEditorUI()

    def probe_toolchain(self) -> ToolchainProbe:
        return ToolchainProbe(
            package_manager=self._locator.find(self._config.package_manager),
            compiler=self._locator.find(self._config.compilers),
        )

    def installed_path(self) -> Path | None:
        path = self._config.server_path
        return path if path.is_file() else None

    async def resolve_server_path(self) -> Path:
        """Return the server binary, running the dub install first if needed.

        Raises:
            ToolchainMissingError: If dub or a D compiler is not on the search path.
            InstallFailedError: If an install step fails or yields no binary.
            ProtocolViolationError: If the installer's progress output is malformed.
        """
        existing = self.installed_path()
        if existing is not None:
            logger.debug("Using installed server at %s", existing)
            return existing

        probe = self.probe_toolchain()
        if probe.package_manager is None:
            raise ToolchainMissingError("package-manager", "Dub not found")
        if probe.compiler is None:
            raise ToolchainMissingError("compiler", "No D compiler found")
        logger.info("Installing DLS with %s (compiler %s)", probe.package_manager, probe.compiler)

        async with InstallLock(self._config.resolved_lock_path, timeout=self._config.lock_timeout):
            existing = self.installed_path()
            if existing is not None:
                logger.info("Server was installed by a concurrent activation: %s", existing)
                return existing
            return await self._install(probe.package_manager)

    async def _install(self, dub: Path) -> Path:
        package = self._config.server_package
        await self._run_step("remove", dub, ["remove", package], STATUS_REMOVING)
        await self._run_step("fetch", dub, ["fetch", package], STATUS_FETCHING)

        self._ui.set_status(STATUS_INSTALLING)
        handle = await self._runner.start(dub, ["run", "--quiet", f"{package}:bootstrap", "--", "--progress"])
        handle.close_stdin()
        stdout = await self._drive_bootstrap(handle)
        returncode = handle.returncode
        if returncode != 0 and self._config.check_exit_codes:
            raise InstallFailedError(
                "bootstrap",
                f"`{handle.command_line}` exited with status {returncode}",
                returncode=returncode,
            )

        reported = stdout.decode(errors="replace").strip()
        if not reported:
            raise InstallFailedError("bootstrap", "installer did not report a server path", returncode=returncode)
        try:
            server_path = Path(reported)
            found = server_path.is_file()
        except (OSError, ValueError) as exc:
            raise InstallFailedError(
                "bootstrap", f"installer reported an unreadable server path {reported[:200]!r}: {exc}"
            ) from exc
        if not found:
            raise InstallFailedError("bootstrap", f"installer reported a missing server binary: {server_path}")
        logger.info("Installed DLS at %s", server_path)
        return server_path

    async def _run_step(self, step: str, dub: Path, args: list[str], status: str) -> None:
        self._ui.set_status(status)
        result = await self._runner.run(dub, args)
        if result.returncode == 0:
            return
        command = " ".join([os.fspath(dub), *args])
        tolerated = not self._config.check_exit_codes or (step == "remove" and self._config.ignore_remove_failure)
        if tolerated:
            logger.warning("`%s` exited with status %d; continuing", command, result.returncode)
            return
        message = f"`{command}` exited with status {result.returncode}"
        details = result.stderr.strip()
        if details:
            message = f"{message}: {details}"
        raise InstallFailedError(step, message, returncode=result.returncode)

    async def _drive_bootstrap(self, handle: SubprocessHandle) -> bytes:
        """Relay progress from stderr while collecting stdout; returns stdout once the process exits."""
        progress = ProgressHandle()
        stdout_task = asyncio.ensure_future(handle.stdout.read())
        try:
            async for signal in InstallProgressParser().parse(handle.stderr):
                if isinstance(signal, ProgressCleared):
                    self._ui.clear_progress(progress)
                else:
                    self._ui.report_progress(progress, signal)
            stdout = await stdout_task
            await handle.wait_for_exit()
        except ProtocolViolationError as exc:
            self._ui.clear_progress(progress)
            stdout_task.cancel()
            returncode = await self._reap(handle)
            if returncode:
                # The installer failed on its own; its stderr line is an error, not progress.
                detail = exc.line if exc.line is not None else str(exc)
                raise InstallFailedError(
                    "bootstrap",
                    f"`{handle.command_line}` exited with status {returncode}: {detail}",
                    returncode=returncode,
                ) from exc
            raise
        except BaseException:
            # Cancellation: stopping the installer is best-effort, it is not awaited.
            stdout_task.cancel()
            handle.terminate()
            raise
        return stdout

    async def _reap(self, handle: SubprocessHandle) -> int | None:
        """Give the installer a moment to exit by itself; returns its status, or ``None`` if it had to be stopped."""
        try:
            return await asyncio.wait_for(handle.wait_for_exit(), timeout=EXIT_GRACE_PERIOD)
        except asyncio.TimeoutError:
            handle.terminate()
            await handle.wait_for_exit()
            return None
