"""Language client composition root: bootstrap, launch and lifecycle hooks."""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, ClassVar

from dlsclient.config import default_config
from dlsclient.contracts.config import BootstrapConfig
from dlsclient.contracts.exceptions import DlsClientError
from dlsclient.contracts.install import Severity
from dlsclient.contracts.ui import EditorUI, NullEditorUI
from dlsclient.install.bootstrapper import ServerBootstrapper
from dlsclient.launcher import ServerConnection, ServerLauncher

logger = logging.getLogger(__name__)

LifecycleHandler = Callable[[], Awaitable[None]]


class DLanguageClient:
    """Client-side entry point a host editor talks to.

    The host registers ``on_start``/``on_stop`` observers, calls :meth:`load`
    once it is ready, and :meth:`activate` whenever it wants a connection to a
    server. Protocol framing and session lifecycle stay with the host's
    protocol client.
    """

    name: ClassVar[str] = "DLS"
    language_id: ClassVar[str] = "d"
    file_extensions: ClassVar[tuple[str, ...]] = (".d", ".di")
    configuration_sections: ClassVar[tuple[str, ...]] = ("d.dls",)
    files_to_watch: ClassVar[tuple[str, ...]] = ("dub.json", "dub.sdl", "dub.selections.json", ".gitmodules", "*.ini")

    def __init__(
        self,
        config: BootstrapConfig,
        *,
        ui: EditorUI | None = None,
        bootstrapper: ServerBootstrapper | None = None,
        launcher: ServerLauncher | None = None,
    ) -> None:
        self._config = config
        self._ui = ui or NullEditorUI()
        self._bootstrapper = bootstrapper or ServerBootstrapper(config, ui=self._ui)
        self._launcher = launcher or ServerLauncher()
        self._start_handlers: list[LifecycleHandler] = []
        self._stop_handlers: list[LifecycleHandler] = []

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        ui: EditorUI | None = None,
    ) -> DLanguageClient:
        return cls(default_config(os.environ if environ is None else environ), ui=ui)

    @property
    def config(self) -> BootstrapConfig:
        return self._config

    @property
    def initialization_options(self) -> dict[str, Any]:
        return {}

    def on_start(self, handler: LifecycleHandler) -> LifecycleHandler:
        """Register *handler* to run when the host loads the client. Usable as a decorator."""
        self._start_handlers.append(handler)
        return handler

    def on_stop(self, handler: LifecycleHandler) -> LifecycleHandler:
        """Register *handler* to run when the host stops the client. Usable as a decorator."""
        self._stop_handlers.append(handler)
        return handler

    async def load(self) -> None:
        for handler in list(self._start_handlers):
            await handler()

    async def stop(self) -> None:
        for handler in list(self._stop_handlers):
            await handler()

    async def activate(self) -> ServerConnection | None:
        """Resolve (installing if needed) and start the server.

        Every failure is reported through the UI and yields ``None``; the host
        decides whether to try again later.
        """
        try:
            server_path = await self._bootstrapper.resolve_server_path()
            return await self._launcher.launch(server_path)
        except DlsClientError as exc:
            logger.error("DLS activation failed: %s", exc)
            self._ui.show_message(str(exc), Severity.ERROR)
            return None

    async def on_server_initialized(self) -> None:
        logger.info("DLS initialized")

    async def on_server_initialize_failed(self, error: BaseException) -> None:
        logger.error("DLS failed to initialize: %s", error)
        self._ui.show_message(f"DLS failed to initialize: {error}", Severity.ERROR)
