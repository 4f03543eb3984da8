"""Rich-based install feedback for the terminal."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from dlsclient.contracts.install import InstallPhase, InstallProgressEvent, ProgressHandle, Severity
from dlsclient.contracts.ui import EditorUI


class RichEditorUI(EditorUI):
    """Live terminal progress bar powered by Rich.

    Use as a context manager so the live display is properly started/stopped::

        with RichEditorUI() as ui:
            path = await ServerBootstrapper(config, ui=ui).resolve_server_path()
    """

    _PHASE_LABELS: ClassVar[dict[InstallPhase, str]] = {
        InstallPhase.EXTRACTING: "[cyan]Extracting[/]",
        InstallPhase.INSTALLING: "[green]Installing DLS[/]",
    }

    _SEVERITY_STYLES: ClassVar[dict[Severity, str]] = {
        Severity.INFO: "blue",
        Severity.WARNING: "yellow",
        Severity.ERROR: "red",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>16}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )

    # -- context manager --------------------------------------------------

    def __enter__(self) -> RichEditorUI:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    # -- EditorUI implementation ------------------------------------------

    def set_status(self, text: str) -> None:
        self._progress.console.print(f"[dim]{text}…[/dim]")

    def report_progress(self, handle: ProgressHandle, event: InstallProgressEvent) -> None:
        label = self._PHASE_LABELS.get(event.phase, str(event.phase))
        # Extract markers carry no quantity; show them as an indeterminate bar.
        total = event.total if event.phase is InstallPhase.INSTALLING else None
        completed = event.current if total is not None else 0
        task_id = handle.cookie
        if not isinstance(task_id, int):
            handle.cookie = self._progress.add_task(label, total=total, completed=completed)
            return
        self._progress.update(RichTaskID(task_id), description=label, total=total, completed=completed)

    def clear_progress(self, handle: ProgressHandle) -> None:
        task_id = handle.cookie
        handle.cookie = None
        if isinstance(task_id, int):
            self._progress.remove_task(RichTaskID(task_id))

    def show_message(self, text: str, severity: Severity) -> None:
        style = self._SEVERITY_STYLES.get(severity, "white")
        self._progress.console.print(f"[{style}]{severity}[/{style}]: {text}")
