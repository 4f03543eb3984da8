"""Tests for RichEditorUI and NullEditorUI."""

from __future__ import annotations

import io

from rich.console import Console

from dlsclient.cli.progress.rich import RichEditorUI
from dlsclient.contracts.install import InstallPhase, InstallProgressEvent, ProgressHandle, Severity
from dlsclient.contracts.ui import EditorUI, NullEditorUI


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, force_terminal=False, width=100), buffer


class TestNullEditorUI:
    """NullEditorUI is a no-op implementation."""

    def test_implements_protocol(self) -> None:
        assert issubclass(NullEditorUI, EditorUI)

    def test_calls_are_noops(self) -> None:
        ui = NullEditorUI()
        handle = ProgressHandle()
        ui.set_status("Fetching DLS")
        ui.report_progress(handle, InstallProgressEvent(InstallPhase.INSTALLING, 1, 2))
        ui.clear_progress(handle)
        ui.show_message("hello", Severity.INFO)
        assert handle.cookie is None


class TestRichEditorUI:
    """RichEditorUI drives a Rich progress bar."""

    def test_implements_protocol(self) -> None:
        assert issubclass(RichEditorUI, EditorUI)

    def test_context_manager(self) -> None:
        ui = RichEditorUI(_console()[0])
        with ui as entered:
            assert entered is ui

    def test_progress_reuses_one_task_per_handle(self) -> None:
        with RichEditorUI(_console()[0]) as ui:
            handle = ProgressHandle()
            ui.report_progress(handle, InstallProgressEvent(InstallPhase.INSTALLING, 0, 10))
            task_id = handle.cookie
            ui.report_progress(handle, InstallProgressEvent(InstallPhase.EXTRACTING, 0, 0))
            ui.report_progress(handle, InstallProgressEvent(InstallPhase.INSTALLING, 10, 10))

            assert handle.cookie == task_id
            assert len(ui._progress.tasks) == 1
            assert ui._progress.tasks[0].completed == 10

            ui.clear_progress(handle)

            assert handle.cookie is None
            assert ui._progress.tasks == []

    def test_clear_without_progress_is_noop(self) -> None:
        with RichEditorUI(_console()[0]) as ui:
            ui.clear_progress(ProgressHandle())

    def test_separate_handles_get_separate_tasks(self) -> None:
        with RichEditorUI(_console()[0]) as ui:
            first, second = ProgressHandle(), ProgressHandle()
            ui.report_progress(first, InstallProgressEvent(InstallPhase.INSTALLING, 1, 4))
            ui.report_progress(second, InstallProgressEvent(InstallPhase.INSTALLING, 2, 4))

            assert first.id != second.id
            assert first.cookie != second.cookie

    def test_status_and_messages_are_printed(self) -> None:
        console, buffer = _console()
        with RichEditorUI(console) as ui:
            ui.set_status("Fetching DLS")
            ui.show_message("Dub not found", Severity.ERROR)

        output = buffer.getvalue()
        assert "Fetching DLS" in output
        assert "error: Dub not found" in output
