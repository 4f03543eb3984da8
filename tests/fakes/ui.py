"""Recording EditorUI fake."""

from __future__ import annotations

from typing import Any

from dlsclient.contracts.install import InstallProgressEvent, ProgressHandle, Severity
from dlsclient.contracts.ui import EditorUI


class RecordingEditorUI(EditorUI):
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def set_status(self, text: str) -> None:
        self.calls.append(("status", text))

    def report_progress(self, handle: ProgressHandle, event: InstallProgressEvent) -> None:
        self.calls.append(("progress", handle.id, event))

    def clear_progress(self, handle: ProgressHandle) -> None:
        self.calls.append(("clear", handle.id))

    def show_message(self, text: str, severity: Severity) -> None:
        self.calls.append(("message", text, severity))

    def of_kind(self, kind: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == kind]
