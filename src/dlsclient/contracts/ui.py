"""Editor UI collaborator interface.

The bootstrapper never renders anything itself. It emits status text,
install progress and user-facing messages; hosts (an editor, the CLI's Rich
progress bar) implement ``EditorUI`` to render feedback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dlsclient.contracts.install import InstallProgressEvent, ProgressHandle, Severity


class EditorUI(ABC):
    """Observer interface for bootstrap feedback.

    Calls arrive in emission order from the bootstrap task. Implementations
    must return promptly; anything slow belongs on the host's own thread.
    """

    @abstractmethod
    def set_status(self, text: str) -> None:
        """Show a short status line for the step that is starting."""
        ...  # pragma: no cover

    @abstractmethod
    def report_progress(self, handle: ProgressHandle, event: InstallProgressEvent) -> None:
        """Update the progress widget correlated with *handle*."""
        ...  # pragma: no cover

    @abstractmethod
    def clear_progress(self, handle: ProgressHandle) -> None:
        """Reset the progress widget correlated with *handle*."""
        ...  # pragma: no cover

    @abstractmethod
    def show_message(self, text: str, severity: Severity) -> None:
        """Surface a message to the user."""
        ...  # pragma: no cover


class NullEditorUI(EditorUI):
    """No-op implementation used when no feedback is requested."""

    def set_status(self, text: str) -> None:
        pass

    def report_progress(self, handle: ProgressHandle, event: InstallProgressEvent) -> None:
        pass

    def clear_progress(self, handle: ProgressHandle) -> None:
        pass

    def show_message(self, text: str, severity: Severity) -> None:
        pass
