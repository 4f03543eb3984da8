"""Custom exception hierarchy for dlsclient.

All dlsclient exceptions inherit from :class:`DlsClientError`, making it easy
to catch any activation failure with a single ``except`` clause while still
allowing callers to handle specific failure modes.
"""

from __future__ import annotations


class DlsClientError(Exception):
    """Base exception for all dlsclient errors."""


class ConfigError(DlsClientError):
    """Raised when bootstrap configuration cannot be read or validated."""


class ToolchainMissingError(DlsClientError):
    """Raised when a tool required to build the server is not on the search path.

    Attributes:
        tool: Which tool is missing (``"package-manager"`` or ``"compiler"``).
    """

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(message)


class InstallFailedError(DlsClientError):
    """Raised when an install step fails or yields no usable server binary.

    Attributes:
        step: Name of the failing step (``"remove"``, ``"fetch"``, ``"bootstrap"``).
        returncode: Exit status of the step, when it ran to completion.
    """

    def __init__(self, step: str, message: str, *, returncode: int | None = None) -> None:
        self.step = step
        self.returncode = returncode
        super().__init__(message)


class ProtocolViolationError(InstallFailedError):
    """Raised when the installer's progress stream does not follow the line protocol.

    Attributes:
        line: The offending line, or ``None`` when the stream ended early.
    """

    def __init__(self, message: str, *, line: str | None = None) -> None:
        self.line = line
        super().__init__("bootstrap", message)


class LaunchError(DlsClientError):
    """Raised when the OS refuses to start a process."""
