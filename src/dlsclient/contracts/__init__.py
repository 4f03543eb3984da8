"""Contract types shared across dlsclient modules."""

from dlsclient.contracts.config import BootstrapConfig
from dlsclient.contracts.exceptions import (
    ConfigError,
    DlsClientError,
    InstallFailedError,
    LaunchError,
    ProtocolViolationError,
    ToolchainMissingError,
)
from dlsclient.contracts.install import (
    InstallPhase,
    InstallProgressEvent,
    ProgressCleared,
    ProgressHandle,
    Severity,
    ToolchainProbe,
)
from dlsclient.contracts.ui import EditorUI, NullEditorUI

__all__ = [
    "BootstrapConfig",
    "ConfigError",
    "DlsClientError",
    "EditorUI",
    "InstallFailedError",
    "InstallPhase",
    "InstallProgressEvent",
    "LaunchError",
    "NullEditorUI",
    "ProgressCleared",
    "ProgressHandle",
    "ProtocolViolationError",
    "Severity",
    "ToolchainMissingError",
    "ToolchainProbe",
]
