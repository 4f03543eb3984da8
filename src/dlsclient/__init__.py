"""Public API surface for dlsclient."""

__version__ = "0.3.0"

from dlsclient.client import DLanguageClient
from dlsclient.config import default_config, default_server_path, load_config
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
from dlsclient.install import InstallLock, InstallProgressParser, ServerBootstrapper
from dlsclient.launcher import ServerConnection, ServerLauncher
from dlsclient.locator import PathLocator
from dlsclient.process import CompletedProcess, ProcessRunner, SubprocessHandle

__all__ = [
    "BootstrapConfig",
    "CompletedProcess",
    "ConfigError",
    "DLanguageClient",
    "DlsClientError",
    "EditorUI",
    "InstallFailedError",
    "InstallLock",
    "InstallPhase",
    "InstallProgressEvent",
    "InstallProgressParser",
    "LaunchError",
    "NullEditorUI",
    "PathLocator",
    "ProcessRunner",
    "ProgressCleared",
    "ProgressHandle",
    "ProtocolViolationError",
    "ServerBootstrapper",
    "ServerConnection",
    "ServerLauncher",
    "Severity",
    "SubprocessHandle",
    "ToolchainMissingError",
    "ToolchainProbe",
    "__version__",
    "default_config",
    "default_server_path",
    "load_config",
]
