"""Server install: progress parsing, locking and the dub bootstrap sequence."""

from .bootstrapper import ServerBootstrapper
from .lock import InstallLock
from .progress import InstallProgressParser

__all__ = ["InstallLock", "InstallProgressParser", "ServerBootstrapper"]
