"""Remote clients for publishing drivers and scripts"""

from .base import RemoteClient
from .cloudshell import CloudShellClient
from .filesystem import FilesystemRemote
from .factory import RemoteClientFactory

__all__ = [
    "RemoteClient",
    "CloudShellClient",
    "FilesystemRemote",
    "RemoteClientFactory",
]
