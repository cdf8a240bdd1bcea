"""API layer for driver-publisher"""

from .exceptions import (
    DriverPublisherError,
    ConfigError,
    FilesystemError,
    ArchiveIOError,
    NothingToPublishError,
    RemoteError,
    UnknownHostError,
    AuthError,
    RemoteUpdateError,
    PublishCancelledError,
)
from .packer import Packer, pack
from .publisher import Publisher, PublishTask, publish

__all__ = [
    # Main classes
    "Packer",
    "Publisher",
    "PublishTask",

    # Convenience functions
    "pack",
    "publish",

    # Exceptions
    "DriverPublisherError",
    "ConfigError",
    "FilesystemError",
    "ArchiveIOError",
    "NothingToPublishError",
    "RemoteError",
    "UnknownHostError",
    "AuthError",
    "RemoteUpdateError",
    "PublishCancelledError",
]
