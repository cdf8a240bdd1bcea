"""Driver Publisher - package and publish CloudShell drivers and scripts.

Builds deterministic zip archives from a project's driver sources, applying
include/exclude filters and an optional debug descriptor, and publishes them
to a CloudShell server either as one archive or entry by entry.
"""

from .__version__ import __version__, __version_info__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.packer import Packer, pack
from .api.publisher import Publisher, PublishTask, publish

# Data models
from .constants import UpdaterKind, RemoteType
from .models.settings import PublisherSettings, FileFilter, TargetSpec
from .models.manifest import ArchiveManifest, ArchiveHandle
from .models.result import PublishResult, ErrorKind, OperationStatus

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Packer",
    "Publisher",
    "PublishTask",

    # Core API functions
    "pack",
    "publish",

    # Data models
    "UpdaterKind",
    "RemoteType",
    "PublisherSettings",
    "FileFilter",
    "TargetSpec",
    "ArchiveManifest",
    "ArchiveHandle",
    "PublishResult",
    "ErrorKind",
    "OperationStatus",

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
