# driver_publisher/models/__init__.py
"""Data models for driver-publisher"""

from .settings import PublisherSettings, FileFilter, TargetSpec
from .manifest import ArchiveManifest, ArchiveHandle, FileSource, BufferSource
from .result import PublishResult, ErrorDetail, ErrorKind, OperationStatus, classify_error

__all__ = [
    # Settings models
    "PublisherSettings",
    "FileFilter",
    "TargetSpec",

    # Manifest models
    "ArchiveManifest",
    "ArchiveHandle",
    "FileSource",
    "BufferSource",

    # Result models
    "PublishResult",
    "ErrorDetail",
    "ErrorKind",
    "OperationStatus",
    "classify_error",
]
