"""Exception definitions for driver-publisher API"""

from typing import List, Optional

from ..constants import ErrorCode


class DriverPublisherError(Exception):
    """Base exception for driver-publisher"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(DriverPublisherError):
    """Missing or malformed publish settings"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class FilesystemError(DriverPublisherError):
    """Missing or invalid root/source directory"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.FILESYSTEM_ERROR)
        self.path = path


class ArchiveIOError(DriverPublisherError):
    """Archive could not be written"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, ErrorCode.ARCHIVE_IO_ERROR)
        self.path = path


class NothingToPublishError(DriverPublisherError):
    """Filters left no entries in any target"""

    def __init__(self, message: str = "no items found for publishing"):
        super().__init__(message, ErrorCode.NOTHING_TO_PUBLISH)


class RemoteError(DriverPublisherError):
    """Base class for failures talking to the remote server"""
    pass


class UnknownHostError(RemoteError):
    """Server address could not be resolved"""

    def __init__(self, host: str):
        super().__init__(f"Unknown host: {host}", ErrorCode.UNKNOWN_HOST)
        self.host = host


class AuthError(RemoteError):
    """Server rejected the supplied credentials

    ``target`` names the entry being sent when the session was rejected
    after login; ``applied`` lists the entries accepted before that.
    """

    def __init__(self, message: str, target: Optional[str] = None, applied: Optional[List[str]] = None):
        self.reason = message
        if target:
            message = f"{message} (while updating '{target}')"
        super().__init__(message, ErrorCode.AUTH_FAILED)
        self.target = target
        self.applied = list(applied or [])


class RemoteUpdateError(RemoteError):
    """A driver archive or a single entry was rejected by the remote

    ``applied`` lists the entries that were accepted before the failure;
    they stay applied on the remote.
    """

    def __init__(self, target: str, reason: str, applied: Optional[List[str]] = None):
        super().__init__(f"Failed to update '{target}': {reason}", ErrorCode.REMOTE_UPDATE_FAILED)
        self.target = target
        self.reason = reason
        self.applied = list(applied or [])


class PublishCancelledError(DriverPublisherError):
    """Publish was cancelled; the remote state is unspecified"""

    def __init__(self):
        super().__init__("Publish cancelled, remote state is unspecified", ErrorCode.CANCELLED)
