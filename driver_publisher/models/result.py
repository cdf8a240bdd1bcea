"""Operation result models"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from .manifest import ArchiveHandle
from ..api.exceptions import (
    DriverPublisherError,
    ConfigError,
    FilesystemError,
    ArchiveIOError,
    NothingToPublishError,
    UnknownHostError,
    AuthError,
    RemoteUpdateError,
    PublishCancelledError,
)
from ..constants import ErrorCode, UpdaterKind


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"
    IN_PROGRESS = "in_progress"


class ErrorKind(Enum):
    """Failure classification reported to callers"""
    CONFIG = "config"
    FILESYSTEM = "filesystem"
    IO = "io"
    NOTHING_TO_PUBLISH = "nothing_to_publish"
    UNKNOWN_HOST = "unknown_host"
    AUTH = "auth"
    REMOTE_UPDATE = "remote_update"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"


_ERROR_KINDS = [
    (ConfigError, ErrorKind.CONFIG),
    (FilesystemError, ErrorKind.FILESYSTEM),
    (ArchiveIOError, ErrorKind.IO),
    (NothingToPublishError, ErrorKind.NOTHING_TO_PUBLISH),
    (UnknownHostError, ErrorKind.UNKNOWN_HOST),
    (AuthError, ErrorKind.AUTH),
    (RemoteUpdateError, ErrorKind.REMOTE_UPDATE),
    (PublishCancelledError, ErrorKind.CANCELLED),
]


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception to its error kind"""
    for error_type, kind in _ERROR_KINDS:
        if isinstance(error, error_type):
            return kind
    return ErrorKind.UNEXPECTED


@dataclass
class ErrorDetail:
    """Detailed error information"""

    kind: ErrorKind
    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, error: BaseException) -> 'ErrorDetail':
        """Create from a raised exception"""
        context = {}
        if isinstance(error, RemoteUpdateError):
            context = {"target": error.target, "applied": error.applied}
        elif isinstance(error, AuthError) and error.target:
            context = {"target": error.target, "applied": error.applied}
        elif isinstance(error, UnknownHostError):
            context = {"host": error.host}
        elif isinstance(error, (FilesystemError, ArchiveIOError)) and error.path:
            context = {"path": error.path}

        code = getattr(error, "error_code", None) or ErrorCode.UNEXPECTED
        return cls(
            kind=classify_error(error),
            code=code,
            message=str(error),
            context=context
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


@dataclass
class PublishResult:
    """Outcome of one publish invocation

    Either every required entry was transmitted (success) or the publish
    failed with a classified error. For the per-entry updater,
    ``applied_entries`` may be non-empty on failure: those entries stay
    applied remotely.
    """

    status: OperationStatus = OperationStatus.IN_PROGRESS
    updater_kind: Optional[UpdaterKind] = None
    target: Optional[str] = None
    archive: Optional[ArchiveHandle] = None
    applied_entries: List[str] = field(default_factory=list)
    error: Optional[ErrorDetail] = None
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if operation failed or was cancelled"""
        return self.status in (OperationStatus.FAILED, OperationStatus.CANCELLED)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time is not None:
            return self.end_time - self.start_time
        return None

    def succeed(self) -> 'PublishResult':
        """Mark operation as successful"""
        self.status = OperationStatus.SUCCESS
        self.end_time = time.time()
        return self

    def fail(self, error: BaseException) -> 'PublishResult':
        """Mark operation as failed with the given error"""
        self.error = ErrorDetail.from_exception(error)
        self.exception = error
        if isinstance(error, (RemoteUpdateError, AuthError)):
            self.applied_entries = list(error.applied)

        if self.error.kind == ErrorKind.CANCELLED:
            self.status = OperationStatus.CANCELLED
        else:
            self.status = OperationStatus.FAILED
        self.end_time = time.time()
        return self

    def raise_error(self) -> None:
        """Re-raise the failure, if any"""
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise DriverPublisherError(self.error.message, self.error.code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "status": self.status.value,
            "updater_kind": self.updater_kind.value if self.updater_kind else None,
            "target": self.target,
            "applied_entries": self.applied_entries,
            "duration": self.duration,
        }

        if self.archive:
            data["archive"] = self.archive.to_dict()
        if self.error:
            data["error"] = self.error.to_dict()

        return data
