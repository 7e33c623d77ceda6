from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FileErrorKind(str, Enum):
    """Closed set of reasons a save or load can fail."""

    NOT_FOUND = "not_found"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    SERIALIZATION_ERROR = "serialization_error"


class FileManagementError(Exception):
    """Base error for filekeeper."""


class InvalidArgumentError(FileManagementError, ValueError):
    """Raised when a caller breaks a precondition (e.g. saving without a storage location).

    Raised before any storage access; never classified as a FileOperationError.
    """


class FileOperationError(FileManagementError):
    """Raised when reading or writing a storage location fails."""

    def __init__(
        self,
        kind: FileErrorKind,
        writing: bool,
        location: Optional[str],
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> None:
        self.kind = FileErrorKind(kind)
        self.writing = writing
        self.location = location
        self.cause = cause
        super().__init__(message or _describe(self.kind, writing, location))

    @classmethod
    def from_os_error(cls, exc: OSError, *, writing: bool, location: Optional[str]) -> "FileOperationError":
        return cls(classify_os_error(exc), writing, location, exc)

    @classmethod
    def serialization(cls, exc: BaseException, *, writing: bool, location: Optional[str]) -> "FileOperationError":
        return cls(FileErrorKind.SERIALIZATION_ERROR, writing, location, exc)

    def __repr__(self) -> str:
        return (
            f"FileOperationError(kind={self.kind.name}, writing={self.writing}, "
            f"location={self.location!r})"
        )


def classify_os_error(exc: BaseException) -> FileErrorKind:
    """Map a low-level storage failure onto the taxonomy.

    Missing files and missing directories are NOT_FOUND; every other I/O failure
    (access denied, locked file, disk full, transport faults) is
    INSUFFICIENT_PERMISSIONS.
    """
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return FileErrorKind.NOT_FOUND
    return FileErrorKind.INSUFFICIENT_PERMISSIONS


def _describe(kind: FileErrorKind, writing: bool, location: Optional[str]) -> str:
    action = "writing to" if writing else "reading"
    if kind is FileErrorKind.NOT_FOUND:
        reason = "File or directory not found."
    elif kind is FileErrorKind.INSUFFICIENT_PERMISSIONS:
        reason = "Insufficient permissions to access the file."
    else:
        reason = f"Failed to {'serialize' if writing else 'deserialize'} the object."
    where = f" ({location})" if location else ""
    return f"An error occurred while {action} the file{where}: {reason}"


@dataclass
class FileResult:
    """Outcome of a save or load for callers that match on values instead of catching."""

    success: bool
    value: Any = None
    error: Optional[FileOperationError] = None

    @classmethod
    def ok(cls, value: Any = None) -> "FileResult":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: FileOperationError) -> "FileResult":
        return cls(success=False, error=error)

    @property
    def kind(self) -> Optional[FileErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the value, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


__all__ = [
    "FileErrorKind",
    "FileManagementError",
    "InvalidArgumentError",
    "FileOperationError",
    "FileResult",
    "classify_os_error",
]
