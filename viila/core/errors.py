"""
Viila Core: Error Types.

Every failure surfaced by Viila is a ``ViilaError`` carrying an ``ErrorCode``.
Backend-specific causes are never exposed beyond exception chaining: callers
see the typed error of the operation they asked for.
"""
from typing import TYPE_CHECKING, Any, Optional

from viila.core.constants import (
    ErrorCode,
    FileFailure,
    FolderFailure,
    OperationFailure,
    PathErrorReason,
)

if TYPE_CHECKING:
    from viila.items.item import Item


class ViilaError(Exception):
    """Base exception for all Viila errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        """Initialize ViilaError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def _payload(self) -> Any:
        return None

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            getattr(self, "reason", None) == getattr(other, "reason", None)
            and self.message == other.message
            and self._payload() == other._payload()
        )

    def __hash__(self) -> int:
        return hash((type(self), getattr(self, "reason", None), self.message))


class PathError(ViilaError):
    """Raised when a path spec is empty or names no item of the expected kind."""

    def __init__(self, reason: PathErrorReason, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        if reason is PathErrorReason.EMPTY:
            super().__init__("Empty path given", ErrorCode.INVALID_INPUT)
        else:
            super().__init__(f"Invalid path given: {path}", ErrorCode.NOT_FOUND)

    @classmethod
    def empty(cls) -> "PathError":
        return cls(PathErrorReason.EMPTY)

    @classmethod
    def invalid(cls, path: str) -> "PathError":
        return cls(PathErrorReason.INVALID, path)

    def _payload(self) -> Any:
        return self.path


class OperationError(ViilaError):
    """Raised when renaming, moving, copying or deleting an item fails.

    Carries the item the operation was run on, in the state it had before the
    failed call.
    """

    def __init__(self, reason: OperationFailure, item: "Item"):
        self.reason = reason
        self.item = item
        super().__init__(f"Failed to {reason.value} item: {item}", ErrorCode.INTERNAL_ERROR)

    @classmethod
    def rename_failed(cls, item: "Item") -> "OperationError":
        return cls(OperationFailure.RENAME, item)

    @classmethod
    def move_failed(cls, item: "Item") -> "OperationError":
        return cls(OperationFailure.MOVE, item)

    @classmethod
    def copy_failed(cls, item: "Item") -> "OperationError":
        return cls(OperationFailure.COPY, item)

    @classmethod
    def delete_failed(cls, item: "Item") -> "OperationError":
        return cls(OperationFailure.DELETE, item)

    def _payload(self) -> Any:
        return self.item


class FileError(ViilaError):
    """Raised when file contents cannot be read or written."""

    _MESSAGES = {
        FileFailure.WRITE: "Failed to write to file",
        FileFailure.READ: "Failed to read file",
    }

    def __init__(self, reason: FileFailure):
        self.reason = reason
        super().__init__(self._MESSAGES[reason], ErrorCode.INTERNAL_ERROR)

    @classmethod
    def write_failed(cls) -> "FileError":
        return cls(FileFailure.WRITE)

    @classmethod
    def read_failed(cls) -> "FileError":
        return cls(FileFailure.READ)


class FolderError(ViilaError):
    """Raised when a folder cannot be created."""

    def __init__(self, reason: FolderFailure = FolderFailure.CREATE):
        self.reason = reason
        super().__init__("Failed to create folder", ErrorCode.INTERNAL_ERROR)

    @classmethod
    def creating_folder_failed(cls) -> "FolderError":
        return cls(FolderFailure.CREATE)


class BackendError(ViilaError):
    """Raised by a storage backend when one of its primitives fails."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        super().__init__(message, error_code)

    @classmethod
    def from_os_error(cls, action: str, path: str, error: OSError) -> "BackendError":
        """Wrap an ``OSError`` raised while performing ``action`` on ``path``."""
        if isinstance(error, FileNotFoundError):
            code = ErrorCode.NOT_FOUND
        elif isinstance(error, PermissionError):
            code = ErrorCode.PERMISSION_DENIED
        elif isinstance(error, FileExistsError):
            code = ErrorCode.CONFLICT
        else:
            code = ErrorCode.INTERNAL_ERROR
        return cls(f"Cannot {action} {path}: {error.strerror or error}", code)


class ValidationError(ViilaError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)
