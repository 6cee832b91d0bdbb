"""
Viila Core: Constants and Type Definitions

This module provides system-wide constants, error codes, item kinds and the
failure reasons attached to the typed errors.
"""
from enum import Enum, IntEnum
from typing import TypeAlias

# Version information
VIILA_VERSION = "1.0.0"

# Path syntax
PATH_SEPARATOR = "/"
PARENT_REFERENCE = "../"
CURRENT_SEGMENT = "."
HOME_PREFIX = "~"
HIDDEN_PREFIX = "."
EXTENSION_SEPARATOR = "."


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for Viila operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or folder doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Destination already exists
    DEPENDENCY_ERROR = 5  # Missing dependency
    INTERNAL_ERROR = 6  # Bug in Viila
    TIMEOUT = 7  # Operation timed out
    RATE_LIMITED = 8  # Too many operations
    DEGRADED = 9  # Running with reduced functionality


# Type aliases for clarity
PathSpec: TypeAlias = str
CanonicalPath: TypeAlias = str
FileContent: TypeAlias = bytes


class ItemKind(Enum):
    """Kind tag of a file system item, fixed at construction."""

    FILE = "file"
    FOLDER = "folder"

    def __str__(self) -> str:
        return self.value.capitalize()


class PathErrorReason(Enum):
    """Why a path could not be turned into an item."""

    EMPTY = "empty"
    INVALID = "invalid"


class OperationFailure(Enum):
    """Item operations that can fail against the backend."""

    RENAME = "rename"
    MOVE = "move"
    COPY = "copy"
    DELETE = "delete"


class FileFailure(Enum):
    """File content operations that can fail."""

    WRITE = "write"
    READ = "read"


class FolderFailure(Enum):
    """Folder operations that can fail."""

    CREATE = "create"


class WellKnownFolder(Enum):
    """Host folders a backend may be able to locate."""

    HOME = "home"
    TEMPORARY = "temporary"
    CURRENT = "current"
    DOCUMENTS = "documents"
    LIBRARY = "library"


# Configuration keys
class ConfigKey:
    """Configuration key constants (dot-separated, under the ``viila`` root)."""

    ROOT = "viila"

    LOGGING = "logging"
    LOGGING_LEVEL = "viila.logging.level"
    LOGGING_FILE = "viila.logging.file"

    PATHS = "paths"
    PATH_HOME = "viila.paths.home"
    PATH_TEMPORARY = "viila.paths.temporary"
    PATH_DOCUMENTS = "viila.paths.documents"
    PATH_LIBRARY = "viila.paths.library"


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.LOGGING: {
            "level": "WARNING",
            "file": None,
        },
        ConfigKey.PATHS: {
            "home": None,
            "temporary": None,
            "documents": None,
            "library": None,
        },
    }
}
