"""Viila - typed, hierarchical access to a file system.

Example:
    >>> from viila import Folder
    >>> for file in Folder("~/projects").make_file_sequence(recursive=True):
    ...     print(file.path)
"""

from viila.core.constants import VIILA_VERSION as __version__
from viila.core.constants import ItemKind
from viila.core.errors import (
    BackendError,
    FileError,
    FolderError,
    OperationError,
    PathError,
    ViilaError,
)
from viila.backend import LocalBackend, StorageBackend
from viila.items import File, FileSystemSequence, Folder, Item
from viila.file_system import FileSystem

__all__ = [
    "__version__",
    "ItemKind",
    "ViilaError",
    "PathError",
    "OperationError",
    "FileError",
    "FolderError",
    "BackendError",
    "StorageBackend",
    "LocalBackend",
    "Item",
    "File",
    "Folder",
    "FileSystemSequence",
    "FileSystem",
]
