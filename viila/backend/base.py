"""
Viila Backends: Storage Backend Interface.

The item model never touches storage directly. Every existence probe,
listing and mutation goes through a ``StorageBackend``, a stateless service
object shared by reference between all items and sequences of a file system.

Failure conventions:
- ``probe_kind`` returns None when nothing exists at a path
- ``list_names`` returns an empty list when the folder cannot be listed
- Every mutating primitive raises ``BackendError``
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from viila.core.constants import ItemKind, WellKnownFolder
from viila.core.path_resolver import PathResolver


class StorageBackend(ABC):
    """Primitive storage operations the item model is composed from."""

    @abstractmethod
    def probe_kind(self, path: str) -> Optional[ItemKind]:
        """Return the kind of the item at ``path``, or None if absent."""

    @abstractmethod
    def list_names(self, directory_path: str) -> List[str]:
        """Return the sorted entry names directly inside ``directory_path``.

        Never raises: a folder that cannot be listed has no entries.
        """

    @abstractmethod
    def create_directory(self, path: str, create_intermediates: bool = False) -> None:
        """Create a directory, optionally with missing intermediate folders."""

    @abstractmethod
    def create_file(self, path: str, contents: bytes = b"") -> None:
        """Create (or truncate) a file holding ``contents``."""

    @abstractmethod
    def remove_item(self, path: str) -> None:
        """Remove a file, or a folder together with its whole subtree."""

    @abstractmethod
    def move_item(self, source: str, destination: str) -> None:
        """Move an item; the destination must not exist yet."""

    @abstractmethod
    def copy_item(self, source: str, destination: str) -> None:
        """Copy a file, or a folder with its whole subtree."""

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Return the contents of the file at ``path``."""

    @abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        """Replace the contents of the file at ``path``."""

    @abstractmethod
    def modification_date(self, path: str) -> datetime:
        """Return the last modification time of an existing item."""

    @abstractmethod
    def home_directory(self) -> str:
        """Return the current user's home directory."""

    @abstractmethod
    def current_directory(self) -> str:
        """Return the working directory."""

    @abstractmethod
    def well_known_directory(self, folder: WellKnownFolder) -> Optional[str]:
        """Return a well-known folder path, or None if the host has none."""

    def absolute_path(self, spec: str) -> str:
        """Resolve a path spec against this backend's folder hierarchy.

        Raises:
            PathError: If the spec is empty or a parent reference is invalid
        """
        return PathResolver(self).resolve(spec)
