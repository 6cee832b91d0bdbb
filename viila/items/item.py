"""
Viila Items: Base Item.

An ``Item`` is a handle to a file or folder identified by its canonical
absolute path. Folder paths always end with the separator; file paths never
do. Handles hold no storage resources: discarding one has no effect on disk,
and only ``rename``, ``move`` and ``delete`` change the underlying entry.
"""

from datetime import datetime
from functools import cached_property
from typing import TYPE_CHECKING, Optional

from viila.backend.base import StorageBackend
from viila.core.constants import EXTENSION_SEPARATOR, PATH_SEPARATOR, ItemKind
from viila.core.errors import BackendError, OperationError, PathError
from viila.core.path_resolver import ensure_trailing_separator, last_segment, parent_path
from viila.core.validators import validate_item_name
from viila.infrastructure.logger import get_logger

if TYPE_CHECKING:
    from viila.items.folder import Folder

logger = get_logger("viila.items")


def default_backend() -> StorageBackend:
    from viila.backend.local import LocalBackend

    return LocalBackend()


class Item:
    """A file or folder stored by a backend.

    Two items are equal when they have the same kind and canonical path,
    however they were specified.

    Attributes:
        kind: ``ItemKind.FILE`` or ``ItemKind.FOLDER``, fixed at construction
        backend: Storage backend shared with every item derived from this one
    """

    KIND: ItemKind

    def __init__(self, path: str, kind: ItemKind, backend: StorageBackend):
        """
        Resolve ``path`` and bind the item to the entry found there.

        Args:
            path: Path spec (absolute, ``~``-relative or relative)
            kind: Kind the entry must have
            backend: Storage backend to use

        Raises:
            PathError: ``empty`` for a blank spec, ``invalid`` when no entry
                of the expected kind exists at the resolved path
        """
        if not path:
            raise PathError.empty()

        resolved = backend.absolute_path(path)
        if kind is ItemKind.FOLDER:
            resolved = ensure_trailing_separator(resolved)
        if backend.probe_kind(resolved) is not kind:
            raise PathError.invalid(resolved)

        self._bind(resolved, kind, backend)

    def _bind(self, path: str, kind: ItemKind, backend: StorageBackend) -> None:
        self.kind = kind
        self.backend = backend
        self._path = path
        self._name = last_segment(path)

    @classmethod
    def _existing(cls, path: str, backend: StorageBackend) -> "Item":
        """Build a handle for a canonical path already known to hold ``cls.KIND``."""
        item = cls.__new__(cls)
        item._bind(path, cls.KIND, backend)
        return item

    @property
    def path(self) -> str:
        """Canonical absolute path."""
        return self._path

    @property
    def name(self) -> str:
        """Final path segment, including any extension."""
        return self._name

    @property
    def extension(self) -> Optional[str]:
        """Text after the last ``.`` of the name, or None.

        A leading dot (hidden entries such as ``.profile``) does not start an
        extension.
        """
        index = self._name.rfind(EXTENSION_SEPARATOR)
        if index <= 0 or index == len(self._name) - 1:
            return None
        return self._name[index + 1:]

    @property
    def name_excluding_extension(self) -> str:
        extension = self.extension
        if extension is None:
            return self._name
        return self._name[: -len(extension) - 1]

    @cached_property
    def modification_date(self) -> datetime:
        """Last modification time, loaded on first access and then kept."""
        return self.backend.modification_date(self._path)

    @property
    def parent(self) -> Optional["Folder"]:
        """The folder containing this item, or None for the root folder."""
        from viila.items.folder import Folder

        path = parent_path(self._path)
        if path is None:
            return None

        try:
            return Folder(path, backend=self.backend)
        except PathError:
            return None

    @property
    def description(self) -> str:
        return f"{self.kind}(name: {self._name}, path: {self._path})"

    def __repr__(self) -> str:
        return self.description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.kind is other.kind and self._path == other._path

    __hash__ = None  # handles are mutable: rename and move change the path

    def _child_path(self, folder: "Folder", name: str) -> str:
        path = folder.path + name
        if self.kind is ItemKind.FOLDER:
            path += PATH_SEPARATOR
        return path

    def rename(self, new_name: str, keep_extension: bool = True) -> None:
        """
        Rename the item within its parent folder.

        Args:
            new_name: New name for the item
            keep_extension: Append the current extension to ``new_name``
                unless it already ends with it

        Raises:
            OperationError: ``renameFailed`` for the root folder, an invalid
                name, or when the backend move fails
        """
        parent = self.parent
        if parent is None or not validate_item_name(new_name):
            raise OperationError.rename_failed(self)

        extension = self.extension
        if keep_extension and extension is not None:
            suffix = EXTENSION_SEPARATOR + extension
            if not new_name.endswith(suffix):
                new_name += suffix

        new_path = self._child_path(parent, new_name)

        try:
            self.backend.move_item(self._path, new_path)
        except BackendError as e:
            logger.warning("Rename failed", path=self._path, new_name=new_name, error=e)
            raise OperationError.rename_failed(self) from e

        logger.debug("Renamed item", old_path=self._path, new_path=new_path)
        self._name = new_name
        self._path = new_path

    def move(self, to: "Folder") -> None:
        """
        Move this item into another folder, keeping its name.

        Raises:
            OperationError: ``moveFailed`` when the backend move fails
        """
        new_path = self._child_path(to, self._name)

        try:
            self.backend.move_item(self._path, new_path)
        except BackendError as e:
            logger.warning("Move failed", path=self._path, destination=to.path, error=e)
            raise OperationError.move_failed(self) from e

        logger.debug("Moved item", old_path=self._path, new_path=new_path)
        self._path = new_path

    def copy(self, to: "Folder") -> "Item":
        """
        Copy this item (a folder with its whole subtree) into another folder.

        Returns:
            Handle of the same type for the copy

        Raises:
            OperationError: ``copyFailed`` when the copy cannot be made
        """
        new_path = self._child_path(to, self._name)

        try:
            self.backend.copy_item(self._path, new_path)
            copied = type(self)(new_path, backend=self.backend)
        except (BackendError, PathError) as e:
            logger.warning("Copy failed", path=self._path, destination=to.path, error=e)
            raise OperationError.copy_failed(self) from e

        logger.debug("Copied item", source=self._path, destination=new_path)
        return copied

    def delete(self) -> None:
        """
        Delete the item from storage; a folder is deleted with its contents.

        Raises:
            OperationError: ``deleteFailed`` when the backend cannot remove it
        """
        try:
            self.backend.remove_item(self._path)
        except BackendError as e:
            logger.warning("Delete failed", path=self._path, error=e)
            raise OperationError.delete_failed(self) from e

        logger.debug("Deleted item", path=self._path)
