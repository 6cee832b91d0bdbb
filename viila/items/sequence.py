"""
Viila Items: Traversal Sequence.

``FileSystemSequence`` lazily enumerates the files (or the subfolders) of a
folder, optionally through the whole tree below it. Enumeration is
single-pass: a sequence that has been iterated is exhausted, and a fresh
sequence re-scans storage from scratch.

Traversal order:
- Entries of a folder are visited in sorted-name order
- Hidden entries (leading ``.``) are skipped, subtree included, unless
  ``include_hidden`` is set
- When recursive, a folder's own entries come first, then each of its
  subfolders is traversed completely, in sorted order (depth-first)

Only the folders on the current path are held in memory, each with its
pending names. Folders that vanish mid-traversal list as empty.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, Generic, Iterator, List, Optional, Type, TypeVar

from viila.backend.base import StorageBackend
from viila.core.constants import HIDDEN_PREFIX, PATH_SEPARATOR, ItemKind
from viila.infrastructure.logger import get_logger
from viila.items.item import Item

if TYPE_CHECKING:
    from viila.items.folder import Folder

logger = get_logger("viila.sequence")

T = TypeVar("T", bound=Item)


@dataclass
class _Frame:
    """Traversal state of one folder on the current path."""

    path: str
    names: Optional[List[str]] = None
    index: int = 0
    subfolders: Deque[str] = field(default_factory=deque)


class FileSystemSequence(Generic[T]):
    """Lazy, single-pass, depth-first enumeration of files or folders.

    Example:
        >>> for file in folder.make_file_sequence(recursive=True):
        ...     print(file.path)
    """

    def __init__(
        self,
        folder: "Folder",
        item_type: Type[T],
        recursive: bool = False,
        include_hidden: bool = False,
        backend: Optional[StorageBackend] = None,
    ):
        """
        Args:
            folder: Root folder of the traversal
            item_type: ``File`` or ``Folder``, the type of the yielded items
            recursive: Descend into every subfolder of the tree
            include_hidden: Also yield, and descend into, hidden entries
            backend: Storage backend (the root folder's if None)
        """
        self.folder = folder
        self.item_type = item_type
        self.recursive = recursive
        self.include_hidden = include_hidden
        self.backend = backend if backend is not None else folder.backend
        self._stack: List[_Frame] = [_Frame(folder.path)]

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        while self._stack:
            frame = self._stack[-1]

            if frame.names is None:
                logger.debug("Entering folder", path=frame.path)
                frame.names = self.backend.list_names(frame.path)

            if frame.index >= len(frame.names):
                if frame.subfolders:
                    self._stack.append(_Frame(frame.subfolders.popleft()))
                else:
                    self._stack.pop()
                continue

            name = frame.names[frame.index]
            frame.index += 1

            item = self._visit(frame, name)
            if item is not None:
                return item

        raise StopIteration

    def _visit(self, frame: _Frame, name: str) -> Optional[T]:
        if not self.include_hidden and name.startswith(HIDDEN_PREFIX):
            return None

        path = frame.path + name
        kind = self.backend.probe_kind(path)
        if kind is None:
            # removed since the folder was listed
            return None

        if kind is ItemKind.FOLDER:
            path += PATH_SEPARATOR
            if self.recursive:
                frame.subfolders.append(path)

        if kind is not self.item_type.KIND:
            return None
        return self.item_type._existing(path, self.backend)

    def names(self) -> List[str]:
        """Consume the sequence and return the names of its items."""
        return [item.name for item in self]

    def count(self) -> int:
        """Consume the sequence and return how many items it held."""
        return sum(1 for _ in self)

    def first(self) -> Optional[T]:
        """Return the next item, or None when the sequence is exhausted."""
        return next(self, None)

    def last(self) -> Optional[T]:
        """Consume the sequence and return its final item, or None."""
        item = None
        for item in self:
            pass
        return item

    def __repr__(self) -> str:
        return (
            f"FileSystemSequence({self.item_type.__name__}, folder={self.folder.path!r}, "
            f"recursive={self.recursive}, include_hidden={self.include_hidden})"
        )
