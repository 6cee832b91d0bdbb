"""
Viila: File System Root.

``FileSystem`` is only needed to reach well-known folders (home, temporary,
current, documents, library) or to create files and folders by full path
with any missing intermediate folders. Other items are opened directly with
``File`` and ``Folder``.

Example:
    >>> fs = FileSystem()
    >>> notes = fs.create_file_if_needed("~/notes/today.txt", b"")
    >>> notes.parent == fs.home_folder.subfolder("notes")
    True
"""

from typing import Callable, Optional, Union

from viila.backend.base import StorageBackend
from viila.backend.local import LocalBackend
from viila.core.constants import PATH_SEPARATOR, PathErrorReason, WellKnownFolder
from viila.core.errors import FileError, FolderError, PathError, ViilaError
from viila.core.path_resolver import last_segment, parent_path
from viila.infrastructure.logger import get_logger
from viila.items.file import File
from viila.items.folder import Contents, Folder

logger = get_logger("viila.fs")


class FileSystem:
    """Entry point to a storage backend.

    Attributes:
        backend: Backend shared by every item obtained from this file system
    """

    def __init__(self, backend: Optional[StorageBackend] = None):
        """
        Args:
            backend: Storage backend (a ``LocalBackend`` if None)
        """
        self.backend = backend if backend is not None else LocalBackend()

    # =========================================================================
    # Well-known folders
    # =========================================================================

    @property
    def temporary_folder(self) -> Folder:
        """The temporary folder."""
        return Folder(self.backend.well_known_directory(WellKnownFolder.TEMPORARY), backend=self.backend)

    @property
    def home_folder(self) -> Folder:
        """The current user's home folder."""
        return Folder(self.backend.home_directory(), backend=self.backend)

    @property
    def current_folder(self) -> Folder:
        """The working directory."""
        return Folder("", backend=self.backend)

    @property
    def document_folder(self) -> Optional[Folder]:
        """The user's documents folder, when the host has one."""
        return self._optional_folder(WellKnownFolder.DOCUMENTS)

    @property
    def library_folder(self) -> Optional[Folder]:
        """The user's library folder, when the host has one."""
        return self._optional_folder(WellKnownFolder.LIBRARY)

    def _optional_folder(self, folder: WellKnownFolder) -> Optional[Folder]:
        path = self.backend.well_known_directory(folder)
        if path is None:
            return None
        try:
            return Folder(path, backend=self.backend)
        except PathError:
            logger.debug("Well-known folder missing", folder=folder.value, path=path)
            return None

    # =========================================================================
    # Creation by path
    # =========================================================================

    def create_file(self, at: str, contents: Contents = b"") -> File:
        """
        Create a file at a path, creating missing intermediate folders.

        Args:
            at: Path spec of the new file
            contents: Initial bytes or UTF-8 text

        Returns:
            The created file

        Raises:
            PathError: If the path spec cannot be resolved
            FileError: ``writeFailed`` if the file or a parent folder could
                not be created
        """
        path = self.backend.absolute_path(at)

        parent = parent_path(path)
        if parent is None or path.endswith(PATH_SEPARATOR):
            raise FileError.write_failed()

        try:
            return self.create_folder(parent).create_file(last_segment(path), contents)
        except ViilaError as e:
            raise FileError.write_failed() from e

    def create_file_if_needed(
        self, at: str, contents: Union[Contents, Callable[[], Contents]] = b""
    ) -> File:
        """
        Return the file at a path, creating it (and its parents) if needed.

        Args:
            at: Path spec of the file
            contents: Initial contents, or a callable producing them, used only
                when the file has to be created
        """
        try:
            return File(at, backend=self.backend)
        except PathError as e:
            if e.reason is not PathErrorReason.INVALID:
                raise

        if callable(contents):
            contents = contents()
        return self.create_file(at, contents)

    def create_folder(self, at: str) -> Folder:
        """
        Create a folder at a path, creating missing intermediate folders.

        Succeeds without changes when the folder already exists.

        Raises:
            FolderError: ``creatingFolderFailed`` if the folder could not be created
        """
        try:
            path = self.backend.absolute_path(at)
            self.backend.create_directory(path, create_intermediates=True)
            return Folder(path, backend=self.backend)
        except ViilaError as e:
            logger.warning("Folder creation failed", path=at, error=e)
            raise FolderError.creating_folder_failed() from e

    def create_folder_if_needed(self, at: str) -> Folder:
        """Return the folder at a path, creating it (and its parents) if needed."""
        try:
            return Folder(at, backend=self.backend)
        except PathError as e:
            if e.reason is not PathErrorReason.INVALID:
                raise

        return self.create_folder(at)
