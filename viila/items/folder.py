"""
Viila Items: Folder.

A ``Folder`` owns no child list: every lookup and sequence queries the
backend again, so results always reflect what is on storage at call time.
"""

from typing import Callable, Optional, Union

from viila.backend.base import StorageBackend
from viila.core.constants import PATH_SEPARATOR, ItemKind, PathErrorReason
from viila.core.errors import BackendError, FileError, FolderError, PathError
from viila.items.file import File
from viila.items.item import Item, default_backend, logger
from viila.items.sequence import FileSystemSequence

Contents = Union[bytes, str]


class Folder(Item):
    """A folder stored by a backend."""

    KIND = ItemKind.FOLDER

    def __init__(self, path: str = "", backend: Optional[StorageBackend] = None):
        """
        Args:
            path: Path spec of an existing folder; empty for the working directory
            backend: Storage backend (a ``LocalBackend`` if None)

        Raises:
            PathError: If no folder exists at the path
        """
        backend = backend if backend is not None else default_backend()

        if not path:
            path = backend.current_directory()
        if not path.endswith(PATH_SEPARATOR):
            path += PATH_SEPARATOR

        super().__init__(path, ItemKind.FOLDER, backend)

    @classmethod
    def current(cls) -> "Folder":
        """The working directory of the local file system."""
        from viila.file_system import FileSystem

        return FileSystem().current_folder

    @classmethod
    def home(cls) -> "Folder":
        """The current user's home folder on the local file system."""
        from viila.file_system import FileSystem

        return FileSystem().home_folder

    @classmethod
    def temporary(cls) -> "Folder":
        """The temporary folder of the local file system."""
        from viila.file_system import FileSystem

        return FileSystem().temporary_folder

    # =========================================================================
    # Children
    # =========================================================================

    @property
    def files(self) -> FileSystemSequence[File]:
        """Files directly inside this folder (fresh, non-recursive sequence)."""
        return self.make_file_sequence()

    @property
    def subfolders(self) -> FileSystemSequence["Folder"]:
        """Folders directly inside this folder (fresh, non-recursive sequence)."""
        return self.make_subfolder_sequence()

    def file(self, named: str) -> File:
        """
        Return the file with a given name in this folder.

        Raises:
            PathError: ``invalid`` if there is no such file
        """
        return File(self.path + named, backend=self.backend)

    def file_at(self, path: str) -> File:
        """Return the file at a sub-path relative to this folder."""
        return File(self.path + path, backend=self.backend)

    def contains_file(self, named: str) -> bool:
        try:
            self.file(named)
        except PathError:
            return False
        return True

    def subfolder(self, named: str) -> "Folder":
        """
        Return the subfolder with a given name.

        Raises:
            PathError: ``invalid`` if there is no such folder
        """
        return Folder(self.path + named, backend=self.backend)

    def subfolder_at(self, path: str) -> "Folder":
        """Return the folder at a sub-path relative to this folder."""
        return Folder(self.path + path, backend=self.backend)

    def contains_subfolder(self, named: str) -> bool:
        try:
            self.subfolder(named)
        except PathError:
            return False
        return True

    def make_file_sequence(
        self, recursive: bool = False, include_hidden: bool = False
    ) -> FileSystemSequence[File]:
        """
        Create a sequence of the files contained in this folder.

        Args:
            recursive: Include the files of every subfolder, depth-first
            include_hidden: Include hidden (dot) entries
        """
        return FileSystemSequence(
            self, File, recursive=recursive, include_hidden=include_hidden, backend=self.backend
        )

    def make_subfolder_sequence(
        self, recursive: bool = False, include_hidden: bool = False
    ) -> FileSystemSequence["Folder"]:
        """
        Create a sequence of the subfolders of this folder.

        Args:
            recursive: Include the whole folder tree below this folder, depth-first
            include_hidden: Include hidden (dot) entries
        """
        return FileSystemSequence(
            self, Folder, recursive=recursive, include_hidden=include_hidden, backend=self.backend
        )

    # =========================================================================
    # Creation
    # =========================================================================

    def create_file(self, named: str, contents: Contents = b"", encoding: str = "utf-8") -> File:
        """
        Create a file in this folder, replacing any file with the same name.

        Args:
            named: Name of the file
            contents: Initial bytes, or text encoded with ``encoding``
            encoding: Encoding used when ``contents`` is a string

        Returns:
            The created file

        Raises:
            FileError: ``writeFailed`` if the file could not be created
        """
        if isinstance(contents, str):
            try:
                contents = contents.encode(encoding)
            except (UnicodeEncodeError, LookupError) as e:
                raise FileError.write_failed() from e

        file_path = self.path + named
        try:
            self.backend.create_file(file_path, contents)
        except BackendError as e:
            logger.warning("File creation failed", path=file_path, error=e)
            raise FileError.write_failed() from e

        return File(file_path, backend=self.backend)

    def create_file_if_needed(
        self,
        named: str,
        contents: Union[Contents, Callable[[], Contents]] = b"",
        encoding: str = "utf-8",
    ) -> File:
        """
        Return the file with a given name, creating it if it does not exist.

        The probe and the creation are separate backend calls; an entry
        created by someone else in between is overwritten.

        Args:
            named: Name of the file
            contents: Initial contents, or a callable producing them, used only
                when the file has to be created
            encoding: Encoding used when the contents are a string
        """
        try:
            return self.file(named)
        except PathError as e:
            if e.reason is not PathErrorReason.INVALID:
                raise

        if callable(contents):
            contents = contents()
        return self.create_file(named, contents, encoding)

    def create_subfolder(self, named: str) -> "Folder":
        """
        Create a folder directly inside this one.

        Intermediate folders are not created: ``named`` must be a single
        level below this folder (or below an existing sub-path).

        Raises:
            FolderError: ``creatingFolderFailed`` if the folder could not be created
        """
        subfolder_path = self.path + named
        try:
            self.backend.create_directory(subfolder_path, create_intermediates=False)
            return Folder(subfolder_path, backend=self.backend)
        except (BackendError, PathError) as e:
            logger.warning("Folder creation failed", path=subfolder_path, error=e)
            raise FolderError.creating_folder_failed() from e

    def create_subfolder_if_needed(self, named: str) -> "Folder":
        """Return the subfolder with a given name, creating it if needed."""
        try:
            return self.subfolder(named)
        except PathError as e:
            if e.reason is not PathErrorReason.INVALID:
                raise

        return self.create_subfolder(named)

    # =========================================================================
    # Bulk operations
    # =========================================================================

    def move_contents(self, to: "Folder", include_hidden: bool = False) -> None:
        """
        Move the files and subfolders of this folder into another folder.

        Args:
            to: New parent folder of the contents
            include_hidden: Also move hidden (dot) entries

        Raises:
            OperationError: ``moveFailed`` for the first item that cannot be moved
        """
        with logger.add_context(operation="move_contents", source=self.path):
            for file in self.make_file_sequence(include_hidden=include_hidden):
                file.move(to=to)
            for folder in self.make_subfolder_sequence(include_hidden=include_hidden):
                folder.move(to=to)

    def empty(self, include_hidden: bool = False) -> None:
        """
        Delete the contents of this folder, keeping the folder itself.

        Args:
            include_hidden: Also delete hidden (dot) entries

        Raises:
            OperationError: ``deleteFailed`` for the first item that cannot be deleted
        """
        with logger.add_context(operation="empty", folder=self.path):
            for file in self.make_file_sequence(include_hidden=include_hidden):
                file.delete()
            for folder in self.make_subfolder_sequence(include_hidden=include_hidden):
                folder.delete()

    def copy(self, to: "Folder") -> "Folder":
        """
        Copy this folder and its subtree into another folder.

        Raises:
            OperationError: ``copyFailed`` if the copy cannot be made
        """
        return super().copy(to)
