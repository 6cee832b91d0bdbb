"""
Viila Items: File.

A ``File`` is obtained from a path, or by asking a folder for a file with a
given name. Contents are read and written through the backend.
"""

from typing import TYPE_CHECKING, Optional

from viila.backend.base import StorageBackend
from viila.core.constants import ItemKind
from viila.core.errors import BackendError, FileError
from viila.items.item import Item, default_backend, logger

if TYPE_CHECKING:
    from viila.items.folder import Folder


class File(Item):
    """A file stored by a backend."""

    KIND = ItemKind.FILE

    def __init__(self, path: str, backend: Optional[StorageBackend] = None):
        """
        Args:
            path: Path spec of an existing file
            backend: Storage backend (a ``LocalBackend`` if None)

        Raises:
            PathError: If the path is empty or no file exists there
        """
        super().__init__(path, ItemKind.FILE, backend if backend is not None else default_backend())

    def read(self) -> bytes:
        """
        Read the contents of the file.

        Raises:
            FileError: ``readFailed`` if the contents cannot be read
        """
        try:
            return self.backend.read_file(self.path)
        except BackendError as e:
            logger.warning("Read failed", path=self.path, error=e)
            raise FileError.read_failed() from e

    def read_as_string(self, encoding: str = "utf-8") -> str:
        """
        Read the contents of the file as text.

        Raises:
            FileError: ``readFailed`` if the contents cannot be read or decoded
        """
        data = self.read()
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise FileError.read_failed() from e

    def read_as_int(self) -> int:
        """
        Read the contents of the file as a decimal integer.

        Raises:
            FileError: ``readFailed`` if the contents are not an integer
        """
        text = self.read_as_string()
        try:
            return int(text)
        except ValueError as e:
            raise FileError.read_failed() from e

    def write(self, data: bytes) -> None:
        """
        Replace the contents of the file.

        Raises:
            FileError: ``writeFailed`` if the file cannot be written
        """
        try:
            self.backend.write_file(self.path, data)
        except BackendError as e:
            logger.warning("Write failed", path=self.path, error=e)
            raise FileError.write_failed() from e

    def write_string(self, string: str, encoding: str = "utf-8") -> None:
        """
        Replace the contents of the file with encoded text.

        Raises:
            FileError: ``writeFailed`` if the text cannot be encoded or written
        """
        try:
            data = string.encode(encoding)
        except (UnicodeEncodeError, LookupError) as e:
            raise FileError.write_failed() from e

        self.write(data)

    def copy(self, to: "Folder") -> "File":
        """
        Copy this file into another folder.

        Raises:
            OperationError: ``copyFailed`` if the copy cannot be made
        """
        return super().copy(to)
