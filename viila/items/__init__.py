"""Viila item model: files, folders and lazy traversal sequences."""

from .item import Item
from .file import File
from .folder import Folder
from .sequence import FileSystemSequence

__all__ = ["Item", "File", "Folder", "FileSystemSequence"]
