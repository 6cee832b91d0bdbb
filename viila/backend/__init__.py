"""Viila storage backends.

``StorageBackend`` defines the primitive operations the item model relies
on; ``LocalBackend`` implements them for the host file system.
"""

from .base import StorageBackend
from .local import LocalBackend

__all__ = ["StorageBackend", "LocalBackend"]
