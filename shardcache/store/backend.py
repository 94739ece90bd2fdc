"""ShardCache Filesystem Backend - Abstract Storage Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

# Returns the current time as epoch seconds.
Clock = Callable[[], float]


class FileSystem(ABC):
    """Abstract filesystem used by the cache.

    Implementations provide different storage strategies:
    - LocalFileSystem: Real disk with advisory write locks
    - In tests, a fake keeping files and mtimes in a dict

    Paths are plain strings. Implementations raise ``OSError``
    (``FileNotFoundError`` for missing files) and never retry.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if anything exists at a path, directories included.

        Args:
            path: File or directory path

        Returns:
            True if path exists
        """
        pass

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Check if a regular file exists.

        Args:
            path: File path

        Returns:
            True if a regular file exists at path
        """
        pass

    @abstractmethod
    def mtime(self, path: str) -> float:
        """Get modification time.

        Args:
            path: File path

        Returns:
            Modification time as epoch seconds
        """
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read whole file content.

        Args:
            path: File path

        Returns:
            File content
        """
        pass

    @abstractmethod
    def write_bytes_locked(self, path: str, data: bytes) -> None:
        """Replace file content while holding an exclusive write lock.

        The lock covers this single file and only lasts for the write.

        Args:
            path: File path
            data: New content
        """
        pass

    @abstractmethod
    def makedirs(self, path: str, mode: int) -> None:
        """Create a directory and its parents.

        An existing directory is not an error.

        Args:
            path: Directory path
            mode: Permission mode for created directories
        """
        pass


__all__ = ["FileSystem", "Clock"]
