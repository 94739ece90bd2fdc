"""ShardCache File Store - Local Disk Filesystem.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from typing import Optional

from filelock import FileLock

from shardcache.store.backend import FileSystem

logger = logging.getLogger(__name__)


def default_lock_dir() -> str:
    """Get the default directory for write lock files."""
    return os.path.join(tempfile.gettempdir(), "shardcache-locks")


class LocalFileSystem(FileSystem):
    """Filesystem backed by the local disk.

    Writes are serialized per file with an advisory lock from ``filelock``.
    Lock files live in a separate lock directory, named by a hash of the
    target path, so they never show up among cache entries. Concurrent
    writers of the same entry never interleave. Readers do not take the lock.

    Example:
        fs = LocalFileSystem()
        fs.makedirs("/var/cache/app/r/e", 0o755)
        fs.write_bytes_locked("/var/cache/app/r/e/report.json", b"{}")
    """

    LOCK_SUFFIX = ".lock"

    def __init__(self, lock_dir: Optional[str] = None):
        """Initialize filesystem.

        Args:
            lock_dir: Directory for lock files, defaults to a temp subdirectory
        """
        self.lock_dir = os.path.abspath(lock_dir or default_lock_dir())

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def mtime(self, path: str) -> float:
        return os.stat(path).st_mtime

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_bytes_locked(self, path: str, data: bytes) -> None:
        os.makedirs(self.lock_dir, exist_ok=True)
        with FileLock(self.lock_path(path)):
            with open(path, "wb") as f:
                f.write(data)

    def makedirs(self, path: str, mode: int) -> None:
        # exist_ok also covers another process creating the same directory
        # between our check and our mkdir.
        os.makedirs(path, mode=mode, exist_ok=True)

    def lock_path(self, path: str) -> str:
        """Get the lock file for a path.

        Args:
            path: File path

        Returns:
            Lock file path inside the lock directory
        """
        digest = hashlib.sha256(os.fsencode(os.path.abspath(path))).hexdigest()
        return os.path.join(self.lock_dir, digest + self.LOCK_SUFFIX)

    def __repr__(self) -> str:
        return f"LocalFileSystem(lock_dir={self.lock_dir})"


__all__ = ["LocalFileSystem", "default_lock_dir"]
