"""ShardCache Path Resolver - Sharded Entry Layout.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Entries are spread over one-character directories taken from the start of
the entry name. With the default prefix size of 5, ``helloworld.txt`` is
stored as ``h/e/l/l/o/helloworld.txt`` under the cache root.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from shardcache.store.backend import FileSystem
from shardcache.store.file import LocalFileSystem

logger = logging.getLogger(__name__)

DEFAULT_PREFIX_SIZE = 5
DEFAULT_DIRECTORY_MODE = 0o755


class PathResolver:
    """Maps entry names to sharded paths under a root directory.

    Example:
        resolver = PathResolver("/var/cache/app")
        resolver.resolve("report.json")
        # '/var/cache/app/r/e/p/o/r/report.json'
    """

    def __init__(
        self,
        root: str,
        prefix_size: int = DEFAULT_PREFIX_SIZE,
        directory_mode: int = DEFAULT_DIRECTORY_MODE,
        filesystem: Optional[FileSystem] = None,
    ):
        """Initialize resolver.

        Args:
            root: Cache root directory
            prefix_size: Maximum number of shard levels
            directory_mode: Mode for created shard directories
            filesystem: Filesystem used to create directories
        """
        if prefix_size < 0:
            raise ValueError(f"prefix_size must be >= 0, got {prefix_size}")

        self.root = root
        self.prefix_size = prefix_size
        self.directory_mode = directory_mode

        self._fs = filesystem or LocalFileSystem()

    def shard_chain(self, name: str) -> List[str]:
        """Get the shard directory names for an entry.

        Only the part of the name before its first dot counts towards
        the depth, but the characters are taken from the name itself.

        Args:
            name: Entry name

        Returns:
            One single-character segment per level
        """
        if not name:
            raise ValueError("Entry name must not be empty")

        prefix = name.split(".", 1)[0]
        depth = min(len(prefix), self.prefix_size)
        return [name[i] for i in range(depth)]

    def directory(self, name: str) -> str:
        """Get the shard directory holding an entry."""
        return os.path.join(self.root, *self.shard_chain(name))

    def resolve(self, name: str, create_dirs: bool = False) -> str:
        """Resolve an entry name to its physical path.

        Args:
            name: Entry name
            create_dirs: Create the shard directories if missing

        Returns:
            Absolute path of the entry file
        """
        directory = self.directory(name)

        if create_dirs:
            self._fs.makedirs(directory, self.directory_mode)
            logger.debug(f"Ensured shard directory {directory}")

        return os.path.join(directory, name)

    def __repr__(self) -> str:
        return f"PathResolver(root={self.root}, prefix_size={self.prefix_size})"


__all__ = ["PathResolver", "DEFAULT_PREFIX_SIZE", "DEFAULT_DIRECTORY_MODE"]
