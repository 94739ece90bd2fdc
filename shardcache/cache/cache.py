"""ShardCache Cache - Filesystem Cache Implementation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Union

from shardcache.cache.conditions import ConditionEvaluator
from shardcache.errors import CacheReadError
from shardcache.store.backend import Clock, FileSystem
from shardcache.store.file import LocalFileSystem
from shardcache.store.paths import (
    DEFAULT_DIRECTORY_MODE,
    DEFAULT_PREFIX_SIZE,
    PathResolver,
)

logger = logging.getLogger(__name__)

Contents = Union[bytes, str]


def default_root() -> str:
    """Get the default cache root.

    A ``cache`` directory next to the installed ``shardcache`` package.
    """
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(os.path.dirname(package_dir), "cache")


@dataclass
class CacheConfig:
    """Cache configuration.

    Attributes:
        root: Cache root directory, None for the default location
        prefix_size: Number of one-character shard levels
        directory_mode: Mode for created shard directories
        lock_dir: Directory for write lock files, None for a temp subdirectory
    """

    root: Optional[str] = None
    prefix_size: int = DEFAULT_PREFIX_SIZE
    directory_mode: int = DEFAULT_DIRECTORY_MODE
    lock_dir: Optional[str] = None


@dataclass
class CacheStats:
    """Cache statistics.

    Attributes:
        hits: Reads that returned content
        misses: Reads of absent or stale entries
        sets: Successful writes
        errors: Failed reads and writes
        last_error: Message of the most recent error
        last_error_at: When the most recent error happened
    """

    hits: int = 0
    misses: int = 0
    sets: int = 0
    errors: int = 0
    last_error: Optional[str] = None
    last_error_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def record_error(self, error: str) -> None:
        """Record an error."""
        self.errors += 1
        self.last_error = error
        self.last_error_at = datetime.now()

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.sets = 0
        self.errors = 0
        self.last_error = None
        self.last_error_at = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "errors": self.errors,
            "last_error": self.last_error,
            "hit_rate": self.hit_rate,
        }


class FileCache:
    """Filesystem-backed cache of named byte blobs.

    Entries live under a sharded directory tree rooted at the cache root.
    Reads can carry conditions deciding whether a stored entry is still
    fresh enough to serve. Nothing is kept in memory and nothing is ever
    evicted.

    Example:
        cache = FileCache(CacheConfig(root="/var/cache/app"))

        cache.set("report.json", b"{}")
        data = cache.get("report.json", {"max-age": 3600})

        # Stale when settings.yml changed after the entry was written
        cache.exists("report.json", {"younger-than": "settings.yml"})
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        filesystem: Optional[FileSystem] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize cache.

        Args:
            config: Cache configuration
            filesystem: Filesystem implementation, defaults to local disk
            clock: Current time source, defaults to time.time
        """
        self.config = config or CacheConfig()
        self._fs = filesystem or LocalFileSystem(self.config.lock_dir)
        self._evaluator = ConditionEvaluator(self._fs, clock)

        self._resolver: Optional[PathResolver] = None
        self._lock = threading.Lock()
        self._stats = CacheStats()

        if self.config.root is not None:
            self.set_root(self.config.root)

    @property
    def root(self) -> str:
        """Cache root, resolved to the default on first use."""
        return self.resolver.root

    @property
    def resolver(self) -> PathResolver:
        """Path resolver for the current root."""
        with self._lock:
            if self._resolver is None:
                root = default_root()
                self._resolver = self._make_resolver(root)
                logger.debug(f"Cache root defaulted to {root}")
            return self._resolver

    def set_root(self, root: Union[str, "os.PathLike[str]"]) -> "FileCache":
        """Override the cache root.

        Args:
            root: New cache root directory

        Returns:
            This cache, for chaining
        """
        root = os.path.abspath(os.fspath(root))
        with self._lock:
            self._resolver = self._make_resolver(root)
        logger.debug(f"Cache root set to {root}")
        return self

    def _make_resolver(self, root: str) -> PathResolver:
        return PathResolver(
            root,
            prefix_size=self.config.prefix_size,
            directory_mode=self.config.directory_mode,
            filesystem=self._fs,
        )

    def path(self, name: str) -> str:
        """Get the physical path of an entry without creating anything.

        Args:
            name: Entry name

        Returns:
            Absolute file path
        """
        return self.resolver.resolve(name)

    def exists(self, name: str, conditions: Optional[Mapping[str, Any]] = None) -> bool:
        """Check if an entry exists and satisfies conditions.

        Args:
            name: Entry name
            conditions: Optional read conditions

        Returns:
            True if the entry is present and fresh

        Raises:
            UnsupportedConditionError: For an unknown condition kind
            CacheReadError: If the entry metadata cannot be read
        """
        path = self.path(name)
        if not self._fs.is_file(path):
            return False

        try:
            return self._evaluator.check(path, conditions)
        except FileNotFoundError:
            # Entry vanished between the existence check and the stat.
            return False
        except OSError as e:
            self._record_error(f"Error checking {name}: {e}")
            raise CacheReadError(name, path, e) from e

    def get(self, name: str, conditions: Optional[Mapping[str, Any]] = None) -> Optional[bytes]:
        """Get entry content if it exists and satisfies conditions.

        Args:
            name: Entry name
            conditions: Optional read conditions

        Returns:
            Stored bytes, or None when absent or stale

        Raises:
            UnsupportedConditionError: For an unknown condition kind
            CacheReadError: If the entry exists but cannot be read
        """
        if not self.exists(name, conditions):
            self._record_miss(name)
            return None

        path = self.path(name)
        try:
            data = self._fs.read_bytes(path)
        except FileNotFoundError:
            self._record_miss(name)
            return None
        except OSError as e:
            self._record_error(f"Error reading {name}: {e}")
            raise CacheReadError(name, path, e) from e

        with self._lock:
            self._stats.hits += 1
        logger.debug(f"Cache hit: {name}")
        return data

    def set(self, name: str, contents: Contents = b"") -> bool:
        """Store entry content, replacing any previous content.

        Args:
            name: Entry name
            contents: Bytes to store, str is encoded as UTF-8

        Returns:
            True if successful, False for an invalid name or a failed write
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        try:
            path = self.resolver.resolve(name, create_dirs=True)
            self._fs.write_bytes_locked(path, contents)
        except (OSError, ValueError) as e:
            self._record_error(f"Error writing {name}: {e}")
            return False

        with self._lock:
            self._stats.sets += 1
        logger.debug(f"Cached {name} ({len(contents)} bytes)")
        return True

    def write(self, name: str, contents: Contents = b"") -> bool:
        """Alias for set()."""
        return self.set(name, contents)

    def get_or_set(
        self,
        name: str,
        default_factory: Callable[[], Contents],
        conditions: Optional[Mapping[str, Any]] = None,
    ) -> bytes:
        """Get entry content or store the result of a factory.

        The factory runs when the entry is absent or fails the conditions.
        Its result is returned even if storing it fails.

        Args:
            name: Entry name
            default_factory: Callable producing fresh content
            conditions: Optional read conditions

        Returns:
            Cached or freshly produced bytes
        """
        data = self.get(name, conditions)
        if data is not None:
            return data

        value = default_factory()
        if isinstance(value, str):
            value = value.encode("utf-8")
        self.set(name, value)
        return value

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._lock:
            self._stats.reset()

    def _record_miss(self, name: str) -> None:
        with self._lock:
            self._stats.misses += 1
        logger.debug(f"Cache miss: {name}")

    def _record_error(self, message: str) -> None:
        logger.error(message)
        with self._lock:
            self._stats.record_error(message)

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __repr__(self) -> str:
        root = self._resolver.root if self._resolver is not None else None
        return f"FileCache(root={root}, prefix_size={self.config.prefix_size})"


_default_cache: Optional[FileCache] = None
_default_lock = threading.Lock()


def get_default_cache() -> FileCache:
    """Get the shared process-wide cache.

    Created on first call with the default configuration.
    """
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = FileCache()
        return _default_cache


__all__ = [
    "FileCache",
    "CacheConfig",
    "CacheStats",
    "default_root",
    "get_default_cache",
]
