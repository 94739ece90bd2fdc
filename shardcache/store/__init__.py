"""Store module - Filesystem access and entry layout."""

from shardcache.store.backend import FileSystem, Clock
from shardcache.store.file import LocalFileSystem, default_lock_dir
from shardcache.store.paths import (
    PathResolver,
    DEFAULT_PREFIX_SIZE,
    DEFAULT_DIRECTORY_MODE,
)

__all__ = [
    "FileSystem",
    "Clock",
    "LocalFileSystem",
    "default_lock_dir",
    "PathResolver",
    "DEFAULT_PREFIX_SIZE",
    "DEFAULT_DIRECTORY_MODE",
]
