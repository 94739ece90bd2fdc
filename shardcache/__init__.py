"""ShardCache - Sharded Filesystem Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

A persistent cache of named byte blobs with:
- Sharded directory layout (report.json -> r/e/p/o/r/report.json)
- Read conditions (max-age, younger-than)
- Per-entry exclusive write locks
- Injectable filesystem and clock

Architecture:
    ┌───────────────────────────────────────────────┐
    │                  FileCache                    │
    │        exists / get / set / write             │
    ├───────────────────────┬───────────────────────┤
    │     PathResolver      │  ConditionEvaluator   │
    │   sharded layout      │  max-age/younger-than │
    ├───────────────────────┴───────────────────────┤
    │        FileSystem (LocalFileSystem)           │
    └───────────────────────────────────────────────┘

Example Usage:
    from shardcache import FileCache, CacheConfig

    cache = FileCache(CacheConfig(root="/var/cache/myapp"))
    cache.set("report.json", b"{}")

    # Serve only if written during the last hour
    data = cache.get("report.json", {"max-age": 3600})

    # Serve only if newer than the files it was built from
    data = cache.get("report.json", {"younger-than": ["a.csv", "b.csv"]})
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from shardcache.errors import (
    CacheError,
    CacheReadError,
    UnsupportedConditionError,
)
from shardcache.cache.cache import (
    FileCache,
    CacheConfig,
    CacheStats,
    default_root,
    get_default_cache,
)
from shardcache.cache.conditions import ConditionEvaluator, is_remote
from shardcache.store.backend import FileSystem
from shardcache.store.file import LocalFileSystem
from shardcache.store.paths import PathResolver

__all__ = [
    # Cache
    "FileCache",
    "CacheConfig",
    "CacheStats",
    "default_root",
    "get_default_cache",
    "ConditionEvaluator",
    "is_remote",
    # Storage
    "FileSystem",
    "LocalFileSystem",
    "PathResolver",
    # Errors
    "CacheError",
    "CacheReadError",
    "UnsupportedConditionError",
]
