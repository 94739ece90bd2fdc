"""Cache module - Core caching functionality.

This module provides the main cache interface and read conditions.
"""

from shardcache.cache.conditions import ConditionEvaluator, is_remote
from shardcache.cache.cache import (
    FileCache,
    CacheConfig,
    CacheStats,
    default_root,
    get_default_cache,
)

__all__ = [
    "ConditionEvaluator",
    "is_remote",
    "FileCache",
    "CacheConfig",
    "CacheStats",
    "default_root",
    "get_default_cache",
]
