"""ShardCache Errors - Exception Hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Optional


class CacheError(Exception):
    """Base class for all cache errors."""


class UnsupportedConditionError(CacheError, ValueError):
    """Raised when a read condition kind is not recognized.

    Attributes:
        kind: The unsupported condition kind
    """

    def __init__(self, kind: str):
        super().__init__(f"Cache condition {kind!r} not supported")
        self.kind = kind


class CacheReadError(CacheError, OSError):
    """Raised when an existing entry cannot be read.

    Attributes:
        name: Entry name
        path: Physical path of the entry
    """

    def __init__(self, name: str, path: str, cause: Optional[BaseException] = None):
        message = f"Unable to read cache entry {name!r} at {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.name = name
        self.path = path


__all__ = ["CacheError", "UnsupportedConditionError", "CacheReadError"]
