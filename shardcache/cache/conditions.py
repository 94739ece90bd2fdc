"""ShardCache Conditions - Read-Time Freshness Rules.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Supported condition kinds:
- ``max-age`` / ``maxage``: entry is at most N seconds old
- ``younger-than`` / ``youngerthan``: entry is not older than one or more
  reference files; remote references (``http://``, ``s3://``...) are skipped
"""

from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Iterable, Mapping, Optional, Union

from shardcache.errors import UnsupportedConditionError
from shardcache.store.backend import Clock, FileSystem

logger = logging.getLogger(__name__)

MAX_AGE = ("max-age", "maxage")
YOUNGER_THAN = ("younger-than", "youngerthan")

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")
FILE_SCHEME = "file://"

PathRef = Union[str, "os.PathLike[str]"]


def is_remote(path: PathRef) -> bool:
    """Check if a path uses a non-local URI scheme.

    Args:
        path: Path or URI

    Returns:
        True for ``scheme://`` paths whose scheme is not ``file``
    """
    match = _SCHEME_RE.match(os.fspath(path))
    if match:
        return match.group(1).lower() != "file"
    return False


class ConditionEvaluator:
    """Decides whether an existing cache file satisfies read conditions.

    Conditions are checked in the order given and all of them must pass.
    Evaluation stops at the first failing condition.

    Example:
        evaluator = ConditionEvaluator(LocalFileSystem())
        evaluator.check(path, {"max-age": 3600, "younger-than": "config.yml"})
    """

    def __init__(self, filesystem: FileSystem, clock: Optional[Clock] = None):
        """Initialize evaluator.

        Args:
            filesystem: Filesystem used for mtime lookups
            clock: Current time source, defaults to time.time
        """
        self._fs = filesystem
        self._clock = clock or time.time

    def check(self, path: str, conditions: Optional[Mapping[str, Any]] = None) -> bool:
        """Check all conditions against a cache file.

        The file must already be known to exist.

        Args:
            path: Physical path of the cache file
            conditions: Mapping of condition kind to value

        Returns:
            True if every condition passes

        Raises:
            UnsupportedConditionError: For an unknown condition kind
        """
        if not conditions:
            return True

        for kind, value in conditions.items():
            if kind in MAX_AGE:
                passed = self._check_max_age(path, value)
            elif kind in YOUNGER_THAN:
                passed = self._check_younger_than(path, value)
            else:
                raise UnsupportedConditionError(kind)

            if not passed:
                logger.debug(f"Condition {kind}={value!r} failed for {path}")
                return False

        return True

    def _check_max_age(self, path: str, max_age: float) -> bool:
        # An age exactly equal to the limit still passes.
        age = self._clock() - self._fs.mtime(path)
        return age <= float(max_age)

    def _check_younger_than(self, path: str, references: Union[PathRef, Iterable[PathRef]]) -> bool:
        if isinstance(references, (str, os.PathLike)):
            references = [references]

        cached_mtime = self._fs.mtime(path)
        for reference in references:
            reference = os.fspath(reference)
            if is_remote(reference):
                continue
            if reference[:len(FILE_SCHEME)].lower() == FILE_SCHEME:
                reference = reference[len(FILE_SCHEME):]
            if not self._fs.exists(reference):
                return False
            if cached_mtime < self._fs.mtime(reference):
                return False

        return True


__all__ = ["ConditionEvaluator", "is_remote", "MAX_AGE", "YOUNGER_THAN"]
