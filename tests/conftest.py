"""Shared test fixtures.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import os
from typing import Dict, Set, Tuple

import pytest

from shardcache.cache.cache import CacheConfig, FileCache
from shardcache.store.backend import FileSystem


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFileSystem(FileSystem):
    """Filesystem keeping files in a dict, stamped by a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.files: Dict[str, Tuple[bytes, float]] = {}
        self.dirs: Set[str] = set()
        self.fail_writes = False
        self.fail_reads = False

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs

    def is_file(self, path: str) -> bool:
        return path in self.files

    def mtime(self, path: str) -> float:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path][1]

    def read_bytes(self, path: str) -> bytes:
        if self.fail_reads:
            raise PermissionError(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path][0]

    def write_bytes_locked(self, path: str, data: bytes) -> None:
        if self.fail_writes:
            raise OSError(28, "No space left on device")
        self.files[path] = (data, self.clock())

    def makedirs(self, path: str, mode: int) -> None:
        while path and path not in self.dirs:
            self.dirs.add(path)
            path = os.path.dirname(path)

    def touch(self, path: str, mtime: float) -> None:
        data = self.files[path][0] if path in self.files else b""
        self.files[path] = (data, mtime)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_fs(clock):
    return FakeFileSystem(clock)


@pytest.fixture
def fake_cache(fake_fs, clock):
    return FileCache(CacheConfig(root="/cache"), filesystem=fake_fs, clock=clock)


@pytest.fixture
def disk_cache(tmp_path):
    return FileCache(
        CacheConfig(root=str(tmp_path / "cache"), lock_dir=str(tmp_path / "locks"))
    )
