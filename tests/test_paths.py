"""Tests for PathResolver.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import os
import stat

import pytest

from shardcache.store.paths import PathResolver


class TestShardChain:
    """Tests for shard directory derivation."""

    def test_long_name_uses_full_depth(self):
        """Test names longer than the prefix size."""
        resolver = PathResolver("/cache")

        assert resolver.shard_chain("helloworld.txt") == ["h", "e", "l", "l", "o"]

    def test_short_name_uses_available_characters(self):
        """Test names shorter than the prefix size."""
        resolver = PathResolver("/cache")

        assert resolver.shard_chain("ab.json") == ["a", "b"]

    def test_name_without_extension(self):
        """Test that the whole name is the prefix segment."""
        resolver = PathResolver("/cache")

        assert resolver.shard_chain("abc") == ["a", "b", "c"]
        assert resolver.shard_chain("abcdefgh") == ["a", "b", "c", "d", "e"]

    def test_only_first_dot_counts(self):
        """Test that the depth stops at the first dot."""
        resolver = PathResolver("/cache")

        assert resolver.shard_chain("a.b.c.d.e.f") == ["a"]

    def test_leading_dot_has_no_shards(self):
        """Test names starting with a dot."""
        resolver = PathResolver("/cache")

        assert resolver.shard_chain(".hidden") == []
        assert resolver.resolve(".hidden") == os.path.join("/cache", ".hidden")

    def test_custom_prefix_size(self):
        """Test non-default shard depth."""
        resolver = PathResolver("/cache", prefix_size=2)

        assert resolver.shard_chain("report.json") == ["r", "e"]

    def test_zero_prefix_size(self):
        """Test a flat layout."""
        resolver = PathResolver("/cache", prefix_size=0)

        assert resolver.resolve("report.json") == os.path.join("/cache", "report.json")

    def test_negative_prefix_size_rejected(self):
        """Test invalid configuration."""
        with pytest.raises(ValueError):
            PathResolver("/cache", prefix_size=-1)

    def test_empty_name_rejected(self):
        """Test that an empty name has no path."""
        with pytest.raises(ValueError):
            PathResolver("/cache").resolve("")


class TestResolve:
    """Tests for physical path resolution."""

    def test_layout(self):
        """Test the on-disk layout."""
        resolver = PathResolver("/cache")

        path = resolver.resolve("report.json")

        assert path == os.path.join("/cache", "r", "e", "p", "o", "r", "report.json")

    def test_resolve_has_no_side_effects(self, tmp_path):
        """Test that plain resolution creates nothing."""
        resolver = PathResolver(str(tmp_path))

        resolver.resolve("report.json")

        assert list(tmp_path.iterdir()) == []

    def test_create_dirs(self, tmp_path):
        """Test shard directory creation."""
        resolver = PathResolver(str(tmp_path))

        path = resolver.resolve("report.json", create_dirs=True)

        assert os.path.isdir(os.path.dirname(path))
        assert not os.path.exists(path)

    def test_create_dirs_is_idempotent(self, tmp_path):
        """Test that existing directories are tolerated."""
        resolver = PathResolver(str(tmp_path))

        first = resolver.resolve("report.json", create_dirs=True)
        second = resolver.resolve("report.json", create_dirs=True)

        assert first == second

    def test_directory_mode(self, tmp_path):
        """Test the permission mode of created directories."""
        old_umask = os.umask(0)
        try:
            resolver = PathResolver(str(tmp_path), directory_mode=0o750)
            path = resolver.resolve("xy.bin", create_dirs=True)
        finally:
            os.umask(old_umask)

        mode = stat.S_IMODE(os.stat(os.path.dirname(path)).st_mode)
        assert mode == 0o750

    def test_create_dirs_propagates_other_errors(self, tmp_path):
        """Test that a file blocking the shard path is an error."""
        (tmp_path / "r").write_bytes(b"")
        resolver = PathResolver(str(tmp_path))

        with pytest.raises(OSError):
            resolver.resolve("report.json", create_dirs=True)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
