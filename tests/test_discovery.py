"""
Tests for hierarchy.discovery module.

Tests fragment discovery including:
- Extension filtering (case-insensitive)
- Disabled file exclusion
- Lexicographic ordering
- Non-recursive listing
"""

from __future__ import annotations

import pytest

from hierarchy.discovery import get_files, matches_filter
from hierarchy.exceptions import DiscoveryError, MergeError


class TestMatchesFilter:
    """Tests for single file name matching."""

    @pytest.mark.parametrize(
        "name",
        ["defaults.json", "defaults.yml", "one.yaml", "UPPER.YAML", "Mixed.Json"],
    )
    def test_accepted_names(self, name):
        """Test that allowed extensions match in any case."""
        assert matches_filter(name)

    @pytest.mark.parametrize(
        "name",
        ["fail.txt", "fail.yaml.disabled", "notes.md", "README", ".gitkeep", "x.yaml.DISABLED"],
    )
    def test_rejected_names(self, name):
        """Test that other extensions and disabled files do not match."""
        assert not matches_filter(name)

    def test_custom_filter(self):
        """Test a filter restricted to JSON."""
        assert matches_filter("a.json", (".json",))
        assert not matches_filter("a.yaml", (".json",))


class TestGetFiles:
    """Tests for listing fragment files."""

    def test_default_directory(self, testdata):
        """Test that fail.txt and fail.yaml.disabled are never returned."""
        result = get_files(testdata / "default")

        assert result == [
            testdata / "default" / "defaults.json",
            testdata / "default" / "defaults.yml",
        ]

    def test_yaml_directory(self, testdata):
        """Test mixed .yaml and .yml files."""
        result = get_files(testdata / "yaml")

        assert result == [testdata / "yaml" / "one.yaml", testdata / "yaml" / "two.yml"]

    def test_empty_directory(self, testdata):
        """Test that a directory without fragments yields nothing."""
        assert get_files(testdata / "empty") == []

    def test_subdirectories_ignored(self, testdata):
        """Test that result/expected.yaml below test1 is not picked up."""
        result = get_files(testdata / "test1")

        assert result == [testdata / "test1" / "local.yaml"]

    def test_directory_named_like_fragment_ignored(self, tmp_test_dir):
        """Test that only regular files are returned."""
        (tmp_test_dir / "nested.yaml").mkdir()
        (tmp_test_dir / "real.yaml").write_text("a: 1\n")

        assert get_files(tmp_test_dir) == [tmp_test_dir / "real.yaml"]

    def test_sorted_by_name(self, tmp_test_dir):
        """Test lexicographic order regardless of creation order."""
        for name in ["c.yaml", "a.json", "b.yml", "B.yaml"]:
            (tmp_test_dir / name).write_text("{}\n")

        result = [p.name for p in get_files(tmp_test_dir)]

        assert result == ["B.yaml", "a.json", "b.yml", "c.yaml"]

    def test_deterministic(self, testdata):
        """Test that repeated listings are identical."""
        assert get_files(testdata / "default") == get_files(testdata / "default")

    def test_custom_filter(self, testdata):
        """Test that the filter restricts the result."""
        result = get_files(testdata / "default", (".yml",))

        assert result == [testdata / "default" / "defaults.yml"]

    def test_missing_directory_raises(self, tmp_test_dir):
        """Test that listing a missing directory raises DiscoveryError."""
        with pytest.raises(DiscoveryError) as exc_info:
            get_files(tmp_test_dir / "absent")

        assert isinstance(exc_info.value, MergeError)
