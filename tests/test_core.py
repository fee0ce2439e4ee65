"""
Tests for hierarchy.core module.

End-to-end runs of run_merge against the fixture tree, comparing the
written document with the expected output stored next to each hierarchy.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from hierarchy.config import MergeConfig
from hierarchy.core import run_merge
from hierarchy.exceptions import MissingDirectoryError, UnresolvedVariableError
from hierarchy.logging import get_logger, set_global_logger


class TestRunMerge:
    """Tests for run_merge orchestration."""

    def test_end_to_end(self, testdata):
        """Test the full pipeline against test1/result/expected.yaml."""
        config = MergeConfig(
            hierarchy_file=testdata / "test1" / "hierarchy.lst",
            base_path=testdata / "test1",
            output_file=testdata / "output.yaml",
        )

        result = run_merge(config)

        expected = (testdata / "test1" / "result" / "expected.yaml").read_text()
        assert config.output_file.read_text() == expected
        assert result.output_file == config.output_file
        assert result.directories[-1] == testdata / "test1"
        assert result.top_level_keys == ["app", "database", "logging"]

    def test_end_to_end_environment_variables(self, testdata, monkeypatch):
        """Test ${JSON} resolution against test2-with-env/result/expected.yaml."""
        monkeypatch.setenv("JSON", "json")
        config = MergeConfig(
            hierarchy_file=testdata / "test2-with-env" / "hierarchy.lst",
            base_path=testdata / "test2-with-env",
            output_file=testdata / "output.yaml",
        )

        run_merge(config)

        expected = (testdata / "test2-with-env" / "result" / "expected.yaml").read_text()
        assert config.output_file.read_text() == expected

    def test_idempotent(self, testdata):
        """Test that rerunning on unchanged input is byte-identical."""
        config = MergeConfig(
            hierarchy_file=testdata / "test1" / "hierarchy.lst",
            base_path=testdata / "test1",
            output_file=testdata / "output.yaml",
        )

        run_merge(config)
        first = config.output_file.read_bytes()
        run_merge(config)

        assert config.output_file.read_bytes() == first

    def test_relative_paths(self, testdata, monkeypatch):
        """Test a run driven entirely by relative paths."""
        monkeypatch.chdir(testdata.parent)
        config = MergeConfig(
            hierarchy_file=Path("testdata/test1/hierarchy.lst"),
            base_path=Path("testdata/test1"),
            output_file=Path("output.yaml"),
        )

        result = run_merge(config)

        assert result.directories[0] == Path("testdata/default")
        assert Path("output.yaml").read_text() == Path(
            "testdata/test1/result/expected.yaml"
        ).read_text()

    def test_fail_missing(self, testdata):
        """Test that fail_missing aborts before any output is written."""
        config = MergeConfig(
            hierarchy_file=testdata / "test1" / "hierarchy.lst",
            base_path=testdata / "test1",
            output_file=testdata / "output.yaml",
            fail_missing=True,
        )

        with pytest.raises(MissingDirectoryError):
            run_merge(config)

        assert not config.output_file.exists()

    def test_unset_variable(self, testdata):
        """Test that an unset variable aborts the run."""
        config = MergeConfig(
            hierarchy_file=testdata / "test2-with-env" / "hierarchy.lst",
            base_path=testdata / "test2-with-env",
            output_file=testdata / "output.yaml",
        )

        with pytest.raises(UnresolvedVariableError):
            run_merge(config, environ={})

    def test_verbose_logging(self, testdata, capsys):
        """Test that steps and merge details reach the global logger."""
        set_global_logger(get_logger(verbose=True))
        config = MergeConfig(
            hierarchy_file=testdata / "test1" / "hierarchy.lst",
            base_path=testdata / "test1",
            output_file=testdata / "output.yaml",
        )

        run_merge(config)

        out = capsys.readouterr().out
        assert "[1/2] Resolving hierarchy..." in out
        assert "[HIERARCHY] Skipping missing directory" in out
        assert "[MERGE] Merging:" in out
        assert "[OUTPUT] Wrote merged document" in out

    def test_silent_by_default(self, testdata, capsys):
        """Test that library calls print nothing without a configured logger."""
        config = MergeConfig(
            hierarchy_file=testdata / "test1" / "hierarchy.lst",
            base_path=testdata / "test1",
            output_file=testdata / "output.yaml",
        )

        run_merge(config)

        assert capsys.readouterr().out == ""

    def test_delegates_to_merge_files_in_hierarchy(self, testdata):
        """Test that the merge and write step goes through the merger API."""
        config = MergeConfig(
            hierarchy_file=testdata / "test2-with-env" / "hierarchy.lst",
            base_path=testdata / "test2-with-env",
            output_file=testdata / "output.yaml",
            file_filter=".yaml",
        )

        with patch("hierarchy.core.merge_files_in_hierarchy") as mock_merge:
            result = run_merge(config, environ={"JSON": "json"})

        mock_merge.assert_called_once_with(
            [testdata / "default", testdata / "json"],
            (".yaml",),
            testdata / "output.yaml",
        )
        assert result is mock_merge.return_value
