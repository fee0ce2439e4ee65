"""
Pytest configuration and shared fixtures for hierarchy tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
import shutil
from typing import Any

import pytest
import yaml

from hierarchy.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Restore the silent global logger after every test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def testdata(fixtures_dir: Path, tmp_test_dir: Path) -> Path:
    """
    Provide a private copy of the fixture hierarchy tree.

    Layout:
        default/  defaults.json, defaults.yml, fail.txt, fail.yaml.disabled
        yaml/     one.yaml, two.yml
        json/     settings.json
        empty/    (no fragments)
        test1/    hierarchy.lst, local.yaml, result/expected.yaml
        test2-with-env/       hierarchy.lst using ${JSON}
        test2-with-env-fail/  hierarchy.lst using an unset variable
    """
    target = tmp_test_dir / "testdata"
    shutil.copytree(fixtures_dir / "testdata", target)
    return target


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("conf/app.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def create_json_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary JSON files.

    Usage:
        json_path = create_json_file("conf/app.json", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _create


@pytest.fixture
def create_hierarchy_file(tmp_test_dir: Path):
    """
    Factory fixture for writing a hierarchy file from a list of lines.

    Usage:
        hierarchy_path = create_hierarchy_file(["../default", "."])
    """

    def _create(lines: list[str], filename: str = "hierarchy.lst") -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _create
