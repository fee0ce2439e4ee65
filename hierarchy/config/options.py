# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Resolved options for a merge run.

The CLI (or a programmatic caller) builds a single MergeConfig and passes it
into the resolver and merger. The object is frozen so nothing downstream can
change the options halfway through a run.

Extension Filter:
    Fragments are selected by file extension. The filter is a tuple of
    lower-case extensions with a leading dot; comparison against file names
    is case-insensitive. normalize_filter() accepts the loose forms users
    type on the command line ("json", ".YML", "yaml ").
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from hierarchy.exceptions import ConfigError

DEFAULT_HIERARCHY_FILE = "hierarchy.lst"
DEFAULT_OUTPUT_FILE = "output.yaml"
DEFAULT_FILE_FILTER: tuple[str, ...] = (".json", ".yml", ".yaml")


def normalize_filter(values: str | Iterable[str]) -> tuple[str, ...]:
    """Normalize user supplied extensions into a filter tuple.

    Args:
        values: Comma-separated string or iterable of extensions. Entries may
            omit the leading dot and use any case.

    Returns:
        Tuple of unique lower-case extensions with a leading dot, in the
        order first given.

    Raises:
        ConfigError: If no usable extension remains.

    Example:
        >>> normalize_filter("json, .YML")
        ('.json', '.yml')
    """
    if isinstance(values, str):
        values = values.split(",")

    result: list[str] = []
    for raw in values:
        ext = raw.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext not in result:
            result.append(ext)

    if not result:
        raise ConfigError("File filter must contain at least one extension")
    return tuple(result)


@dataclass(frozen=True)
class MergeConfig:
    """Options for one hierarchy merge.

    Attributes:
        hierarchy_file: Path to the hierarchy specification file.
        base_path: Root used to resolve relative directory entries.
        output_file: Destination of the merged YAML document.
        file_filter: Accepted fragment extensions (see normalize_filter).
        fail_missing: If True, a missing hierarchy directory aborts the run.
            If False it is skipped.
        verbose: Show progress and high-level status updates.
        debug: Show detailed per-file output (implies verbose).
    """

    hierarchy_file: Path
    base_path: Path
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    file_filter: tuple[str, ...] = field(default=DEFAULT_FILE_FILTER)
    fail_missing: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "hierarchy_file", Path(self.hierarchy_file))
        object.__setattr__(self, "base_path", Path(self.base_path))
        object.__setattr__(self, "output_file", Path(self.output_file))
        object.__setattr__(self, "file_filter", normalize_filter(self.file_filter))
