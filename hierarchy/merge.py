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

"""Fragment parsing and deep merging.

Every fragment found in the resolved hierarchy is parsed and merged into a
single accumulator document, directory by directory and file by file. The
accumulator is written out as YAML once everything has been merged.

Merge Behavior:
    The merge has "last wins" semantics:

    - **Dicts**: Recursively merged (keys from the later fragment override)
    - **Lists**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten (strings, numbers, booleans, null)
    - **Type changes**: The later value replaces the earlier one

    Because of this, merging is order sensitive: [A, B] and [B, A] give
    different results whenever A and B set the same key.

Parsing:
    - ``.json`` files are parsed with the json module
    - Every other accepted extension (``.yml``, ``.yaml``) with yaml.safe_load
    - An empty document counts as an empty mapping
    - A YAML fragment holds exactly one document; ``---`` separated
      multi-document files are rejected
    - A top-level document that is not a mapping is an error

Output:
    The merged document is written with sorted keys and block style, so the
    same inputs always produce byte-identical output. YAML anchors from the
    fragments are expanded; the output contains no anchors or aliases.

Error Handling:
    - FragmentParseError: invalid syntax, unreadable file, or non-mapping
      top-level document. No output is written.
    - OutputWriteError: the output file cannot be created or written.
"""

from __future__ import annotations

from collections.abc import Iterable
import copy
import json
from pathlib import Path
from typing import Any

import yaml

from hierarchy.config import DEFAULT_FILE_FILTER
from hierarchy.discovery import get_files
from hierarchy.exceptions import FragmentParseError, OutputWriteError
from hierarchy.logging import get_global_logger
from hierarchy.results import MergeResult

__all__ = [
    "deep_merge",
    "dump_document",
    "load_fragment",
    "merge_hierarchy",
    "merge_files_in_hierarchy",
    "write_document",
]

JSON_EXTENSIONS = (".json",)


# -------------------------------
# Merge logic
# -------------------------------


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``overlay`` into ``base`` with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    ``base`` is mutated in place and returned. Mappings taken from ``overlay``
    are rebuilt node by node and other values are copied, so the result never
    shares nodes with the overlay or with itself (YAML aliases included).
    """
    for k, v in overlay.items():
        if isinstance(v, dict):
            if not isinstance(base.get(k), dict):
                base[k] = {}
            deep_merge(base[k], v)
        else:
            base[k] = copy.deepcopy(v)
    return base


# -------------------------------
# Parsing
# -------------------------------


def load_fragment(path: Path) -> dict[str, Any]:
    """Parse a fragment file into a mapping.

    Raises:
        FragmentParseError: On read errors, syntax errors, or when the
            top-level document is not a mapping.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in JSON_EXTENSIONS:
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except json.JSONDecodeError as err:
        raise FragmentParseError(f"Error parsing JSON: {path}: {err}") from err
    except yaml.YAMLError as err:
        raise FragmentParseError(f"Error parsing YAML: {path}: {err}") from err
    except (OSError, UnicodeDecodeError) as err:
        raise FragmentParseError(f"Failed to read fragment {path}: {err}") from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FragmentParseError(
            f"Top-level document must be a mapping, got {type(data).__name__}: {path}"
        )
    return data


# -------------------------------
# Output
# -------------------------------


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes shared nodes out in full instead of as aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def dump_document(document: dict[str, Any]) -> str:
    """Serialize a merged document to deterministic block-style YAML.

    Anchors and aliases are never emitted; repeated values are expanded.
    """
    return yaml.dump(
        document,
        Dumper=_NoAliasDumper,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )


def write_document(document: dict[str, Any], output_file: Path) -> None:
    """Write a merged document, creating or truncating the output file.

    Raises:
        OutputWriteError: If the file (or its parent directory) cannot be
            written.
    """
    output_file = Path(output_file)
    try:
        text = dump_document(document)
    except yaml.YAMLError as err:
        raise OutputWriteError(
            f"Failed to serialize merged document: {err}"
        ) from err

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as err:
        raise OutputWriteError(
            f"Failed to write output file {output_file}: {err}"
        ) from err


# -------------------------------
# Public API
# -------------------------------


def merge_hierarchy(
    hierarchy: Iterable[Path],
    file_filter: Iterable[str] = DEFAULT_FILE_FILTER,
) -> tuple[dict[str, Any], list[Path]]:
    """Deep-merge every fragment of the hierarchy into one document.

    Directories are processed in the given order and files in name order;
    a directory listed twice is merged twice.

    Returns:
        The merged document and the fragment files merged, in order.

    Raises:
        DiscoveryError: If a directory cannot be listed.
        FragmentParseError: If any fragment is malformed.
    """
    logger = get_global_logger()
    file_filter = tuple(file_filter)

    merged: dict[str, Any] = {}
    merged_files: list[Path] = []

    for directory in hierarchy:
        for path in get_files(directory, file_filter):
            logger.verbose("MERGE", f"Merging: {path}")
            fragment = load_fragment(path)
            if fragment:
                keys = ", ".join(str(k) for k in fragment)
                logger.debug("MERGE", f"Keys from {path.name}: {keys}")
            deep_merge(merged, fragment)
            merged_files.append(path)

    return merged, merged_files


def merge_files_in_hierarchy(
    hierarchy: Iterable[Path],
    file_filter: Iterable[str] = DEFAULT_FILE_FILTER,
    output_file: Path = Path("output.yaml"),
) -> MergeResult:
    """Merge every fragment in the hierarchy and write the result.

    Args:
        hierarchy: Directories in merge order (last wins).
        file_filter: Accepted fragment extensions.
        output_file: Destination of the merged YAML document.

    Returns:
        MergeResult describing what was merged.

    Raises:
        DiscoveryError: If a directory cannot be listed.
        FragmentParseError: If any fragment is malformed. Nothing is written.
        OutputWriteError: If the output cannot be written.
    """
    logger = get_global_logger()
    directories = list(hierarchy)

    merged, merged_files = merge_hierarchy(directories, file_filter)
    logger.verbose(
        "MERGE",
        f"Merged {len(merged_files)} file(s) from {len(directories)} directory(ies)",
    )

    write_document(merged, output_file)
    logger.verbose("OUTPUT", f"Wrote merged document: {output_file}")

    return MergeResult(
        output_file=Path(output_file),
        directories=directories,
        files=merged_files,
        top_level_keys=sorted(str(k) for k in merged),
    )
