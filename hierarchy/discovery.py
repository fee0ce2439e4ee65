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

"""Fragment file discovery.

Lists the fragment files of a single hierarchy directory. Only immediate
regular files are considered; sub-directories are ignored, which is why
test fixtures and expected results can live below a hierarchy directory
without being merged.

A file is selected when:
    - its extension (case-insensitive) is in the filter, and
    - its name does not end in ``.disabled``

Files are returned sorted by name so merges are reproducible across runs
and platforms.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from hierarchy.config import DEFAULT_FILE_FILTER
from hierarchy.exceptions import DiscoveryError
from hierarchy.logging import get_global_logger

__all__ = ["DISABLED_SUFFIX", "get_files", "matches_filter"]

DISABLED_SUFFIX = ".disabled"


def matches_filter(name: str, file_filter: Iterable[str] = DEFAULT_FILE_FILTER) -> bool:
    """Return True if a file name is a mergeable fragment.

    Example:
        >>> matches_filter("defaults.YML")
        True
        >>> matches_filter("fail.yaml.disabled")
        False
    """
    lowered = name.lower()
    if lowered.endswith(DISABLED_SUFFIX):
        return False
    return Path(lowered).suffix in tuple(file_filter)


def get_files(
    directory: Path, file_filter: Iterable[str] = DEFAULT_FILE_FILTER
) -> list[Path]:
    """List the fragment files of a directory.

    Args:
        directory: Hierarchy directory to scan (non-recursive).
        file_filter: Accepted extensions, lower-case with a leading dot.

    Returns:
        ``directory / name`` for every matching regular file, sorted by name.

    Raises:
        DiscoveryError: If the directory cannot be listed.
    """
    logger = get_global_logger()
    directory = Path(directory)
    file_filter = tuple(file_filter)

    try:
        entries = list(directory.iterdir())
    except OSError as err:
        raise DiscoveryError(f"Failed to list directory {directory}: {err}") from err

    files = []
    for entry in sorted(entries, key=lambda p: p.name):
        if not entry.is_file():
            continue
        if not matches_filter(entry.name, file_filter):
            logger.debug("DISCOVERY", f"Ignoring {entry}")
            continue
        files.append(entry)

    logger.verbose("DISCOVERY", f"Found {len(files)} file(s) in {directory}")
    return files
