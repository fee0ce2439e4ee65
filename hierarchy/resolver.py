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

"""Hierarchy file resolution.

A hierarchy file lists the directories to merge, one per line, from the
first applied to the last applied (last wins):

    # organisation wide settings
    ../default

    ../${ENVIRONMENT}
    .

Line Rules:
    - Surrounding whitespace is stripped
    - Empty lines and lines starting with ``#`` are ignored
    - ``${NAME}`` is replaced by the value of environment variable NAME;
      an unset variable is always fatal (UnresolvedVariableError)
    - Relative entries are resolved against the base path and normalized
      lexically, so ``./`` and ``../`` segments collapse
    - Entries that are not existing directories raise MissingDirectoryError
      when fail_missing is set and are skipped otherwise
    - Duplicate entries are kept; the directory is merged again at that
      position

Testing:
    The environment and the directory check are injectable through the
    ``environ`` and ``is_dir`` arguments, so tests do not have to touch the
    real process environment or filesystem.

Example:
    Resolve a hierarchy file:
        ```python
        from pathlib import Path
        from hierarchy.resolver import resolve_hierarchy

        dirs = resolve_hierarchy(
            Path("conf/hierarchy.lst"),
            Path("conf"),
            fail_missing=True,
        )
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import os
from pathlib import Path
import re

from hierarchy.config import MergeConfig
from hierarchy.exceptions import (
    HierarchyFileError,
    MissingDirectoryError,
    UnresolvedVariableError,
)
from hierarchy.logging import get_global_logger

__all__ = [
    "COMMENT_PREFIX",
    "expand_variables",
    "parse_hierarchy_lines",
    "process_hierarchy",
    "resolve_entry",
    "resolve_hierarchy",
]

COMMENT_PREFIX = "#"

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def expand_variables(line: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace every ``${NAME}`` placeholder in a hierarchy line.

    Args:
        line: Hierarchy line, already stripped.
        environ: Mapping to look variables up in. Defaults to os.environ.

    Returns:
        The line with all placeholders substituted. A variable set to an
        empty string is substituted as empty.

    Raises:
        UnresolvedVariableError: If any referenced variable is unset.
    """
    if environ is None:
        environ = os.environ

    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in environ:
            raise UnresolvedVariableError(name, line)
        return environ[name]

    return _PLACEHOLDER.sub(_lookup, line)


def parse_hierarchy_lines(text: str) -> list[str]:
    """Return the meaningful entries of a hierarchy file, in order.

    Blank lines and comment lines are dropped; remaining lines are stripped.
    Placeholders are left untouched.
    """
    entries = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        entries.append(line)
    return entries


def resolve_entry(entry: str, base_path: Path) -> Path:
    """Resolve an expanded hierarchy entry against the base path.

    Absolute entries are kept as-is. Normalization is lexical (no symlink
    resolution), so a relative base path yields a relative result:
    ``testdata/test1`` + ``../default`` gives ``testdata/default``.
    """
    candidate = Path(entry)
    if not candidate.is_absolute():
        candidate = Path(base_path) / candidate
    return Path(os.path.normpath(candidate))


def _read_hierarchy_file(hierarchy_file: Path) -> str:
    try:
        return Path(hierarchy_file).read_text(encoding="utf-8")
    except FileNotFoundError as err:
        raise HierarchyFileError(
            f"Hierarchy file not found: {hierarchy_file}"
        ) from err
    except (OSError, UnicodeDecodeError) as err:
        raise HierarchyFileError(
            f"Failed to read hierarchy file {hierarchy_file}: {err}"
        ) from err


def resolve_hierarchy(
    hierarchy_file: Path,
    base_path: Path,
    fail_missing: bool = False,
    *,
    environ: Mapping[str, str] | None = None,
    is_dir: Callable[[Path], bool] | None = None,
) -> list[Path]:
    """Read a hierarchy file and return the directories to merge.

    Args:
        hierarchy_file: Path to the hierarchy specification.
        base_path: Root for relative entries.
        fail_missing: If True, a missing directory raises; otherwise it is
            skipped. Default is False.
        environ: Environment used for placeholder expansion.
            Defaults to os.environ.
        is_dir: Predicate deciding whether a resolved path is an existing
            directory. Defaults to Path.is_dir.

    Returns:
        Directories in hierarchy-file order, duplicates included.

    Raises:
        HierarchyFileError: If the hierarchy file cannot be read.
        UnresolvedVariableError: If a placeholder names an unset variable.
        MissingDirectoryError: If a directory is missing and fail_missing
            is True.
    """
    logger = get_global_logger()
    if is_dir is None:
        is_dir = Path.is_dir

    text = _read_hierarchy_file(hierarchy_file)
    logger.verbose("HIERARCHY", f"Reading hierarchy file: {hierarchy_file}")

    directories: list[Path] = []
    for entry in parse_hierarchy_lines(text):
        expanded = expand_variables(entry, environ)
        if expanded != entry:
            logger.debug("HIERARCHY", f"Expanded '{entry}' to '{expanded}'")

        directory = resolve_entry(expanded, base_path)
        if not is_dir(directory):
            if fail_missing:
                raise MissingDirectoryError(directory)
            logger.verbose("HIERARCHY", f"Skipping missing directory: {directory}")
            continue

        logger.verbose("HIERARCHY", f"Adding directory: {directory}")
        directories.append(directory)

    logger.verbose("HIERARCHY", f"Resolved {len(directories)} directory(ies)")
    return directories


def process_hierarchy(
    config: MergeConfig,
    *,
    environ: Mapping[str, str] | None = None,
    is_dir: Callable[[Path], bool] | None = None,
) -> list[Path]:
    """Resolve the hierarchy described by a MergeConfig.

    Thin wrapper around resolve_hierarchy() using the config's hierarchy
    file, base path and fail_missing flag.
    """
    return resolve_hierarchy(
        config.hierarchy_file,
        config.base_path,
        config.fail_missing,
        environ=environ,
        is_dir=is_dir,
    )
