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

"""Exception hierarchy for hierarchy.

This module defines the errors raised while resolving a hierarchy file and
merging its fragments. Every condition listed here is fatal for a run; the
CLI turns any of them into exit code 1.

- ConfigError: The hierarchy specification is broken (missing hierarchy
  file, unset environment variable, missing directory with fail-missing).
- MergeError: Something went wrong while reading fragments or writing the
  merged output.

All exceptions inherit from HierarchyError, allowing callers to catch every
failure with a single except clause.

Example:
    Catching all errors:
        ```python
        from hierarchy.core import run_merge
        from hierarchy.exceptions import HierarchyError

        try:
            result = run_merge(config)
        except HierarchyError as e:
            print(f"Merge failed: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "HierarchyError",
    "ConfigError",
    "HierarchyFileError",
    "UnresolvedVariableError",
    "MissingDirectoryError",
    "MergeError",
    "DiscoveryError",
    "FragmentParseError",
    "OutputWriteError",
]


class HierarchyError(Exception):
    """Base exception for all hierarchy errors."""

    pass


class ConfigError(HierarchyError):
    """Raised when the hierarchy specification itself is unusable.

    This covers the hierarchy file, the placeholders inside it, the
    directories it references, and invalid merge options such as an empty
    extension filter.
    """

    pass


class HierarchyFileError(ConfigError):
    """Raised when the hierarchy file is missing or cannot be read."""

    pass


class UnresolvedVariableError(ConfigError):
    """Raised when a ``${NAME}`` placeholder names an unset variable.

    This is fatal regardless of the fail-missing setting.

    Attributes:
        variable: Name of the missing environment variable.
        line: The hierarchy line containing the placeholder.
    """

    def __init__(self, variable: str, line: str) -> None:
        self.variable = variable
        self.line = line
        super().__init__(
            f"Environment variable '{variable}' referenced in hierarchy line "
            f"'{line}' is not set"
        )


class MissingDirectoryError(ConfigError):
    """Raised for a missing hierarchy directory when fail-missing is enabled.

    Attributes:
        path: The resolved directory path that does not exist.
    """

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"Hierarchy directory not found: {path}")


class MergeError(HierarchyError):
    """Raised for errors while collecting, parsing or writing documents."""

    pass


class DiscoveryError(MergeError):
    """Raised when a hierarchy directory cannot be listed."""

    pass


class FragmentParseError(MergeError):
    """Raised when a fragment file is malformed.

    Malformed means invalid JSON/YAML syntax, or a top-level document that is
    not a mapping.
    """

    pass


class OutputWriteError(MergeError):
    """Raised when the merged document cannot be written."""

    pass
