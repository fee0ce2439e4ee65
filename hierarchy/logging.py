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

"""Run output for hierarchy.

The resolver, discovery and merge modules never print. They report what
they do to the global logger, which is silent until ``hierarchy.cli``
installs a stdout logger built from ``-v/--verbose`` and ``-d/--debug``.

What each level shows during a merge run:

- step: ``[1/2] Resolving hierarchy...`` and ``[2/2] Merging N
  directory(ies)...``, printed on every CLI run
- verbose (``-v``): one line per decision, tagged by stage:
  ``[VERSION]`` build information at start-up, ``[HIERARCHY]`` directories
  added or skipped, ``[DISCOVERY]`` fragment counts per directory,
  ``[MERGE]`` each fragment merged, ``[OUTPUT]`` the written file and its
  top-level keys
- debug (``-d``, implies ``-v``): placeholder expansions, files ignored by
  the extension filter, and the top-level keys each fragment contributes

Example:
    Watch which directories a hierarchy file resolves to:
        ```python
        from pathlib import Path
        from hierarchy.logging import get_logger, set_global_logger
        from hierarchy.resolver import resolve_hierarchy

        set_global_logger(get_logger(verbose=True))
        resolve_hierarchy(Path("conf/app/hierarchy.lst"), Path("conf/app"))
        # [HIERARCHY] Reading hierarchy file: conf/app/hierarchy.lst
        # [HIERARCHY] Adding directory: conf/default
        # [HIERARCHY] Skipping missing directory: conf/staging
        ```

Note:
    Tests that install a logger restore SilentLogger afterwards (see the
    autouse fixture in tests/conftest.py).
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """Anything the merge pipeline can report progress to."""

    def step(self, step: int, total: int, message: str) -> None:
        """Print a step indicator.

        Args:
            step: Current step number (1-based).
            total: Total number of steps.
            message: Step description.
        """
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Stage tag (e.g., "HIERARCHY", "MERGE").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Stage tag (e.g., "DISCOVERY", "OUTPUT").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Stdout logger used by the CLI; prints ``[PREFIX] message`` lines."""

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")


class SilentLogger:
    """Logger installed by default so library calls print nothing."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a stdout logger with the given verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A DefaultLogger configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger currently used by library functions."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects every library function that does not receive a logger
        explicitly. Tests should restore the silent logger afterwards.
    """
    global _global_logger
    _global_logger = logger
