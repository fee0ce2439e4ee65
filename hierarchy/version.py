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

"""Build information reporting.

BuildInfo is created once at startup and handed to whatever needs to report
it (the ``--version`` flag, the start-of-run log). Branch, revision and
build date are stamped by the packaging pipeline through environment
variables; they are empty for development installs.

Example:
    ```python
    from hierarchy.version import BuildInfo, format_version

    print(format_version(BuildInfo.current()))
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
import platform

from hierarchy.logging import Logger

__all__ = ["BuildInfo", "format_version", "log_version"]

BRANCH_VAR = "HIERARCHY_BUILD_BRANCH"
REVISION_VAR = "HIERARCHY_BUILD_REVISION"
BUILD_DATE_VAR = "HIERARCHY_BUILD_DATE"


@dataclass(frozen=True)
class BuildInfo:
    """Application build information.

    Attributes:
        version: Package version.
        branch: Source branch the build was made from.
        revision: Source revision (commit SHA).
        build_date: When the build was made.
        python_version: Interpreter version running the tool.
    """

    version: str
    branch: str = ""
    revision: str = ""
    build_date: str = ""
    python_version: str = ""

    @classmethod
    def current(cls, environ: Mapping[str, str] | None = None) -> BuildInfo:
        """Collect build information for the running installation."""
        from hierarchy import __version__

        if environ is None:
            environ = os.environ
        return cls(
            version=__version__,
            branch=environ.get(BRANCH_VAR, ""),
            revision=environ.get(REVISION_VAR, ""),
            build_date=environ.get(BUILD_DATE_VAR, ""),
            python_version=platform.python_version(),
        )


def format_version(info: BuildInfo) -> str:
    """Return the one-line version banner."""
    return (
        f"hierarchy, version {info.version} (branch: {info.branch}, "
        f"revision: {info.revision}), build date: {info.build_date}, "
        f"python version: {info.python_version}"
    )


def log_version(info: BuildInfo, logger: Logger) -> None:
    """Write build details to the logger as VERSION lines."""
    logger.verbose("VERSION", f"version: {info.version}")
    logger.verbose("VERSION", f"branch: {info.branch}")
    logger.verbose("VERSION", f"revision: {info.revision}")
    logger.verbose("VERSION", f"build date: {info.build_date}")
    logger.verbose("VERSION", f"python version: {info.python_version}")
