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

"""Core orchestration for hierarchy.

run_merge() drives a complete run:

1. Resolve the hierarchy file into an ordered list of directories
2. Discover and deep-merge the fragments of each directory, in order, and
   write the merged document as YAML (merge_files_in_hierarchy)

The run is strictly sequential and stops at the first error; nothing is
written unless every fragment parsed.

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from hierarchy.config import MergeConfig
        from hierarchy.core import run_merge

        result = run_merge(
            MergeConfig(
                hierarchy_file=Path("conf/hierarchy.lst"),
                base_path=Path("conf"),
                output_file=Path("merged.yaml"),
                fail_missing=True,
            )
        )
        print(f"Merged {len(result.files)} file(s)")
        ```

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

from hierarchy.config import MergeConfig
from hierarchy.logging import get_global_logger
from hierarchy.merge import merge_files_in_hierarchy
from hierarchy.resolver import process_hierarchy
from hierarchy.results import MergeResult

__all__ = ["run_merge"]


def run_merge(
    config: MergeConfig,
    *,
    environ: Mapping[str, str] | None = None,
    is_dir: Callable[[Path], bool] | None = None,
) -> MergeResult:
    """Resolve, merge and write the hierarchy described by ``config``.

    Args:
        config: Options for this run.
        environ: Environment used for placeholder expansion.
            Defaults to os.environ.
        is_dir: Directory predicate used by the resolver.
            Defaults to Path.is_dir.

    Returns:
        MergeResult for the written document.

    Raises:
        ConfigError: Hierarchy file unreadable, unset variable, or missing
            directory with fail_missing.
        MergeError: Directory listing, fragment parsing or output writing
            failed.
    """
    logger = get_global_logger()

    logger.step(1, 2, "Resolving hierarchy...")
    hierarchy = process_hierarchy(config, environ=environ, is_dir=is_dir)

    logger.step(2, 2, f"Merging {len(hierarchy)} directory(ies)...")
    result = merge_files_in_hierarchy(
        hierarchy, config.file_filter, config.output_file
    )

    if result.top_level_keys:
        logger.verbose(
            "OUTPUT",
            f"Final document has {len(result.top_level_keys)} top-level keys: "
            f"{', '.join(result.top_level_keys)}",
        )
    return result
