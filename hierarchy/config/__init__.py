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

"""Run options for hierarchy.

Public API:

- MergeConfig: Frozen options for a merge run
- normalize_filter: Turn user supplied extensions into a filter tuple
- DEFAULT_FILE_FILTER: (".json", ".yml", ".yaml")

Example:
    Build options programmatically:

        from pathlib import Path
        from hierarchy.config import MergeConfig

        config = MergeConfig(
            hierarchy_file=Path("conf/hierarchy.lst"),
            base_path=Path("conf"),
            output_file=Path("merged.yaml"),
        )

"""

from .options import (
    DEFAULT_FILE_FILTER,
    DEFAULT_HIERARCHY_FILE,
    DEFAULT_OUTPUT_FILE,
    MergeConfig,
    normalize_filter,
)

__all__ = [
    "DEFAULT_FILE_FILTER",
    "DEFAULT_HIERARCHY_FILE",
    "DEFAULT_OUTPUT_FILE",
    "MergeConfig",
    "normalize_filter",
]
