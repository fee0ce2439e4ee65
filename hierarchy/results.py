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

"""Public API return types for hierarchy.

Example:
    Inspecting a merge:
        ```python
        from hierarchy.core import run_merge

        result = run_merge(config)
        print(f"Merged {len(result.files)} file(s) into {result.output_file}")
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MergeResult:
    """Result from merging a hierarchy into one document.

    Attributes:
        output_file: Path the merged YAML document was written to.
        directories: Directories processed, in merge order.
        files: Fragment files merged, in merge order.
        top_level_keys: Top-level keys of the merged document.
    """

    output_file: Path
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    top_level_keys: list[str] = field(default_factory=list)
