"""
hierarchy - configuration hierarchy merger

Merges JSON and YAML configuration fragments found in an ordered list of
directories into a single YAML document. Later directories override earlier
ones: mappings are merged recursively, lists and scalars are replaced.

Quick Start
-----------
List the directories in a hierarchy file, most general first:

    # hierarchy.lst
    ../default
    ../${ENVIRONMENT}
    .

Merge them:

    $ hierarchy -f conf/app/hierarchy.lst -o merged.yaml

For full CLI documentation:

    $ hierarchy --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    run_merge() orchestration.
config : package
    MergeConfig run options.
resolver : module
    Hierarchy file parsing, variable expansion and path resolution.
discovery : module
    Fragment file selection per directory.
merge : module
    Fragment parsing, deep merge and YAML output.
version : module
    Build information reporting.

Public API
----------
    from hierarchy.core import run_merge
    from hierarchy.config import MergeConfig
    from hierarchy.resolver import resolve_hierarchy
    from hierarchy.discovery import get_files
    from hierarchy.merge import deep_merge, merge_files_in_hierarchy

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Merge JSON/YAML configuration fragments along a directory hierarchy"

# Re-export commonly used functions for convenience
from hierarchy.config import MergeConfig
from hierarchy.core import run_merge
from hierarchy.discovery import get_files
from hierarchy.merge import deep_merge, merge_files_in_hierarchy
from hierarchy.resolver import process_hierarchy, resolve_hierarchy
from hierarchy.results import MergeResult

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "MergeConfig",
    "MergeResult",
    "run_merge",
    "get_files",
    "deep_merge",
    "merge_files_in_hierarchy",
    "process_hierarchy",
    "resolve_hierarchy",
]
