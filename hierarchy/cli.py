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

"""Command-line interface for hierarchy.

Merges the JSON/YAML fragments of every directory listed in a hierarchy file
into one YAML document.

Example:
    Merge using hierarchy.lst in the current directory:
        ```bash
        $ hierarchy
        ```

    Merge a specific hierarchy, failing on missing directories:
        ```bash
        $ hierarchy -f conf/hierarchy.lst -o build/config.yaml --fail-missing
        ```

    Only merge YAML fragments:
        ```bash
        $ hierarchy --filter .yml,.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (unset variable, missing directory with --fail-missing, parse
  error, unreadable directory, output write failure)

Note:
    The CLI uses argparse for command parsing (stdlib).
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and shows per-file details.

"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
import sys

from hierarchy.config import (
    DEFAULT_FILE_FILTER,
    DEFAULT_HIERARCHY_FILE,
    DEFAULT_OUTPUT_FILE,
    MergeConfig,
)
from hierarchy.core import run_merge
from hierarchy.exceptions import ConfigError, HierarchyError, MergeError
from hierarchy.logging import get_logger, set_global_logger
from hierarchy.version import BuildInfo, format_version, log_version


def build_config(args: argparse.Namespace) -> MergeConfig:
    """Turn parsed arguments into a MergeConfig.

    The base path defaults to the directory holding the hierarchy file.

    Raises:
        ConfigError: If the extension filter is empty.
    """
    hierarchy_file = Path(args.file)
    base_path = Path(args.base) if args.base else hierarchy_file.parent
    return MergeConfig(
        hierarchy_file=hierarchy_file,
        base_path=base_path,
        output_file=Path(args.output),
        file_filter=args.filter,
        fail_missing=args.fail_missing,
        verbose=args.verbose,
        debug=args.debug,
    )


def cmd_merge(args: argparse.Namespace) -> int:
    """Handler for the merge run.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).

    Note:
        Writes the merged document to the output file and prints a summary
        to stdout. Prints errors with optional traceback if verbose/debug.

    """
    # Configure global logger
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    build_info: BuildInfo = args.build_info
    log_version(build_info, logger)

    try:
        config = build_config(args)
        print(f"Merging hierarchy: {config.hierarchy_file}")
        print(f"Base path:         {config.base_path}")
        print()
        result = run_merge(config)
    except (ConfigError, MergeError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1
    except HierarchyError as err:
        # Catch any other errors we might have missed
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    # Display results
    print("=" * 70)
    print("MERGE RESULTS")
    print("=" * 70)
    print(f"Directories:     {len(result.directories)}")
    print(f"Files Merged:    {len(result.files)}")
    print(f"Top-level Keys:  {', '.join(result.top_level_keys) or '(none)'}")
    print(f"Output File:     {result.output_file}")
    print("=" * 70)
    print()
    print("[SUCCESS] Hierarchy merged successfully!")

    return 0


def build_parser(build_info: BuildInfo) -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hierarchy",
        description="Merge JSON/YAML configuration fragments along a directory hierarchy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=format_version(build_info),
    )
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_HIERARCHY_FILE,
        help=f"Hierarchy file listing the directories to merge (default: {DEFAULT_HIERARCHY_FILE})",
    )
    parser.add_argument(
        "-b",
        "--base",
        default=None,
        help="Base path for relative hierarchy entries (default: directory of the hierarchy file)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_FILE,
        help=f"Merged output file (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--filter",
        default=",".join(DEFAULT_FILE_FILTER),
        help="Comma-separated fragment extensions (default: %(default)s)",
    )
    parser.add_argument(
        "--fail-missing",
        action="store_true",
        help="Fail when a directory listed in the hierarchy does not exist",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser.set_defaults(func=cmd_merge, build_info=build_info)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the hierarchy CLI.

    This function is registered as the 'hierarchy' console script in
    pyproject.toml.
    """
    parser = build_parser(BuildInfo.current())

    # Parse and dispatch
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
