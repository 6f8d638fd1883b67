#!/usr/bin/env python3
"""
confscan: find configuration files and check their syntax

Common usage:
  confscan .
  confscan deploy/ configs/app.yaml
  confscan --exclude-dirs node_modules,.git --depth 2 .
  confscan --list-files --file-types json,yaml .

Settings are also read from `.confscan.toml`, `confscan.toml`, or
`pyproject.toml [tool.confscan]` found by walking up from the current directory.
Flags given on the command line take precedence over the config file.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from confscan.config import find_config_file, load_config
from confscan.errors import ConfscanError
from confscan.filetype import DEFAULT_FILE_TYPES, file_types_by_name
from confscan.finder import (
    FileMetadata,
    FileSystemFinder,
    FinderOption,
    build_options,
    with_additional_files,
    with_depth,
    with_exclude_dirs,
    with_exclude_file_types,
    with_file_types,
    with_path_roots,
)

logger = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the confscan tool."""

    paths: list[str]
    exclude_dirs: list[str] | None
    exclude_file_types: list[str] | None
    file_types: list[str] | None
    depth: int | None
    additional_files: list[str] | None
    config: str | None
    list_files: bool
    verbose: bool
    version: bool


def _comma_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_args(args: list[str] | None = None) -> Options:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=str,
        default=[],
        help="Files or directories to search (default: '.')",
    )
    parser.add_argument(
        "--exclude-dirs",
        type=_comma_list,
        default=None,
        help="Comma-separated directory names to skip, e.g. 'node_modules,.git'",
    )
    parser.add_argument(
        "--exclude-file-types",
        type=_comma_list,
        default=None,
        help="Comma-separated extensions to skip, e.g. 'csv,ini'",
    )
    parser.add_argument(
        "--file-types",
        type=_comma_list,
        default=None,
        help="Comma-separated file types to search for (default: all of "
        + ", ".join(ft.name for ft in DEFAULT_FILE_TYPES)
        + ")",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Recursion depth below each path; 0 disables recursion (default: unlimited)",
    )
    parser.add_argument(
        "--additional-files",
        type=_comma_list,
        default=None,
        help="Comma-separated name:extension pairs for files without an extension, "
        "e.g. 'Pipfile:toml'",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file to use instead of searching for one",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        help="Print the discovered files and their types without validating them",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log discovery details to stderr"
    )
    parser.add_argument("--version", action="store_true", help="Show version information and exit")

    opts = parser.parse_args(args)
    return Options(
        paths=opts.paths,
        exclude_dirs=opts.exclude_dirs,
        exclude_file_types=opts.exclude_file_types,
        file_types=opts.file_types,
        depth=opts.depth,
        additional_files=opts.additional_files,
        config=opts.config,
        list_files=opts.list_files,
        verbose=opts.verbose,
        version=opts.version,
    )


def _build_finder(options: Options) -> FileSystemFinder:
    """
    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    base = build_options()
    config_path = Path(options.config) if options.config else find_config_file(Path.cwd())
    if config_path:
        logger.info("Using config file %s", config_path)
        base = load_config(config_path).apply(base)

    opts: list[FinderOption] = []
    if options.paths:
        opts.append(with_path_roots(*options.paths))
    if options.file_types is not None:
        opts.append(with_file_types(file_types_by_name(options.file_types)))
    if options.exclude_dirs is not None:
        opts.append(with_exclude_dirs(options.exclude_dirs))
    if options.exclude_file_types is not None:
        opts.append(with_exclude_file_types(options.exclude_file_types))
    if options.depth is not None:
        opts.append(with_depth(options.depth))
    if options.additional_files is not None:
        opts.append(with_additional_files(options.additional_files))

    for opt in opts:
        base = opt(base)
    return FileSystemFinder(base)


def _validate(match: FileMetadata) -> tuple[bool, str | None]:
    validator = match.file_type.validator
    if validator is None:
        return True, None
    try:
        content = Path(match.path).read_bytes()
    except OSError as e:
        return False, f"cannot read file: {e}"
    try:
        return validator.validate(content)
    except Exception as e:
        # A crashing validator marks one file invalid instead of aborting the run.
        logger.debug("Validator for %s raised", match.path, exc_info=True)
        return False, str(e) or type(e).__name__


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the confscan CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 if all files are valid, 1 if any is invalid, 2 on errors)
    """
    options = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("confscan")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        finder = _build_finder(options)
        matches = finder.discover()
    except ConfscanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.list_files:
        for match in matches:
            print(f"{match.path}\t{match.file_type.name}")
        return 0

    invalid = 0
    for match in matches:
        valid, error = _validate(match)
        if valid:
            print(f"✓ {match.path}")
        else:
            invalid += 1
            print(f"✗ {match.path}")
            print(f"    error: {error}")

    print(f"\n{len(matches) - invalid} valid, {invalid} invalid")
    return 1 if invalid else 0


if __name__ == "__main__":
    sys.exit(main())
