"""
Config file discovery: recursive traversal with directory and extension
exclusion, depth limiting, and classification against a file type registry.

Usage::

    from confscan.finder import build_finder, with_path_roots, with_exclude_dirs

    finder = build_finder(
        with_path_roots("deploy", "configs"),
        with_exclude_dirs(["node_modules"]),
    )
    for match in finder.discover():
        print(match.path, match.file_type.name)
"""

from confscan.finder.finder import FileSystemFinder, build_finder
from confscan.finder.options import (
    FinderOption,
    build_options,
    parse_additional_file,
    with_additional_files,
    with_config_file,
    with_depth,
    with_exclude_dirs,
    with_exclude_file_types,
    with_file_types,
    with_path_roots,
)
from confscan.finder.types import FileMetadata, FinderOptions

__all__ = [
    "FileMetadata",
    "FileSystemFinder",
    "FinderOption",
    "FinderOptions",
    "build_finder",
    "build_options",
    "parse_additional_file",
    "with_additional_files",
    "with_config_file",
    "with_depth",
    "with_exclude_dirs",
    "with_exclude_file_types",
    "with_file_types",
    "with_path_roots",
]
