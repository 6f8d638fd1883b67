"""
FileSystemFinder: main entry point for config file discovery.

Walks each search root depth-first, prunes excluded and too-deep directories,
classifies files by extension against the file type registry, and merges the
results of all roots into one list deduplicated by absolute path.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator

from confscan.config import resolve_options
from confscan.errors import PathResolutionError, RootNotFoundError, WalkError
from confscan.filetype import find_file_type
from confscan.finder.options import FinderOption, build_options
from confscan.finder.types import FileMetadata, FinderOptions

logger = logging.getLogger(__name__)


class FileSystemFinder:
    """
    Discovers files whose extension matches a registered `FileType`.

    The finder holds an immutable `FinderOptions` and never changes it; the
    same finder can run `discover()` any number of times.
    """

    def __init__(self, options: FinderOptions | None = None) -> None:
        self._options: FinderOptions = options if options is not None else FinderOptions()

    @property
    def options(self) -> FinderOptions:
        return self._options

    def discover(self) -> list[FileMetadata]:
        """
        Traverse every root in order and return all matches, keeping only the
        first occurrence of each absolute path.

        Any failure on any root raises and no results are returned.
        """
        options = resolve_options(self._options)
        seen: set[str] = set()
        unique_matches: list[FileMetadata] = []

        for root in options.path_roots:
            for match in _traverse(options, root):
                abs_path = _absolute(match.path)
                if abs_path in seen:
                    logger.debug("Skipping duplicate %s (%s)", match.path, abs_path)
                    continue
                seen.add(abs_path)
                unique_matches.append(match)

        logger.info(
            "Found %d file(s) in %d root(s)", len(unique_matches), len(options.path_roots)
        )
        return unique_matches

    def traverse(self, root: str | os.PathLike[str]) -> list[FileMetadata]:
        """Walk a single root and return its matches in walk order (not deduplicated)."""
        return _traverse(resolve_options(self._options), os.fspath(root))


def build_finder(*opts: FinderOption) -> FileSystemFinder:
    """Create a finder from the defaults with `opts` applied in order."""
    return FileSystemFinder(build_options(*opts))


def _absolute(path: str) -> str:
    try:
        return os.path.abspath(path)
    except OSError as e:
        raise PathResolutionError(f"Cannot resolve absolute path of {path}: {e}") from e


def _traverse(options: FinderOptions, root: str) -> list[FileMetadata]:
    # Check the root up front so a missing path gets a clear error instead
    # of whatever the walk would report. A symlinked root is not followed: it
    # is classified as a file by its own name, like any other link.
    try:
        root_stat = os.lstat(root)
    except FileNotFoundError as e:
        raise RootNotFoundError(root) from e
    except OSError as e:
        raise WalkError(root, e.strerror or str(e)) from e

    # Depth is counted in separators of the raw path strings, so the budget
    # is relative to however the root was spelled.
    max_depth = root.count(os.sep) + (options.depth or 0)
    if options.depth is not None:
        logger.debug("Walking %s (max depth %d)", root, max_depth)
    else:
        logger.debug("Walking %s", root)

    matches: list[FileMetadata] = []
    for path, name in _walk_files(options, root, stat.S_ISDIR(root_stat.st_mode), max_depth):
        match = _classify(options, path, name)
        if match is not None:
            matches.append(match)
    return matches


def _walk_files(
    options: FinderOptions, root: str, root_is_dir: bool, max_depth: int
) -> Iterator[tuple[str, str]]:
    """
    Depth-first pre-order walk yielding `(path, base_name)` for each file.

    Entries in a directory are visited in name order. The root path is used
    as given; every path below it is joined and normalized. Symlinks below
    the root are not followed.
    """
    stack: list[tuple[str, str, bool]] = [(root, _base_name(root), root_is_dir)]
    while stack:
        path, name, is_dir = stack.pop()
        if not is_dir:
            yield path, name
            continue

        if name in options.exclude_dirs:
            logger.debug("Skipping excluded directory %s", path)
            continue
        if options.depth is not None and path.count(os.sep) > max_depth:
            logger.debug("Skipping directory beyond max depth %s", path)
            continue

        try:
            with os.scandir(path) as it:
                children = sorted(
                    (entry.name, entry.is_dir(follow_symlinks=False)) for entry in it
                )
        except OSError as e:
            raise WalkError(path, e.strerror or str(e)) from e

        # Reversed so the first name in order is popped first.
        for child_name, child_is_dir in reversed(children):
            child_path = os.path.normpath(os.path.join(path, child_name))
            stack.append((child_path, child_name, child_is_dir))


def _classify(options: FinderOptions, path: str, name: str) -> FileMetadata | None:
    extension = _extension(name)
    if not extension:
        extension = options.additional_files.get(name, "")

    # Exclusion compares the raw extension, before lower-casing.
    if extension in options.exclude_file_types:
        logger.debug("Excluded by file type: %s", path)
        return None

    file_type = find_file_type(options.file_types, extension)
    if file_type is None:
        return None
    logger.debug("Matched %s as %s", path, file_type.name)
    return FileMetadata(name, path, file_type)


def _extension(name: str) -> str:
    """Text after the last dot of a base name; empty if there is none."""
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot + 1 :]


def _base_name(path: str) -> str:
    return os.path.basename(os.path.normpath(path)) or path
