"""
Composable configuration options for `FileSystemFinder`.

Each `with_*` function returns an option: a pure function from one
`FinderOptions` to the next. `build_options()` applies options over the
defaults strictly in the order given, so a later option for the same setting
replaces an earlier one. Nothing is merged with the defaults it replaces.

Usage::

    options = build_options(
        with_path_roots("configs", "deploy"),
        with_exclude_dirs(["node_modules"]),
        with_depth(2),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from types import MappingProxyType

from confscan.filetype import FileType
from confscan.finder.types import FinderOptions

FinderOption = Callable[[FinderOptions], FinderOptions]


def with_path_roots(*paths: str) -> FinderOption:
    """Search these roots, in order. No paths at all means nothing is searched."""
    roots = tuple(str(p) for p in paths)
    return lambda options: replace(options, path_roots=roots)


def with_file_types(file_types: Sequence[FileType]) -> FinderOption:
    """Replace the file type registry entirely."""
    registry = tuple(file_types)
    return lambda options: replace(options, file_types=registry)


def with_exclude_dirs(names: Iterable[str]) -> FinderOption:
    """Never descend into directories with these base names (case-sensitive)."""
    excluded = frozenset(names)
    return lambda options: replace(options, exclude_dirs=excluded)


def with_exclude_file_types(extensions: Iterable[str]) -> FinderOption:
    """
    Always reject files with these extensions. Extensions are stored as given
    and compared against the raw extension of each file, so pass lower case
    unless an exact-case match is intended.
    """
    excluded = frozenset(extensions)
    return lambda options: replace(options, exclude_file_types=excluded)


def with_depth(depth: int) -> FinderOption:
    """Limit recursion below each root. `0` disables recursion into subdirectories."""
    return lambda options: replace(options, depth=depth)


def parse_additional_file(spec: str) -> tuple[str, str] | None:
    """
    Parse a `name:extension` spec. Returns `None` unless the spec has exactly
    two colon-separated parts.
    """
    parts = spec.split(":")
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def with_additional_files(specs: Iterable[str]) -> FinderOption:
    """
    Map extensionless files to an extension by base name, e.g. `Pipfile:toml`.
    Only consulted for files with no extension of their own. Malformed specs
    are dropped silently. An empty list leaves any earlier mapping in place;
    a non-empty list replaces it, even when every spec in it is malformed.
    """
    specs = list(specs)
    if not specs:
        return lambda options: options
    mapping: dict[str, str] = {}
    for spec in specs:
        parsed = parse_additional_file(spec)
        if parsed is not None:
            name, extension = parsed
            mapping[name] = extension
    frozen = MappingProxyType(mapping)
    return lambda options: replace(options, additional_files=frozen)


def with_config_file(path: str) -> FinderOption:
    """
    Load settings from an external configuration document when discovery
    runs. A missing or malformed document fails discovery.
    """
    return lambda options: replace(options, config_file=str(path))


def build_options(*opts: FinderOption) -> FinderOptions:
    """Apply options over the defaults, in order."""
    options = FinderOptions()
    for opt in opts:
        options = opt(options)
    return options
