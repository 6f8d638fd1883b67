"""Result and configuration types for file discovery."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from confscan.filetype import DEFAULT_FILE_TYPES, FileType


@dataclass(frozen=True)
class FileMetadata:
    """
    One discovered file. `path` is exactly as produced by the walk (relative
    if the root was relative), not canonicalized.
    """

    name: str
    path: str
    file_type: FileType


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class FinderOptions:
    """
    Immutable discovery configuration.

    `depth=None` means unlimited recursion. `exclude_dirs` holds directory base
    names, not paths. `exclude_file_types` holds raw extensions compared as-is
    against the extension parsed from each file name. `additional_files` maps
    a base name to the extension used for that file when it has none of its
    own. `config_file` names an external configuration document that is
    loaded when discovery runs.
    """

    path_roots: tuple[str, ...] = (".",)
    file_types: tuple[FileType, ...] = DEFAULT_FILE_TYPES
    exclude_dirs: frozenset[str] = frozenset()
    exclude_file_types: frozenset[str] = frozenset()
    depth: int | None = None
    additional_files: Mapping[str, str] = field(default_factory=_empty_mapping)
    config_file: str | None = None
