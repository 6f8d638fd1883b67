"""
confscan: find configuration files and check their syntax.
"""

from confscan.errors import (
    ConfigurationUnavailableError,
    ConfscanError,
    PathResolutionError,
    RootNotFoundError,
    UnknownFileTypeError,
    WalkError,
)
from confscan.filetype import DEFAULT_FILE_TYPES, FileType, find_file_type, make_file_types
from confscan.finder import FileMetadata, FileSystemFinder, build_finder

__all__ = [
    "DEFAULT_FILE_TYPES",
    "ConfigurationUnavailableError",
    "ConfscanError",
    "FileMetadata",
    "FileSystemFinder",
    "FileType",
    "PathResolutionError",
    "RootNotFoundError",
    "UnknownFileTypeError",
    "WalkError",
    "build_finder",
    "find_file_type",
    "make_file_types",
]
