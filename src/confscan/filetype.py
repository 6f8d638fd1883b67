"""
File type registry: named formats, the extensions that identify them, and the
validator capability each one carries.

A registry is a plain ordered tuple of `FileType`. Order only matters when two
types claim the same extension: the first one wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from confscan.errors import UnknownFileTypeError
from confscan.validators import (
    CsvValidator,
    EditorConfigValidator,
    EnvValidator,
    IniValidator,
    JsonValidator,
    PlistValidator,
    PropertiesValidator,
    TomlValidator,
    Validator,
    XmlValidator,
    YamlValidator,
)


@dataclass(frozen=True)
class FileType:
    """
    A named file format. `extensions` are stored lower-cased and without the
    leading dot, so lookups are case-insensitive once the caller lower-cases
    the extension it is testing.
    """

    name: str
    extensions: frozenset[str]
    validator: Validator | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", frozenset(ext.lower() for ext in self.extensions))

    def matches(self, extension: str) -> bool:
        return extension.lower() in self.extensions


FileTypeEntry = tuple[str, Iterable[str]] | tuple[str, Iterable[str], Validator | None]


def make_file_types(entries: Iterable[FileTypeEntry]) -> tuple[FileType, ...]:
    """
    Build an ordered registry from `(name, extensions)` or
    `(name, extensions, validator)` entries. Nothing is validated: a type with
    no extensions is kept and simply never matches.
    """
    file_types: list[FileType] = []
    for entry in entries:
        name, extensions = entry[0], entry[1]
        validator = entry[2] if len(entry) > 2 else None
        file_types.append(FileType(name, frozenset(extensions), validator))
    return tuple(file_types)


DEFAULT_FILE_TYPES: tuple[FileType, ...] = make_file_types(
    [
        ("json", ["json"], JsonValidator()),
        ("yaml", ["yml", "yaml"], YamlValidator()),
        ("xml", ["xml"], XmlValidator()),
        ("toml", ["toml"], TomlValidator()),
        ("ini", ["ini"], IniValidator()),
        ("properties", ["properties"], PropertiesValidator()),
        ("csv", ["csv"], CsvValidator()),
        ("env", ["env"], EnvValidator()),
        ("editorconfig", ["editorconfig"], EditorConfigValidator()),
        ("plist", ["plist"], PlistValidator()),
    ]
)


def find_file_type(file_types: Sequence[FileType], extension: str) -> FileType | None:
    """Return the first file type claiming `extension` (any case), or `None`."""
    extension_lower = extension.lower()
    for file_type in file_types:
        if extension_lower in file_type.extensions:
            return file_type
    return None


def file_types_by_name(
    names: Iterable[str], file_types: Sequence[FileType] = DEFAULT_FILE_TYPES
) -> tuple[FileType, ...]:
    """
    Restrict a registry to the named types, keeping registry order. Names are
    compared case-insensitively.
    """
    wanted = {name.lower() for name in names}
    known = {file_type.name.lower() for file_type in file_types}
    unknown = sorted(wanted - known)
    if unknown:
        raise UnknownFileTypeError(
            f"Unknown file type(s): {', '.join(unknown)} "
            f"(known: {', '.join(ft.name for ft in file_types)})"
        )
    return tuple(ft for ft in file_types if ft.name.lower() in wanted)
