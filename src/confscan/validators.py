"""
Syntax validators for the built-in file types.

Each validator takes raw file content and reports whether it parses, along
with a short error message when it doesn't. The discovery engine never calls
these; they are the capability carried by each `FileType` for whatever
consumes the discovered files.
"""

from __future__ import annotations

import configparser
import csv
import io
import json
import plistlib
import re
import sys
import xml.etree.ElementTree as ET
from typing import Protocol
from xml.parsers.expat import ExpatError

import yaml

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


class Validator(Protocol):
    """Validates the syntax of a file's content."""

    def validate(self, content: bytes) -> tuple[bool, str | None]: ...


def _decode(content: bytes) -> str:
    return content.decode("utf-8-sig")


class JsonValidator:
    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            json.loads(_decode(content))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return False, str(e)
        except RecursionError:
            return False, "nesting too deep"
        return True, None


class YamlValidator:
    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            # Multi-document streams are valid YAML.
            for _ in yaml.safe_load_all(_decode(content)):
                pass
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            return False, str(e)
        except RecursionError:
            return False, "nesting too deep"
        return True, None


class XmlValidator:
    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            ET.fromstring(content)
        except ET.ParseError as e:
            return False, str(e)
        return True, None


class TomlValidator:
    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            tomllib.loads(_decode(content))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            return False, str(e)
        return True, None


# Keys before the first section header land here instead of failing to parse.
_PREAMBLE_SECTION = "__preamble__"


class IniValidator:
    """
    INI files, with duplicate sections and keys rejected. Keys that appear
    before the first section header are accepted.
    """

    strict: bool = True

    def validate(self, content: bytes) -> tuple[bool, str | None]:
        parser = configparser.ConfigParser(interpolation=None, strict=self.strict)
        try:
            parser.read_string(f"[{_PREAMBLE_SECTION}]\n" + _decode(content))
        except (UnicodeDecodeError, configparser.Error) as e:
            return False, str(e)
        return True, None


class EditorConfigValidator(IniValidator):
    # Glob sections may legitimately repeat in `.editorconfig`.
    strict = False


_UNICODE_ESCAPE = re.compile(r"\\u(?![0-9a-fA-F]{4})")


class PropertiesValidator:
    """
    Java `.properties` files. Almost any line is a valid key, so the checks
    are limited to malformed `\\uXXXX` escapes and a dangling continuation
    at end of file.
    """

    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            text = _decode(content)
        except UnicodeDecodeError as e:
            return False, str(e)

        lines = text.splitlines()
        for lineno, line in enumerate(lines, start=1):
            stripped = line.lstrip()
            if not stripped or stripped[0] in "#!":
                continue
            if _UNICODE_ESCAPE.search(stripped.replace("\\\\", "")):
                return False, f"line {lineno}: malformed \\uxxxx encoding"
        if lines and _ends_with_continuation(lines[-1]):
            return False, f"line {len(lines)}: continuation at end of file"
        return True, None


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


class CsvValidator:
    """CSV files whose records all have the same number of fields as the first."""

    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            reader = csv.reader(io.StringIO(_decode(content), newline=""), strict=True)
            expected: int | None = None
            for row in reader:
                if expected is None:
                    expected = len(row)
                elif len(row) != expected:
                    return (
                        False,
                        f"record on line {reader.line_num}: "
                        f"wrong number of fields (expected {expected}, got {len(row)})",
                    )
        except (UnicodeDecodeError, csv.Error) as e:
            return False, str(e)
        return True, None


_ENV_LINE = re.compile(
    r"""^(?:export\s+)?[A-Za-z_][A-Za-z0-9_.]*\s*=\s*
        (?:"(?:[^"\\]|\\.)*"|'[^']*'|[^\s"'#][^#]*?|)
        \s*(?:\#.*)?$""",
    re.VERBOSE,
)


class EnvValidator:
    """`.env` files: `KEY=value` lines, comments, and blank lines."""

    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            text = _decode(content)
        except UnicodeDecodeError as e:
            return False, str(e)

        for lineno, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if not _ENV_LINE.match(stripped):
                return False, f"line {lineno}: unexpected character in {stripped!r}"
        return True, None


class PlistValidator:
    def validate(self, content: bytes) -> tuple[bool, str | None]:
        try:
            plistlib.loads(content)
        except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
            return False, str(e) or type(e).__name__
        except Exception as e:
            # plistlib fails with assorted errors on malformed values, e.g. a bad <date>.
            return False, f"{type(e).__name__}: {e}"
        return True, None
