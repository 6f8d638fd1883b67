"""Tests for the built-in syntax validators."""

from __future__ import annotations

import plistlib

import pytest

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


@pytest.mark.parametrize(
    ("validator", "content"),
    [
        (JsonValidator(), b'{"a": [1, 2, {"b": null}]}'),
        (JsonValidator(), b'\xef\xbb\xbf{"bom": true}'),
        (YamlValidator(), b"a: 1\nb:\n  - x\n  - y\n"),
        (YamlValidator(), b"---\na: 1\n---\nb: 2\n"),
        (XmlValidator(), b'<?xml version="1.0"?><root><child a="1"/></root>'),
        (TomlValidator(), b'[server]\nhost = "localhost"\nport = 8080\n'),
        (IniValidator(), b"[section]\nkey = value\n"),
        (IniValidator(), b"top = level\n[section]\nkey = value\n"),
        (PropertiesValidator(), b"# comment\nkey=value\nother: thing \\\n  continued\n"),
        (PropertiesValidator(), b"unicode=\\u00e9\n"),
        (CsvValidator(), b"a,b,c\n1,2,3\n\"x,y\",2,3\n"),
        (EnvValidator(), b"# comment\nA=1\nexport B='two'\nC=\"three # not a comment\"\nD=\n"),
        (EditorConfigValidator(), b"root = true\n[*]\nindent_style = space\n[*]\ncharset = utf-8\n"),
    ],
)
def test_valid_content(validator: Validator, content: bytes):
    valid, error = validator.validate(content)
    assert valid, error
    assert error is None


@pytest.mark.parametrize(
    ("validator", "content"),
    [
        (JsonValidator(), b'{"a": 1,}'),
        (JsonValidator(), b"\xff\xfe"),
        (YamlValidator(), b"a: [1, 2\n"),
        (YamlValidator(), b"key: value\n- item\n"),
        (XmlValidator(), b"<root><child></root>"),
        (TomlValidator(), b"a = \n"),
        (TomlValidator(), b"a = 1\na = 2\n"),
        (IniValidator(), b"[section]\nkey = 1\nkey = 2\n"),
        (IniValidator(), b"[a]\nk = v\n[a]\nk2 = v\n"),
        (PropertiesValidator(), b"key=\\u00zz\n"),
        (PropertiesValidator(), b"key=value \\"),
        (CsvValidator(), b"a,b,c\n1,2\n"),
        (CsvValidator(), b'a,b\n"unterminated,2\n'),
        (EnvValidator(), b"A=1\nnot an assignment\n"),
        (EnvValidator(), b'A="unterminated\n'),
        (EditorConfigValidator(), b"[*]\nindent_style\n"),
        (PlistValidator(), b"<plist><dict><key>a</key></plist>"),
        (PlistValidator(), b""),
        (PlistValidator(), b'<plist version="1.0"><date>not-a-date</date></plist>'),
        (JsonValidator(), b"[" * 1_000_000 + b"]" * 1_000_000),
        (YamlValidator(), b"[" * 10_000 + b"]" * 10_000),
    ],
)
def test_invalid_content(validator: Validator, content: bytes):
    valid, error = validator.validate(content)
    assert not valid
    assert error


def test_plist_roundtrip_is_valid():
    content = plistlib.dumps({"name": "confscan", "items": [1, 2, 3]})
    assert PlistValidator().validate(content) == (True, None)
