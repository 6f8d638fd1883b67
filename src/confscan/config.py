"""
TOML-based config file loading for confscan.

Searches for `.confscan.toml`, `confscan.toml`, or `pyproject.toml [tool.confscan]`
walking up from a start directory. A loaded config overrides the matching
finder options; settings it doesn't mention are left alone.

Example `confscan.toml`::

    [file-discovery]
    search-paths = ["deploy", "configs"]
    exclude-dirs = ["node_modules", ".git"]
    exclude-file-types = ["csv"]
    depth = 3
    file-types = ["json", "yaml"]
    additional-files = ["Pipfile:toml"]
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, cast

from confscan.errors import ConfigurationUnavailableError, UnknownFileTypeError
from confscan.filetype import file_types_by_name
from confscan.finder.options import (
    FinderOption,
    with_additional_files,
    with_depth,
    with_exclude_dirs,
    with_exclude_file_types,
    with_file_types,
    with_path_roots,
)
from confscan.finder.types import FinderOptions

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)


@dataclass
class ConfscanConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so "not configured" is distinguishable from "explicitly empty".
    """

    search_paths: list[str] | None = None
    exclude_dirs: list[str] | None = None
    exclude_file_types: list[str] | None = None
    depth: int | None = None
    file_types: list[str] | None = None
    additional_files: list[str] | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_options(self, base: FinderOptions) -> list[FinderOption]:
        """
        Options that apply this config on top of `base`. `file-types` names are
        looked up in the registry `base` already carries.
        """
        opts: list[FinderOption] = []
        if self.search_paths is not None:
            opts.append(with_path_roots(*self.search_paths))
        if self.file_types is not None:
            opts.append(with_file_types(file_types_by_name(self.file_types, base.file_types)))
        if self.exclude_dirs is not None:
            opts.append(with_exclude_dirs(self.exclude_dirs))
        if self.exclude_file_types is not None:
            opts.append(with_exclude_file_types(self.exclude_file_types))
        if self.depth is not None:
            opts.append(with_depth(self.depth))
        if self.additional_files is not None:
            opts.append(with_additional_files(self.additional_files))
        return opts

    def apply(self, base: FinderOptions) -> FinderOptions:
        options = base
        for opt in self.to_options(base):
            options = opt(options)
        return options


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".confscan.toml", "confscan.toml", "pyproject.toml"]

_LIST_FIELDS = {
    "search_paths",
    "exclude_dirs",
    "exclude_file_types",
    "file_types",
    "additional_files",
}

_VALID_FIELDS = {f.name for f in fields(ConfscanConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.confscan.toml` >
    `confscan.toml` > `pyproject.toml` (only if it has `[tool.confscan]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_confscan_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_confscan_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "confscan" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> ConfscanConfig:
    """
    Load a `ConfscanConfig` from a TOML file. Supports standalone
    `confscan.toml` / `.confscan.toml` and `pyproject.toml` (`[tool.confscan]`).

    Raises `ConfigurationUnavailableError` if the file is missing, unreadable,
    not valid TOML, has values of the wrong type, or sets nothing at all.
    """
    try:
        text = config_path.read_text()
    except FileNotFoundError as e:
        raise ConfigurationUnavailableError(f"Config file not found: {config_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationUnavailableError(f"Cannot read config file {config_path}: {e}") from e

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationUnavailableError(f"Invalid config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("confscan", {})

    config = _parse_config_data(data, config_path)
    if config.is_empty():
        raise ConfigurationUnavailableError(f"No confscan settings found in {config_path}")
    logger.debug("Loaded config from %s: %s", config_path, config)
    return config


def _parse_config_data(data: dict[str, Any], source: Path) -> ConfscanConfig:
    """Parse a flat or sectioned TOML dict into ConfscanConfig."""
    # Flatten sections: [file-discovery] merges into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            logger.warning("Ignoring unrecognized config key %r in %s", key, source)
            continue
        _check_type(snake_key, value, source)
        mapped[snake_key] = value

    return ConfscanConfig(**mapped)


def _check_type(name: str, value: Any, source: Path) -> None:
    key = name.replace("_", "-")
    if name in _LIST_FIELDS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationUnavailableError(
                f"Invalid config file {source}: `{key}` must be a list of strings"
            )
    elif name == "depth":
        # bool is an int subclass; `depth = true` is a mistake, not 1.
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationUnavailableError(
                f"Invalid config file {source}: `{key}` must be a non-negative integer"
            )


def resolve_options(options: FinderOptions) -> FinderOptions:
    """
    Load `options.config_file`, if set, and return `options` with the config
    applied. Unknown `file-types` names count as a malformed config.
    """
    if options.config_file is None:
        return options
    config = load_config(Path(options.config_file))
    try:
        return config.apply(options)
    except UnknownFileTypeError as e:
        raise ConfigurationUnavailableError(
            f"Invalid config file {options.config_file}: {e}"
        ) from e
