"""Confscan exception hierarchy.

All public exceptions inherit from `ConfscanError`, so callers can catch any
discovery failure without swallowing unrelated errors. Filesystem-flavored
errors also inherit from the matching builtin so existing `OSError` handlers
keep working.
"""

from __future__ import annotations


class ConfscanError(Exception):
    """Base exception for all confscan errors."""


class RootNotFoundError(ConfscanError, FileNotFoundError):
    """Raised when a configured search root does not exist."""

    def __init__(self, root: str) -> None:
        super().__init__(f"Path not found: {root}")
        self.root: str = root


class WalkError(ConfscanError, OSError):
    """
    Raised when the filesystem reports an error while walking a root
    (permission denied, I/O error on an entry). The original `OSError` is
    chained as `__cause__`.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error walking {path}: {reason}")
        self.path: str = path


class PathResolutionError(ConfscanError):
    """Raised when the absolute path of a matched file cannot be computed."""


class ConfigurationUnavailableError(ConfscanError):
    """Raised when an external configuration document is missing or malformed."""


class UnknownFileTypeError(ConfscanError, ValueError):
    """Raised when a file type is referenced by a name the registry doesn't know."""
