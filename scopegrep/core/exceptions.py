"""Error hierarchy for scopegrep.

Only file-level and input-level failures are errors. Out-of-range line
references inside the context engine are treated as no-ops and never raise.
"""

from __future__ import annotations

from pathlib import Path


class ScopeGrepError(Exception):
    """Base class for all scopegrep errors."""


class FileTypeError(ScopeGrepError):
    """Raised when a file cannot be parsed because of its type."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        super().__init__(f"{message} ({self.path})")


class UnrecognizedFileTypeError(FileTypeError):
    """Raised when no language is registered for a file's extension or name."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path, "unrecognized file type")


class UnsupportedLanguageError(FileTypeError):
    """Raised when a language is recognized but no grammar is available."""

    def __init__(self, path: str | Path, language: str) -> None:
        self.language = language
        super().__init__(path, f"unsupported language '{language}'")


class InvalidPatternError(ScopeGrepError, ValueError):
    """Raised when a search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class ConfigFileError(ScopeGrepError):
    """Raised when a configuration file cannot be read or decoded."""
