"""
Custom exceptions with actionable guidance.

Provides specific error types for every way an invocation can fail to
resolve into a configuration, each with a suggestion for resolution.
All of them are fatal: the CLI reports them and exits non-zero.
"""

from __future__ import annotations

from collections.abc import Sequence


class SketchdistError(Exception):
    """Base exception for sketchdist errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class ConfigurationError(SketchdistError):
    """Raised when an invocation cannot be resolved into a configuration."""



class UnrecognizedModeError(ConfigurationError):
    """Raised when no known subcommand was invoked."""

    def __init__(self, name: str | None):
        shown = repr(name) if name else "no subcommand"
        super().__init__(
            message=f"Unrecognized mode: {shown}",
            suggestion="Choose one of: sketch, dist, triangle, search.",
        )
        self.name = name


class MissingInputError(ConfigurationError):
    """Raised when a required input has no value from any accepted source."""

    def __init__(self, field: str, flags: Sequence[str], message: str | None = None):
        flag_str = ", ".join(flags)
        super().__init__(
            message=message or f"No {field} found.",
            suggestion=f"Provide {field} with one of: {flag_str}",
        )
        self.field = field
        self.flags = tuple(flags)


class InvalidNumberError(ConfigurationError):
    """Raised when a numeric flag does not parse or is out of range."""

    def __init__(self, flag: str, value: object, expected: str):
        super().__init__(
            message=f"Invalid value for {flag}: {value!r} is not {expected}",
            suggestion=f"Pass {expected} to {flag}.",
        )
        self.flag = flag
        self.value = value
        self.expected = expected


class FileListError(SketchdistError):
    """Base class for path-list file errors."""



class FileListNotFoundError(FileListError):
    """Raised when a path-list file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"List file not found: {path}",
            suggestion=(
                "Check the path given to the list option. A list file holds "
                "one sequence or sketch path per line."
            ),
        )
        self.path = path


class FileListUnreadableError(FileListError):
    """Raised when a path-list file exists but cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Could not read list file '{path}': {reason}",
            suggestion=(
                "Make sure the list file is a readable UTF-8 text file "
                "and not a directory."
            ),
        )
        self.path = path
        self.reason = reason


class DirectoryUnreadableError(SketchdistError):
    """Raised when the search database folder cannot be listed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Issue with folder specified by -d option: {path} ({reason})",
            suggestion=(
                "Point -d at a directory of pre-built sketches, "
                "for example the output folder of the sketch subcommand."
            ),
        )
        self.path = path
        self.reason = reason
