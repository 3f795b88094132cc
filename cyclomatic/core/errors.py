"""
Error types raised while analyzing a file.

Unsupported syntax is never an error: the walkers treat it as a leaf.
"""

from typing import Optional


class CyclomaticError(Exception):
    """Base class for every failure the analyzer reports."""


class ConfigError(CyclomaticError):
    """Invalid configuration value."""


class ParseFailure(CyclomaticError):
    """The Rust grammar rejected the input."""

    def __init__(self, path: str, line: Optional[int] = None, column: Optional[int] = None,
                 message: str = "syntax error") -> None:
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        location = path if line is None else f"{path}:{line}:{column}"
        super().__init__(f"{location}: {message}")


class NameResolutionError(CyclomaticError):
    """An impl block's self type has no leading identifier."""

    def __init__(self, path: str, line: int, type_text: str) -> None:
        self.path = path
        self.line = line
        self.type_text = type_text
        super().__init__(f"{path}:{line}: identifier not found for impl of {type_text!r}")
