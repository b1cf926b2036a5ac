"""
User-facing exceptions.

Problems caused by the input (source text that is not Rust, a broken config
file) derive from RustminUserError; the CLI prints their message and exits
with status 2. Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations

from typing import Optional


class RustminUserError(Exception):
    """Base class for errors the user can fix."""
    pass


class ParseError(RustminUserError):
    """
    Input text is not a valid Rust source file.

    `line` is 1-based and `column` 0-based, both optional.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None and column is not None:
            super().__init__(f"{message} at line {line} column {column}")
        else:
            super().__init__(message)


class LexError(ParseError):
    """Input text could not be split into Rust tokens."""
    pass


class ConfigError(RustminUserError):
    """Invalid configuration mapping or file."""
    pass


__all__ = ["RustminUserError", "ParseError", "LexError", "ConfigError"]
