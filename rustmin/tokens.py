"""
Token tree model for Rust source text.

A token stream is a flat list of token trees; a Group nests another stream
between a pair of delimiters. Positions are kept for adjacency checks only
and never take part in equality of rendered text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union


class Delimiter(Enum):
    """Group delimiter; NONE is an invisible group."""
    PARENTHESIS = ("(", ")")
    BRACE = ("{", "}")
    BRACKET = ("[", "]")
    NONE = (" ", " ")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def from_open(cls, ch: str) -> Delimiter:
        for delim in (cls.PARENTHESIS, cls.BRACE, cls.BRACKET):
            if delim.open == ch:
                return delim
        raise ValueError(f"Not an opening delimiter: {ch!r}")


class Spacing(Enum):
    """Whether a punctuation character is glued to the following one."""
    JOINT = "joint"
    ALONE = "alone"


@dataclass(frozen=True, order=True)
class LineColumn:
    """Line (1-based) and column (0-based, in characters) in source text."""
    line: int = 0
    column: int = 0

    def adjacent_to(self, other: LineColumn) -> bool:
        """True when `other` starts right after the single character at `self`."""
        return self.line == other.line and self.column + 1 == other.column


@dataclass(frozen=True)
class Span:
    start: LineColumn = field(default_factory=LineColumn)
    end: LineColumn = field(default_factory=LineColumn)


@dataclass(frozen=True)
class Group:
    delimiter: Delimiter
    stream: Tuple[TokenTree, ...] = ()
    span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class Ident:
    """Identifier, keyword, raw identifier or lifetime."""
    text: str
    span: Span = field(default_factory=Span, compare=False)


@dataclass(frozen=True)
class Literal:
    """String, char, byte or numeric literal, suffix included."""
    text: str
    span: Span = field(default_factory=Span, compare=False)

    def has_trailing_dot(self) -> bool:
        """Float literal written with a bare trailing decimal point, e.g. `1.`."""
        return self.text.endswith(".") and self.text[:1].isdigit()


@dataclass(frozen=True)
class Punct:
    char: str
    spacing: Spacing = Spacing.ALONE
    span: Span = field(default_factory=Span, compare=False)


TokenTree = Union[Group, Ident, Literal, Punct]
TokenStream = List[TokenTree]


__all__ = [
    "Delimiter",
    "Spacing",
    "LineColumn",
    "Span",
    "Group",
    "Ident",
    "Literal",
    "Punct",
    "TokenTree",
    "TokenStream",
]
