"""
Punctuation pairs that lex differently when written without a separator.

Each entry is (accumulated punctuation run, next character): writing the run
directly followed by the character would produce another Rust operator.
Derived from the multi-character tokens of the Rust grammar; a different
grammar needs its own table.
"""

from __future__ import annotations

from typing import FrozenSet, Tuple

AMBIGUOUS_PAIRS: FrozenSet[Tuple[str, str]] = frozenset({
    ("!", "="),
    ("%", "="),
    ("&", "&"),
    ("&", "="),
    ("*", "="),
    ("+", "="),
    ("-", "="),
    ("-", ">"),
    (".", "."),
    ("..", "."),
    ("..", "="),
    ("/", "="),
    (":", ":"),
    ("<", "-"),
    ("<", "<"),
    ("<", "="),
    ("<<", "="),
    ("=", "="),
    ("=", ">"),
    (">", "="),
    (">", ">"),
    (">>", "="),
    ("^", "="),
    ("|", "="),
    ("|", "|"),
})


def is_ambiguous(run: str, next_char: str) -> bool:
    """Check if `run` followed directly by `next_char` would merge into another operator."""
    return (run, next_char) in AMBIGUOUS_PAIRS


__all__ = ["AMBIGUOUS_PAIRS", "is_ambiguous"]
