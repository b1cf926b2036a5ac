"""
Structural equivalence of token streams.

Two streams are equivalent when they have the same groups, identifiers,
literals and punctuation characters in the same order. Positions and
joint/alone spacing are ignored.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple, Union

from .errors import LexError
from .lexer import tokenize
from .tokens import Delimiter, Group, Ident, Literal, Punct, TokenTree

# Lossy shape of a token tree: ("group", delimiter, children) or (kind, text)
LossyTree = Union[Tuple[str, str], Tuple[str, Delimiter, Tuple["LossyTree", ...]]]


def compress(tokens: Iterable[TokenTree]) -> Tuple[LossyTree, ...]:
    """Drop positions and spacing, keeping only what equivalence compares."""
    result = []
    for tt in tokens:
        if isinstance(tt, Group):
            result.append(("group", tt.delimiter, compress(tt.stream)))
        elif isinstance(tt, Ident):
            result.append(("ident", tt.text))
        elif isinstance(tt, Literal):
            result.append(("literal", tt.text))
        elif isinstance(tt, Punct):
            result.append(("punct", tt.char))
        else:
            raise TypeError(f"Unexpected token tree: {tt!r}")
    return tuple(result)


def equivalent(first: Sequence[TokenTree], second: Sequence[TokenTree]) -> bool:
    return compress(first) == compress(second)


def verify(candidate: str, tokens: Sequence[TokenTree]) -> bool:
    """
    Check that `candidate` re-lexes to a stream equivalent to `tokens`.

    A candidate that cannot be tokenized at all is not equivalent.
    """
    try:
        relexed = tokenize(candidate)
    except LexError:
        return False
    return equivalent(relexed, tokens)


__all__ = ["compress", "equivalent", "verify"]
