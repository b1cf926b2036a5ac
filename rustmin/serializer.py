"""
Minifying serializer for token streams.

Emits tokens left to right with the least whitespace that keeps the token
boundaries: two word-like tokens (identifiers, literals) are always separated
by one space, punctuation runs are only separated when the source had them
apart and their concatenation would read as another operator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Union

from .ambiguity import is_ambiguous
from .tokens import (
    Delimiter,
    Group,
    Ident,
    LineColumn,
    Literal,
    Punct,
    Spacing,
    TokenTree,
)


class _Empty:
    """Nothing pending: start of a stream or right after a group."""
    __slots__ = ()


class _PendingWord:
    """Last emitted token was an identifier or a literal."""
    __slots__ = ()


@dataclass
class _PendingPunct:
    """Punctuation characters not yet written out."""
    text: str
    last_position: LineColumn
    last_spacing: Spacing


EMPTY = _Empty()
PENDING_WORD = _PendingWord()

_State = Union[_Empty, _PendingWord, _PendingPunct]


class TokenSerializer:
    """
    Single-pass minifying serializer.

    The serializer keeps one state value per stream and recurses into groups,
    appending output to a shared buffer.
    """

    def __init__(self):
        self._out: List[str] = []

    def serialize(self, tokens: Iterable[TokenTree]) -> str:
        self._out = []
        self._stream(tokens)
        return "".join(self._out)

    def _stream(self, tokens: Iterable[TokenTree]) -> None:
        state: _State = EMPTY
        for tt in tokens:
            if isinstance(tt, Group):
                state = self._group(tt, state)
            elif isinstance(tt, Ident):
                state = self._word(tt.text, state, PENDING_WORD)
            elif isinstance(tt, Literal):
                state = self._literal(tt, state)
            elif isinstance(tt, Punct):
                state = self._punct(tt, state)
            else:
                raise TypeError(f"Unexpected token tree: {tt!r}")
        self._flush(state)

    def _flush(self, state: _State) -> None:
        if isinstance(state, _PendingPunct):
            self._out.append(state.text)

    def _group(self, group: Group, state: _State) -> _State:
        self._flush(state)
        self._out.append(group.delimiter.open)
        self._stream(group.stream)
        self._out.append(group.delimiter.close)
        return EMPTY

    def _word(self, text: str, state: _State, next_state: _State) -> _State:
        if isinstance(state, _PendingWord):
            self._out.append(" ")
        else:
            self._flush(state)
        self._out.append(text)
        return next_state

    def _literal(self, literal: Literal, state: _State) -> _State:
        if literal.has_trailing_dot():
            # `1.` followed by `..` must not become `1...`; keep the dot as pending punctuation
            end = literal.span.end
            dot = _PendingPunct(".", LineColumn(end.line, max(end.column - 1, 0)), Spacing.ALONE)
            return self._word(literal.text[:-1], state, dot)
        return self._word(literal.text, state, PENDING_WORD)

    def _punct(self, punct: Punct, state: _State) -> _State:
        position = punct.span.start
        if not isinstance(state, _PendingPunct):
            return _PendingPunct(punct.char, position, punct.spacing)

        if state.last_spacing is Spacing.JOINT:
            state.text += punct.char
            state.last_spacing = punct.spacing
            return state

        self._out.append(state.text)
        if not state.last_position.adjacent_to(position) and is_ambiguous(state.text, punct.char):
            self._out.append(" ")
        return _PendingPunct(punct.char, position, punct.spacing)


def serialize(tokens: Iterable[TokenTree]) -> str:
    """Minified rendering of a token stream, not yet verified."""
    return TokenSerializer().serialize(tokens)


def canonical(tokens: Iterable[TokenTree]) -> str:
    """
    Unambiguous rendering: every token separated by exactly one space.

    Spacing flags are ignored, so `->` comes out as `- >`; equivalence
    compares characters only. Used as the safe fallback when a minified
    candidate does not re-lex to the same tokens.
    """
    out: List[str] = []
    for tt in tokens:
        if isinstance(tt, Group):
            inner = canonical(tt.stream)
            if tt.delimiter is Delimiter.NONE:
                out.append(f" {inner} ")
            else:
                out.append(f"{tt.delimiter.open}{inner}{tt.delimiter.close}")
        elif isinstance(tt, Punct):
            out.append(tt.char)
        else:
            out.append(tt.text)
    return " ".join(out)


__all__ = ["TokenSerializer", "serialize", "canonical"]
