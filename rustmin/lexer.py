"""
Lexer for Rust source text.

Splits text into a token stream the way the Rust compiler's proc-macro layer
sees it:
- identifiers, keywords, raw identifiers and lifetimes (word-like)
- literals: numbers, chars, bytes, strings, byte/C strings, raw variants
- single-character punctuation with joint/alone spacing
- (), [] and {} groups
Plain comments and whitespace are dropped; doc comments are turned into
`#[doc = "..."]` (or `#![doc = "..."]`) attribute tokens.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .errors import LexError
from .tokens import (
    Delimiter,
    Group,
    Ident,
    LineColumn,
    Literal,
    Punct,
    Spacing,
    Span,
    TokenStream,
    TokenTree,
)

PUNCT_CHARS = frozenset("~!@#$%^&*-=+|;:,<.>/?")
OPEN_DELIMITERS = "([{"
CLOSE_DELIMITERS = ")]}"


def is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isidentifier()


def is_ident_continue(ch: str) -> bool:
    return ("a" + ch).isidentifier()


class RustLexer:
    """
    Cursor-based lexer producing token trees.

    A lexer instance is single-use: create one per text.
    """

    # Prefixed literal openers, checked before plain identifiers
    RAW_STRING_START = re.compile(r'(?:br|cr|r)(#*)"')
    QUOTED_STRING_START = re.compile(r'[bc]?"')
    BYTE_CHAR_START = re.compile(r"b'")

    DEC_DIGITS = re.compile(r"[0-9][0-9_]*")
    BASED_INT = re.compile(r"0(?:[xX][0-9a-fA-F_]*|[oObB][0-9_]*)")
    EXPONENT = re.compile(r"[eE][+-]?_*[0-9][0-9_]*")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 0

    # ---- cursor ----

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        return self.text[idx] if idx < len(self.text) else ""

    def _location(self) -> LineColumn:
        return LineColumn(self.line, self.column)

    def _advance_to(self, new_pos: int) -> None:
        chunk = self.text[self.pos:new_pos]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n") - 1
        else:
            self.column += len(chunk)
        self.pos = new_pos

    def _error(self, message: str, at: Optional[LineColumn] = None) -> LexError:
        loc = at or self._location()
        return LexError(message, loc.line, loc.column)

    # ---- entry point ----

    def tokenize(self) -> TokenStream:
        """
        Tokenize the whole text.

        Returns:
            Top-level token stream

        Raises:
            LexError: On unbalanced delimiters, unterminated literals or comments,
                      and characters that cannot start a token
        """
        stack: List[Tuple[Delimiter, LineColumn, List[TokenTree]]] = []
        current: List[TokenTree] = []

        while self.pos < len(self.text):
            ch = self.text[self.pos]

            if ch.isspace():
                self._advance_to(self.pos + 1)
                continue

            if self.text.startswith("//", self.pos):
                current.extend(self._line_comment())
                continue

            if self.text.startswith("/*", self.pos):
                current.extend(self._block_comment())
                continue

            if ch in OPEN_DELIMITERS:
                stack.append((Delimiter.from_open(ch), self._location(), current))
                current = []
                self._advance_to(self.pos + 1)
            elif ch in CLOSE_DELIMITERS:
                if not stack:
                    raise self._error(f"unexpected closing delimiter `{ch}`")
                delim, start, parent = stack.pop()
                if delim.close != ch:
                    raise self._error(f"mismatched closing delimiter `{ch}`, expected `{delim.close}`")
                self._advance_to(self.pos + 1)
                parent.append(Group(delim, tuple(current), Span(start, self._location())))
                current = parent
            else:
                current.append(self._leaf(ch))

        if stack:
            delim, start, _ = stack[-1]
            raise self._error(f"unclosed delimiter `{delim.open}`", at=start)

        return current

    def _leaf(self, ch: str) -> TokenTree:
        if ch == "'":
            return self._quote()
        if ch == '"':
            return self._quoted_string()
        if ch.isdigit():
            return self._number()
        if is_ident_start(ch):
            return self._prefixed_literal() or self._ident()
        if ch in PUNCT_CHARS:
            return self._punct()
        raise self._error(f"unknown start of token: {ch!r}")

    # ---- comments ----

    def _line_comment(self) -> TokenStream:
        start = self._location()
        end_idx = self.text.find("\n", self.pos)
        if end_idx < 0:
            end_idx = len(self.text)
        body = self.text[self.pos:end_idx]
        # CRLF line ending
        if body.endswith("\r"):
            body = body[:-1]
        self._advance_to(end_idx)

        if body.startswith("///") and not body.startswith("////"):
            return self._doc_attribute(body[3:], inner=False, span=Span(start, self._location()))
        if body.startswith("//!"):
            return self._doc_attribute(body[3:], inner=True, span=Span(start, self._location()))
        return []

    def _block_comment(self) -> TokenStream:
        start = self._location()
        depth = 0
        idx = self.pos
        while idx < len(self.text):
            if self.text.startswith("/*", idx):
                depth += 1
                idx += 2
            elif self.text.startswith("*/", idx):
                depth -= 1
                idx += 2
                if depth == 0:
                    break
            else:
                idx += 1
        if depth != 0:
            raise self._error("unterminated block comment", at=start)

        body = self.text[self.pos:idx]
        self._advance_to(idx)
        span = Span(start, self._location())

        if body.startswith("/**") and not body.startswith("/***") and body != "/**/":
            return self._doc_attribute(body[3:-2].replace("\r\n", "\n"), inner=False, span=span)
        if body.startswith("/*!"):
            return self._doc_attribute(body[3:-2].replace("\r\n", "\n"), inner=True, span=span)
        return []

    @staticmethod
    def _doc_attribute(content: str, inner: bool, span: Span) -> TokenStream:
        tokens: TokenStream = [Punct("#", Spacing.ALONE, span)]
        if inner:
            tokens.append(Punct("!", Spacing.ALONE, span))
        tokens.append(Group(
            Delimiter.BRACKET,
            (
                Ident("doc", span),
                Punct("=", Spacing.ALONE, span),
                Literal(string_literal(content), span),
            ),
            span,
        ))
        return tokens

    # ---- words ----

    def _scan_ident(self, idx: int) -> int:
        while idx < len(self.text) and is_ident_continue(self.text[idx]):
            idx += 1
        return idx

    def _ident(self) -> Ident:
        start = self._location()
        idx = self.pos
        # raw identifier r#name
        if self.text.startswith("r#", idx) and is_ident_start(self._peek(2)):
            idx += 2
        end = self._scan_ident(idx + 1)
        text = self.text[self.pos:end]
        self._advance_to(end)
        return Ident(text, Span(start, self._location()))

    def _quote(self) -> TokenTree:
        """Either a char literal or a lifetime / label."""
        start = self._location()
        nxt = self._peek(1)
        if not nxt:
            raise self._error("unterminated character literal")

        if nxt != "\\" and self._peek(2) != "'" and is_ident_start(nxt):
            end = self._scan_ident(self.pos + 2)
            if end < len(self.text) and self.text[end] == "'":
                raise self._error("character literal may only contain one codepoint")
            text = self.text[self.pos:end]
            self._advance_to(end)
            return Ident(text, Span(start, self._location()))

        end = self._scan_char(self.pos + 1)
        return self._finish_literal(end, start)

    # ---- literals ----

    def _scan_char(self, idx: int) -> int:
        """Scan a char body starting after the opening quote; return index after the closing quote."""
        if idx >= len(self.text) or self.text[idx] in "\n'":
            raise self._error("empty or unterminated character literal")
        if self.text[idx] == "\\":
            idx += 1
            if self.text.startswith("u{", idx):
                close = self.text.find("}", idx)
                if close < 0:
                    raise self._error("unterminated unicode escape")
                idx = close
            idx += 1
        else:
            idx += 1
        if idx >= len(self.text) or self.text[idx] != "'":
            raise self._error("unterminated character literal")
        return idx + 1

    def _scan_quoted(self, idx: int) -> int:
        """Scan a string body starting after the opening quote; return index after the closing quote."""
        while idx < len(self.text):
            ch = self.text[idx]
            if ch == "\\":
                idx += 2
            elif ch == '"':
                return idx + 1
            else:
                idx += 1
        raise self._error("unterminated double quote string")

    def _scan_raw(self, idx: int, hashes: int) -> int:
        terminator = '"' + "#" * hashes
        close = self.text.find(terminator, idx)
        if close < 0:
            raise self._error("unterminated raw string")
        return close + len(terminator)

    def _finish_literal(self, end: int, start: LineColumn) -> Literal:
        """Attach an optional suffix and emit the literal ending at `end`."""
        if end < len(self.text) and is_ident_start(self.text[end]):
            end = self._scan_ident(end + 1)
        text = self.text[self.pos:end]
        self._advance_to(end)
        return Literal(text, Span(start, self._location()))

    def _quoted_string(self) -> Literal:
        start = self._location()
        return self._finish_literal(self._scan_quoted(self.pos + 1), start)

    def _prefixed_literal(self) -> Optional[Literal]:
        start = self._location()

        m = self.RAW_STRING_START.match(self.text, self.pos)
        if m:
            return self._finish_literal(self._scan_raw(m.end(), len(m.group(1))), start)

        m = self.QUOTED_STRING_START.match(self.text, self.pos)
        if m:
            return self._finish_literal(self._scan_quoted(m.end()), start)

        m = self.BYTE_CHAR_START.match(self.text, self.pos)
        if m:
            return self._finish_literal(self._scan_char(m.end()), start)

        return None

    def _number(self) -> Literal:
        start = self._location()

        based = self.BASED_INT.match(self.text, self.pos)
        if based:
            return self._finish_literal(based.end(), start)

        idx = self.DEC_DIGITS.match(self.text, self.pos).end()
        trailing_dot = False

        # `1.` is a float unless followed by a range dot or a field/method name
        if self.text.startswith(".", idx):
            after = self.text[idx + 1:idx + 2]
            if after != "." and not (after and is_ident_start(after)):
                idx += 1
                digits = self.DEC_DIGITS.match(self.text, idx)
                if digits:
                    idx = digits.end()
                else:
                    trailing_dot = True

        if not trailing_dot:
            exponent = self.EXPONENT.match(self.text, idx)
            if exponent:
                idx = exponent.end()

        return self._finish_literal(idx, start)

    # ---- punctuation ----

    def _punct(self) -> Punct:
        start = self._location()
        ch = self.text[self.pos]
        self._advance_to(self.pos + 1)

        nxt = self._peek()
        starts_comment = self.text.startswith("//", self.pos) or self.text.startswith("/*", self.pos)
        spacing = Spacing.JOINT if nxt in PUNCT_CHARS and not starts_comment else Spacing.ALONE
        return Punct(ch, spacing, Span(start, self._location()))


def string_literal(value: str) -> str:
    """Render `value` as an escaped Rust string literal."""
    out = ['"']
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\0":
            out.append("\\0")
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def tokenize(text: str) -> TokenStream:
    """
    Tokenize Rust source text into a token stream.

    Raises:
        LexError: If the text is not a sequence of valid Rust tokens
    """
    return RustLexer(text).tokenize()


__all__ = ["RustLexer", "tokenize", "string_literal", "PUNCT_CHARS", "is_ident_start", "is_ident_continue"]
