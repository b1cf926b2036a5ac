"""
Tests for the Rust lexer.
"""

import pytest

from rustmin.errors import LexError
from rustmin.lexer import string_literal, tokenize
from rustmin.tokens import Delimiter, Group, Ident, LineColumn, Literal, Punct, Spacing


def kinds(tokens):
    """Compact (kind, text) view of a flat stream."""
    out = []
    for tt in tokens:
        if isinstance(tt, Punct):
            out.append(("punct", tt.char))
        elif isinstance(tt, Group):
            out.append(("group", tt.delimiter.open))
        else:
            out.append((type(tt).__name__.lower(), tt.text))
    return out


class TestWords:

    def test_identifiers_and_keywords(self):
        assert kinds(tokenize("pub fn _x über")) == [
            ("ident", "pub"), ("ident", "fn"), ("ident", "_x"), ("ident", "über"),
        ]

    def test_raw_identifier(self):
        assert kinds(tokenize("r#type")) == [("ident", "r#type")]

    def test_lifetimes_are_single_words(self):
        assert kinds(tokenize("&'a str 'static '_")) == [
            ("punct", "&"), ("ident", "'a"), ("ident", "str"), ("ident", "'static"), ("ident", "'_"),
        ]

    def test_char_literals_vs_lifetimes(self):
        assert kinds(tokenize("'a' '\\n' '\\u{1F600}' ' ' 'b")) == [
            ("literal", "'a'"),
            ("literal", "'\\n'"),
            ("literal", "'\\u{1F600}'"),
            ("literal", "' '"),
            ("ident", "'b"),
        ]


class TestLiterals:

    @pytest.mark.parametrize("text", [
        "123", "1_000", "1u8", "0xFF_u8", "0o17", "0b1010", "1.5", "1.5e-3f64", "2E10", "1.",
        '"plain"', '"esc\\"aped\\\\"', 'r"raw"', 'r#"has "quotes""#', 'b"bytes"', 'br#"x"#',
        "b'x'", 'c"cstr"', '"with"suffix',
    ])
    def test_single_literal(self, text):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert isinstance(tokens[0], Literal)
        assert tokens[0].text == text

    def test_multiline_string(self):
        tokens = tokenize('"line one\nline two"')
        assert kinds(tokens) == [("literal", '"line one\nline two"')]

    def test_range_after_integer(self):
        assert kinds(tokenize("1..2")) == [
            ("literal", "1"), ("punct", "."), ("punct", "."), ("literal", "2"),
        ]

    def test_method_call_on_integer(self):
        assert kinds(tokenize("1.max(2)")) == [
            ("literal", "1"), ("punct", "."), ("ident", "max"), ("group", "("),
        ]

    def test_nested_tuple_index_is_float(self):
        assert kinds(tokenize("x.0.1")) == [("ident", "x"), ("punct", "."), ("literal", "0.1")]

    def test_trailing_dot_float(self):
        tokens = tokenize("0. ..1.")
        assert kinds(tokens) == [
            ("literal", "0."), ("punct", "."), ("punct", "."), ("literal", "1."),
        ]
        assert tokens[0].has_trailing_dot()
        assert not Literal("1.5").has_trailing_dot()
        assert not Literal('"a."').has_trailing_dot()


class TestPunctuation:

    def test_joint_spacing(self):
        tokens = tokenize("a->b")
        assert tokens[1] == Punct("-", Spacing.JOINT)
        assert tokens[2] == Punct(">", Spacing.ALONE)

    def test_alone_before_space_and_words(self):
        tokens = tokenize("a - b")
        assert tokens[1].spacing is Spacing.ALONE

    def test_alone_before_comment(self):
        tokens = tokenize("x-/* c */y")
        assert kinds(tokens) == [("ident", "x"), ("punct", "-"), ("ident", "y")]
        assert tokens[1].spacing is Spacing.ALONE

    def test_positions(self):
        tokens = tokenize("a\n  + b")
        assert tokens[1].span.start == LineColumn(2, 2)
        assert tokens[1].span.end == LineColumn(2, 3)
        assert tokens[0].span.start == LineColumn(1, 0)


class TestGroups:

    def test_nested_groups(self):
        tokens = tokenize("f(a, [b]) { c }")
        assert kinds(tokens) == [("ident", "f"), ("group", "("), ("group", "{")]
        paren = tokens[1]
        assert paren.delimiter is Delimiter.PARENTHESIS
        assert kinds(paren.stream) == [("ident", "a"), ("punct", ","), ("group", "[")]
        assert paren.stream[2].delimiter is Delimiter.BRACKET
        assert paren.stream[2].stream == (Ident("b"),)

    @pytest.mark.parametrize("text", ["(", ")", "(]", "{ [ }", "fn f() {"])
    def test_unbalanced_delimiters(self, text):
        with pytest.raises(LexError):
            tokenize(text)


class TestComments:

    def test_plain_comments_are_dropped(self):
        text = "a // line\n/* block /* nested */ still */ b //// not doc\n/***/ /**/ c"
        assert kinds(tokenize(text)) == [("ident", "a"), ("ident", "b"), ("ident", "c")]

    def test_outer_line_doc(self):
        tokens = tokenize("/// Hello\nfn")
        assert tokens[0] == Punct("#")
        assert tokens[1] == Group(
            Delimiter.BRACKET,
            (Ident("doc"), Punct("="), Literal('" Hello"')),
        )
        assert tokens[2] == Ident("fn")

    def test_inner_line_doc(self):
        tokens = tokenize("//! Crate")
        assert kinds(tokens) == [("punct", "#"), ("punct", "!"), ("group", "[")]
        assert tokens[2].stream[2] == Literal('" Crate"')

    def test_block_docs(self):
        outer = tokenize("/** Outer */")
        inner = tokenize("/*! Inner */")
        assert outer[1].stream[2].text == '" Outer "'
        assert kinds(inner)[:2] == [("punct", "#"), ("punct", "!")]
        assert inner[2].stream[2].text == '" Inner "'

    def test_doc_body_is_escaped(self):
        tokens = tokenize('/// say "hi" \\o/')
        assert tokens[1].stream[2].text == r'" say \"hi\" \\o/"'

    def test_crlf_line_endings_stay_out_of_docs(self):
        tokens = tokenize("/// hi\r\nfn\r\n")
        assert tokens[1].stream[2] == Literal('" hi"')
        assert tokens[2] == Ident("fn")
        block = tokenize("/** a\r\nb */")
        assert block[1].stream[2].text == r'" a\nb "'


class TestErrors:

    @pytest.mark.parametrize("text", [
        '"unterminated',
        "/* unterminated",
        "r#\"raw\"",
        "'ab'",
        "a € b",
    ])
    def test_rejected(self, text):
        with pytest.raises(LexError):
            tokenize(text)

    def test_error_location(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("fn f() {\n    ]\n}")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 4


def test_string_literal_escaping():
    assert string_literal(' a "b" \\') == r'" a \"b\" \\"'
    assert string_literal("tab\tnl\n") == r'"tab\tnl\n"'
    assert string_literal("\x01") == r'"\u{1}"'


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("  \n\t // only a comment") == []
