"""
Tests for tree-sitter parsing, queries and flattening.
"""

import pytest

from rustmin.errors import ParseError
from rustmin.syntax import SyntaxTree, flatten, parse, strip_preamble
from rustmin.tokens import Group, Ident


class TestParse:

    def test_valid_file(self, sample_code):
        tree = parse(sample_code)
        assert isinstance(tree, SyntaxTree)
        assert tree.root_node.type == "source_file"
        assert not tree.has_error()
        assert tree.get_errors() == []

    @pytest.mark.parametrize("text", [
        "fn f( {",
        "struct S { x: }",
        "fn main() { let = 1; }",
    ])
    def test_invalid_file(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert str(exc_info.value)

    def test_error_message_has_location(self):
        with pytest.raises(ParseError) as exc_info:
            parse("fn main() {}\nfn (")
        err = exc_info.value
        if err.line is not None:
            assert err.line == 2
            assert f"at line {err.line} column {err.column}" in str(err)

    def test_empty_file(self):
        tree = parse("")
        assert tree.flatten() == []


class TestPreamble:

    def test_shebang_is_removed(self):
        tree = parse("#!/usr/bin/env run-cargo-script\nfn main() {}\n")
        assert tree.text == "\nfn main() {}\n"
        assert flatten(tree)[0] == Ident("fn")

    def test_inner_attribute_is_not_a_shebang(self):
        text = "#![allow(unused)]\nfn main() {}\n"
        assert strip_preamble(text) == text
        assert strip_preamble("#! [allow(unused)]") == "#! [allow(unused)]"

    def test_byte_order_mark(self):
        assert strip_preamble("\ufefffn f() {}") == "fn f() {}"


class TestFlatten:

    def test_flatten_is_cached(self):
        tree = parse("fn f() { g(1) }")
        first = tree.flatten()
        assert tree.flatten() is first
        assert [type(t).__name__ for t in first] == ["Ident", "Ident", "Group", "Group"]
        assert isinstance(first[3].stream[1], Group)

    def test_doc_comments_are_desugared(self):
        tokens = parse("/// Hi\nfn f() {}").flatten()
        assert tokens[0].char == "#"
        assert tokens[1].stream[0] == Ident("doc")


class TestQueries:

    CODE = "#![allow(dead_code)]\n// plain\n/// doc\n#[derive(Debug)]\nstruct S;\n"

    def test_attribute_items(self):
        tree = parse(self.CODE)
        items = tree.query_nodes("attributes", "attribute_item")
        assert [n.type for n in items] == ["inner_attribute_item", "attribute_item"]
        assert tree.get_node_text(items[1]) == "#[derive(Debug)]"

    def test_comments_in_document_order(self):
        tree = parse(self.CODE)
        comments = [tree.get_node_text(n).strip() for n in tree.query_nodes("comments", "comment")]
        assert comments == ["// plain", "/// doc"]

    def test_unknown_query(self):
        tree = parse(self.CODE)
        with pytest.raises(ValueError):
            tree.query("functions")


class TestPositions:

    def test_unicode_offsets(self):
        text = "// é\nfn f() {}"
        tree = parse(text)
        fn = next(n for n in tree.walk_tree() if n.type == "function_item")
        assert fn.start_byte == len("// é\n".encode("utf-8"))
        assert tree.get_node_range(fn) == (5, len(text))
        assert tree.line_column(fn.start_byte) == (2, 0)
        assert tree.get_node_text(fn) == "fn f() {}"

    def test_byte_positions_clamp(self):
        tree = parse("fn f() {}")
        assert tree.byte_to_char_position(-1) == 0
        assert tree.byte_to_char_position(1000) == len("fn f() {}")
