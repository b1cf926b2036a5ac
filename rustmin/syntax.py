"""
Tree-sitter infrastructure for Rust source files.
Provides parsing, query management and node utilities, and the flattening
of a parsed file into a token stream.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree

from .errors import ParseError
from .lexer import tokenize
from .queries import QUERIES
from .tokens import TokenStream

_SHEBANG = re.compile(r"#![^\[\n][^\n]*")

_LANGUAGE: Optional[Language] = None


def rust_language() -> Language:
    """Get the shared Rust Language instance."""
    global _LANGUAGE
    if _LANGUAGE is None:
        import tree_sitter_rust as tsrust
        _LANGUAGE = Language(tsrust.language())
    return _LANGUAGE


class SyntaxTree:
    """
    Wrapper for a Tree-sitter parsed Rust file with query system.

    Instances are created by `parse()`, which guarantees the text is both
    accepted by the grammar and splittable into tokens.
    """

    def __init__(self, text: str):
        self.text = text
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._query_cache: Dict[str, Query] = {}
        self._tokens: Optional[TokenStream] = None
        self._parse()

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = Parser(rust_language())
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def flatten(self) -> TokenStream:
        """
        Token stream of the whole file.

        Returns:
            Top-level token stream (cached)
        """
        if self._tokens is None:
            self._tokens = tokenize(self.text)
        return self._tokens

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query on the document.

        Args:
            query_name: Name of the query to execute

        Returns:
            List of (node, capture_name) tuples

        Raises:
            ValueError: If query is not defined
        """
        if query_name not in QUERIES:
            raise ValueError(f"Unknown query: {query_name}")

        if query_name not in self._query_cache:
            self._query_cache[query_name] = Query(rust_language(), QUERIES[query_name])

        results = []
        cursor = QueryCursor(self._query_cache[query_name])
        for _pattern_index, captures in cursor.matches(self.root_node):
            for capture_name, nodes in captures.items():
                for node in nodes:
                    results.append((node, capture_name))

        # matches() groups by pattern; callers expect document order
        results.sort(key=lambda item: (item[0].start_byte, item[0].end_byte))
        return results

    def query_nodes(self, query_name: str, capture_name: str) -> List[Node]:
        """Nodes of one capture of a named query, deduplicated, in document order."""
        seen = set()
        nodes = []
        for node, name in self.query(query_name):
            key = (node.start_byte, node.end_byte, node.type)
            if name == capture_name and key not in seen:
                seen.add(key)
                nodes.append(node)
        return nodes

    def walk_tree(self, start_node: Optional[Node] = None):
        """
        Walk the tree using TreeCursor for efficient traversal.

        Yields:
            Node objects in depth-first order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8")

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Convert byte position to character position in Unicode text.
        A position inside a multi-byte character maps to the start of that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)
        return len(self._text_bytes[:byte_pos].decode("utf-8", errors="ignore"))

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """Get all ERROR and MISSING nodes in the tree."""
        return [node for node in self.walk_tree() if node.type == "ERROR" or node.is_missing]

    def line_column(self, byte_pos: int) -> Tuple[int, int]:
        """1-based line and 0-based character column of a byte offset."""
        char_pos = self.byte_to_char_position(byte_pos)
        before = self.text[:char_pos]
        line = before.count("\n") + 1
        column = char_pos - (before.rfind("\n") + 1)
        return line, column


def strip_preamble(text: str) -> str:
    """Drop a leading byte order mark and a shebang line."""
    if text.startswith("\ufeff"):
        text = text[1:]
    m = _SHEBANG.match(text)
    if m and not text[2:].lstrip().startswith("["):
        text = text[m.end():]
    return text


def parse(text: str) -> SyntaxTree:
    """
    Parse Rust source text.

    Args:
        text: Contents of a Rust source file

    Returns:
        Parsed syntax tree

    Raises:
        ParseError: If the grammar rejects the text or it cannot be tokenized
    """
    tree = SyntaxTree(strip_preamble(text))

    if tree.has_error():
        errors = tree.get_errors()
        if errors:
            node = errors[0]
            line, column = tree.line_column(node.start_byte)
            what = f"missing `{node.type}`" if node.is_missing else "unexpected syntax"
            raise ParseError(what, line, column)
        raise ParseError("invalid syntax")

    # tokenizing eagerly keeps flatten() total for parsed trees
    tree.flatten()
    return tree


def flatten(tree: SyntaxTree) -> TokenStream:
    return tree.flatten()


__all__ = ["SyntaxTree", "parse", "flatten", "strip_preamble", "rust_language"]
