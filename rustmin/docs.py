"""
Removal of documentation from Rust source files.

Strips doc comments (`///`, `//!`, `/** */`, `/*! */`), `doc` attributes and
missing-documentation lints from `warn`/`deny`/`forbid` attributes on items,
fields, variants and the crate itself. Everything else is left byte for byte.

Metadata are found by walking the item structure: outer attributes and doc
comments precede their item inside its container, inner ones sit at the top
of the item's body. Blocks are searched for nested items, but metadata of
plain statements such as `let` are kept.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tree_sitter import Node

from .range_edits import RangeEditor
from .syntax import SyntaxTree, parse

logger = logging.getLogger(__name__)

# Item categories that may carry documentation metadata
ITEM_KINDS = frozenset({
    "mod_item",
    "function_item",
    "function_signature_item",
    "struct_item",
    "enum_item",
    "union_item",
    "trait_item",
    "impl_item",
    "type_item",
    "associated_type",
    "field_declaration",
    "enum_variant",
    "static_item",
    "const_item",
    "macro_invocation",
    "macro_definition",
    "use_declaration",
    "extern_crate_declaration",
    "foreign_mod_item",
})

# Node kinds listing items, fields or variants
CONTAINER_KINDS = frozenset({
    "source_file",
    "declaration_list",
    "field_declaration_list",
    "ordered_field_declaration_list",
    "enum_variant_list",
})

LINT_LEVELS = frozenset({"warn", "deny", "forbid"})

MISSING_DOCS_LINTS = frozenset({
    "missing_docs",
    "missing_crate_level_docs",
    "rustdoc::missing_crate_level_docs",
    "clippy::missing_docs_in_private_items",
})

COMMENT_KINDS = ("line_comment", "block_comment")


def is_documentation_comment(comment_text: str) -> bool:
    """
    Check if comment is Rust documentation.

    Rust documentation comments have specific markers:
    - /// - outer doc comment (single line), but not ////
    - //! - inner doc comment (single line)
    - /** ... */ - outer doc comment (multi-line), but not /*** or /**/
    - /*! ... */ - inner doc comment (multi-line)
    """
    text = comment_text.strip()
    if text.startswith("//!") or text.startswith("/*!"):
        return True
    if text.startswith("///"):
        return not text.startswith("////")
    if text.startswith("/**"):
        return not text.startswith("/***") and text != "/**/"
    return False


def is_inner_doc_comment(comment_text: str) -> bool:
    text = comment_text.strip()
    return text.startswith("//!") or text.startswith("/*!")


def _normalize_lint(text: str) -> str:
    return "".join(text.split())


class DocStripper:
    """
    Collects documentation removals for one syntax tree and applies them.

    A stripper instance is single-use: create one per tree.
    """

    def __init__(self, tree: SyntaxTree):
        self.tree = tree
        self.editor = RangeEditor(tree.text)

    def run(self) -> SyntaxTree:
        """
        Strip documentation from the whole file.

        Returns:
            Newly parsed tree of the rewritten text (the input tree when nothing changed)
        """
        self._visit_container(self.tree.root_node)

        if not self.editor.edits:
            return self.tree

        text, stats = self.editor.apply_edits()
        logger.debug(
            "Stripped documentation: %d edits, %d bytes saved, %s",
            stats["edits_applied"], stats["bytes_saved"], stats["by_type"],
        )
        return parse(text)

    # ---- traversal ----

    def _visit_item(self, node: Node) -> None:
        body = node.child_by_field_name("body")
        if body is None:
            return
        if body.type == "block" or body.type in CONTAINER_KINDS:
            self._visit_container(body)

    def _visit_container(self, container: Node) -> None:
        positional = container.type == "ordered_field_declaration_list"
        pending: List[Node] = []

        for child in container.children:
            if self._is_inner_metadata(child):
                self._strip_metadata(child)
            elif self._is_outer_metadata(child):
                pending.append(child)
            elif child.type in COMMENT_KINDS or not child.is_named:
                continue
            else:
                target = self._item_of(child)
                if positional or target is not None:
                    for meta in pending:
                        self._strip_metadata(meta)
                    if target is not None:
                        self._visit_item(target)
                else:
                    # a statement keeps its metadata; blocks inside it may declare items
                    self._visit_nested_blocks(child)
                pending = []

        # outer metadata with nothing after them
        for meta in pending:
            self._strip_metadata(meta)

    def _visit_nested_blocks(self, node: Node) -> None:
        for child in node.named_children:
            if child.type == "block":
                self._visit_container(child)
            else:
                self._visit_nested_blocks(child)

    def _item_of(self, node: Node) -> Optional[Node]:
        if node.type in ITEM_KINDS:
            return node
        # item-position macro call parsed as a statement: `foo!();`
        if node.type == "expression_statement" and node.named_child_count:
            first = node.named_children[0]
            if first.type == "macro_invocation":
                return first
        return None

    def _is_outer_metadata(self, node: Node) -> bool:
        if node.type == "attribute_item":
            return True
        if node.type in COMMENT_KINDS:
            text = self.tree.get_node_text(node)
            return is_documentation_comment(text) and not is_inner_doc_comment(text)
        return False

    def _is_inner_metadata(self, node: Node) -> bool:
        if node.type == "inner_attribute_item":
            return True
        if node.type in COMMENT_KINDS:
            return is_inner_doc_comment(self.tree.get_node_text(node))
        return False

    # ---- rewriting ----

    def _strip_metadata(self, node: Node) -> None:
        if node.type in COMMENT_KINDS:
            self._delete_entry(node, "doc_comment")
            return

        attribute = next((c for c in node.named_children if c.type == "attribute"), None)
        if attribute is None or attribute.named_child_count == 0:
            return

        path = self.tree.get_node_text(attribute.named_children[0])
        if path == "doc":
            self._delete_entry(node, "doc_attribute")
        elif path in LINT_LEVELS:
            arguments = attribute.child_by_field_name("arguments")
            if arguments is not None and arguments.type == "token_tree":
                self._strip_lints(arguments)

    def _strip_lints(self, token_tree: Node) -> None:
        """Drop missing-docs lints from `(lint, lint, ...)`, keeping the rest verbatim."""
        children = token_tree.children
        if len(children) < 2:
            return
        inner = children[1:-1]

        entries: List[List[Node]] = [[]]
        for child in inner:
            if self.tree.get_node_text(child) == ",":
                entries.append([])
            elif child.type not in COMMENT_KINDS:
                entries[-1].append(child)

        kept: List[str] = []
        removed = 0
        for entry in entries:
            if not entry:
                continue
            start_char, _ = self.tree.get_node_range(entry[0])
            _, end_char = self.tree.get_node_range(entry[-1])
            text = self.tree.text[start_char:end_char]
            if _normalize_lint(text) in MISSING_DOCS_LINTS:
                removed += 1
            else:
                kept.append(text)

        if not removed:
            return

        _, inner_start = self.tree.get_node_range(children[0])
        inner_end, _ = self.tree.get_node_range(children[-1])
        self.editor.add_replacement(inner_start, inner_end, ", ".join(kept), "missing_docs_lint")

    def _delete_entry(self, node: Node, edit_type: str) -> None:
        start, end = self.editor.widen_to_lines(*self.tree.get_node_range(node))
        self.editor.add_deletion(start, end, edit_type)


def strip_docs(tree: SyntaxTree) -> SyntaxTree:
    """
    Remove documentation metadata from a parsed file.

    Args:
        tree: Parsed syntax tree (not modified)

    Returns:
        Tree without doc comments, doc attributes and missing-docs lints
    """
    return DocStripper(tree).run()


def find_doc_entries(tree: SyntaxTree) -> List[Node]:
    """All doc comments and `doc` attributes of a file, in document order."""
    entries = []
    for node in tree.query_nodes("comments", "comment"):
        if is_documentation_comment(tree.get_node_text(node)):
            entries.append(node)
    for node in tree.query_nodes("attributes", "attribute"):
        if node.named_child_count and tree.get_node_text(node.named_children[0]) == "doc":
            entries.append(node.parent)
    entries.sort(key=lambda n: n.start_byte)
    return entries


__all__ = [
    "DocStripper",
    "strip_docs",
    "find_doc_entries",
    "is_documentation_comment",
    "ITEM_KINDS",
    "MISSING_DOCS_LINTS",
]
