"""
Tree-sitter query definitions for Rust metadata.
Contains S-expression queries for attributes and comments.
"""

from __future__ import annotations

QUERIES = {
    # Outer and inner attributes
    "attributes": """
    (attribute_item
      (attribute) @attribute) @attribute_item

    (inner_attribute_item
      (attribute) @attribute) @attribute_item
    """,

    # Comments (doc comments are told apart by their markers)
    "comments": """
    (line_comment) @comment

    (block_comment) @comment
    """,
}
