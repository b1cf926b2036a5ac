"""
Minification entry points.

The serializer output is optimistic: it is re-lexed and compared with the
input tokens, and the canonical one-space rendering replaces it whenever the
two disagree.
"""

from __future__ import annotations

import logging
from typing import Sequence, TYPE_CHECKING

from .serializer import canonical, serialize
from .tokens import TokenTree
from .verify import verify

if TYPE_CHECKING:
    from .syntax import SyntaxTree

logger = logging.getLogger(__name__)


def minify(tokens: Sequence[TokenTree]) -> str:
    """
    Minify a token stream.

    Always returns text that lexes back to the same tokens.

    Args:
        tokens: Token stream to render

    Returns:
        Minified text, or the canonical rendering if the minified
        candidate does not re-lex to an equivalent stream
    """
    candidate = serialize(tokens)
    if verify(candidate, tokens):
        return candidate

    logger.debug("Minified candidate does not re-lex to the input tokens; using canonical rendering")
    return canonical(tokens)


def minify_file(tree: SyntaxTree) -> str:
    """Minify a parsed source file. Unnecessary spaces may be left."""
    return minify(tree.flatten())


__all__ = ["minify", "minify_file"]
