from __future__ import annotations

import logging
from typing import Optional

from .config import MinifyCfg
from .docs import strip_docs
from .minify import minify_file
from .syntax import parse

logger = logging.getLogger(__name__)


def minify_source(text: str, cfg: Optional[MinifyCfg] = None) -> str:
    """
    Parse, optionally strip documentation, and minify Rust source text.

    Raises:
        ParseError: If the text is not a valid Rust file
    """
    cfg = cfg or MinifyCfg()
    tree = parse(text)
    if cfg.strip_docs:
        tree = strip_docs(tree)
    result = minify_file(tree)
    logger.debug("Minified %d chars to %d chars", len(text), len(result))
    return result


__all__ = ["minify_source"]
