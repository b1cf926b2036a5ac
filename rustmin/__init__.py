"""
Minifies Rust code.
"""

from __future__ import annotations

from .config import MinifyCfg, load_config
from .docs import strip_docs
from .errors import ConfigError, LexError, ParseError, RustminUserError
from .lexer import tokenize
from .minify import minify, minify_file
from .pipeline import minify_source
from .syntax import SyntaxTree, flatten, parse

__all__ = [
    "minify",
    "minify_file",
    "minify_source",
    "strip_docs",
    "parse",
    "flatten",
    "tokenize",
    "SyntaxTree",
    "MinifyCfg",
    "load_config",
    "RustminUserError",
    "ParseError",
    "LexError",
    "ConfigError",
]
