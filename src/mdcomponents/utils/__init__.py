#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/utils/__init__.py
"""Escaping helpers and the source-position arena used to unescape."""

from mdcomponents.utils.escape import escape_inline_code, escape_markdown_text, unescape_commonmark
from mdcomponents.utils.sourcemap import NodeSpan, SourceMap

__all__ = ["NodeSpan", "SourceMap", "escape_inline_code", "escape_markdown_text", "unescape_commonmark"]
