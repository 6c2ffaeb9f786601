#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdcomponents.

Styling lives in :class:`StyleConfig`; parsing and compilation behaviour in
:class:`MarkdownParserOptions` and :class:`CompilerOptions`. All of them are
frozen dataclasses.
"""

from __future__ import annotations

from mdcomponents.options.base import CloneFrozenMixin
from mdcomponents.options.markdown import CompilerOptions, MarkdownParserOptions
from mdcomponents.options.style import StyleConfig

__all__ = [
    "CloneFrozenMixin",
    "CompilerOptions",
    "MarkdownParserOptions",
    "StyleConfig",
]
