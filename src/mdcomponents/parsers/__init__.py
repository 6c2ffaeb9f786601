#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown parsing into the mdcomponents AST."""

from mdcomponents.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
