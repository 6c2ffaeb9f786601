#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/extensions/__init__.py
"""Extension micro-grammar: tokenizer and property parser."""

from mdcomponents.extensions.properties import parse_properties
from mdcomponents.extensions.tokenizer import Extension, ExtensionKind, Tokenizer, trimmed_newlines

__all__ = ["Extension", "ExtensionKind", "Tokenizer", "parse_properties", "trimmed_newlines"]
