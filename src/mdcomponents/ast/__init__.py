#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The tree is the hand-off point between the Markdown parser and everything
downstream of it:

- nodes: AST node classes representing document structure
- visitors: Visitor pattern base class for AST traversal
- utils: text extraction and depth measurement

Examples
--------
    >>> from mdcomponents.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])

"""

from __future__ import annotations

from mdcomponents.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    get_node_children,
)
from mdcomponents.ast.utils import extract_text, tree_depth
from mdcomponents.ast.visitors import NodeVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Text",
    "ThematicBreak",
    "extract_text",
    "get_node_children",
    "tree_depth",
]
