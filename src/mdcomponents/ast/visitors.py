#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/ast/visitors.py
"""Visitor base class for walking the document tree.

``node.accept(visitor)`` calls ``visitor.visit_<name>(node)``, where
``<name>`` is the node's ``visit_name`` (``visit_paragraph``,
``visit_code_block`` and so on). A visitor only needs methods for the node
types it treats specially; every other node goes to :meth:`visit_node`.

The renderers define a method for every node type. The component compiler
defines methods for containers, images and raw HTML, and renders all other
leaves through :meth:`visit_node`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mdcomponents.ast.nodes import Node


class NodeVisitor:
    """Base class for tree visitors.

    Examples
    --------
    Collect the text of a paragraph:

        >>> from mdcomponents.ast.nodes import Emphasis, Paragraph, Text
        >>> class TextCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.parts = []
        ...     def visit_text(self, node):
        ...         self.parts.append(node.content)
        ...     def visit_node(self, node):
        ...         for child in getattr(node, "content", []):
        ...             child.accept(self)
        >>> collector = TextCollector()
        >>> Paragraph(content=[Text("a "), Emphasis(content=[Text("b")])]).accept(collector)
        >>> collector.parts
        ['a ', 'b']

    """

    def visit_node(self, node: Node) -> Any:
        """Handle a node that has no dedicated ``visit_*`` method.

        Raises
        ------
        NotImplementedError
            Unless a subclass provides a fallback

        """
        raise NotImplementedError(f"{type(self).__name__} does not handle {type(node).__name__} nodes")
