#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
tree_depth : Compute the nesting depth of a tree

Examples
--------
    >>> from mdcomponents.ast import Heading, Text, Emphasis
    >>> heading = Heading(level=1, content=[Text("Hello "), Emphasis(content=[Text("world")])])
    >>> extract_text(heading)
    'Hello world'
    >>> tree_depth(heading)
    3

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from mdcomponents.ast.nodes import Code, CodeBlock, Image, Text, get_node_children

if TYPE_CHECKING:
    from mdcomponents.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text, inline code, code blocks and image alt text contribute; markup is
    dropped.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used between the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code, CodeBlock)):
        return node.content
    if isinstance(node, Image):
        return node.alt_text

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))


def tree_depth(node: Node) -> int:
    """Return the number of nodes on the longest root-to-leaf path.

    Parameters
    ----------
    node : Node
        Root of the tree to measure

    Returns
    -------
    int
        Depth of the tree; a lone leaf has depth 1

    """
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in get_node_children(current))
    return deepest
