#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/utils/sourcemap.py
"""Position-to-node lookup over a single line of Markdown source.

The unescape engine needs to know which node a character of re-serialized
source belongs to. mistune does not report inline positions, so the spans
are recovered by walking the parsed tree alongside the source text:

* every block node covers the whole line;
* inline nodes are located with a cursor that advances over text runs
  (allowing for backslash escapes and character references) and over the
  delimiters of emphasis, code spans, links, images and raw HTML.

The children of code, link and raw-HTML nodes are never registered, so the
deepest span covering a position inside them is the protecting node itself.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from mistune.util import unescape as unescape_entities

from mdcomponents.ast.nodes import (
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    get_node_children,
)
from mdcomponents.constants import ENTITY_REFERENCE_PATTERN

# Nodes inside which backslash escapes are literal text
PROTECTED_NODES = (CodeBlock, Code, Link, HTMLBlock, HTMLInline)

# Container markers that can precede inline content on a single line
_BLOCK_PREFIX = re.compile(
    r"[ \t]*(?:(?:>|[-+*]|\d{1,9}[.)])[ \t]+|>|#{1,6}(?:[ \t]+|\Z))*(?:\[[ xX]\][ \t]+)?"
)
_AUTOLINK = re.compile(r"<[^<>\s]*>")
_ENTITY_REFERENCE = re.compile(ENTITY_REFERENCE_PATTERN)


@dataclass(frozen=True)
class NodeSpan:
    """A node and the half-open range of source characters it covers.

    Parameters
    ----------
    node : Node
        The covering node
    start : int
        Index of the first covered character
    end : int
        Index one past the last covered character
    depth : int
        Nesting depth of the node; the document has depth 0

    """

    node: Node
    start: int
    end: int
    depth: int

    def covers(self, index: int) -> bool:
        """Return True if ``index`` lies inside the span."""
        return self.start <= index < self.end


def is_escaped(source: str, index: int) -> bool:
    """Return True if the character at ``index`` is preceded by an odd run of backslashes."""
    backslashes = 0
    position = index - 1
    while position >= 0 and source[position] == "\\":
        backslashes += 1
        position -= 1
    return backslashes % 2 == 1


def find_unescaped(source: str, target: str, start: int) -> int:
    """Find ``target`` at or after ``start`` where its first character is not escaped.

    Returns
    -------
    int
        Index of the match, or -1

    """
    index = source.find(target, start)
    while index != -1 and is_escaped(source, index):
        index = source.find(target, index + 1)
    return index


def _find_closing(source: str, start: int, opener: str, closer: str) -> int:
    """Return the index one past the closer balancing the opener at ``start``."""
    depth = 0
    index = start
    while index < len(source):
        char = source[index]
        if char == "\\":
            index += 2
            continue
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return -1


class SourceMap:
    """Arena of node spans with deepest-first lookup.

    Parameters
    ----------
    spans : list of NodeSpan
        Spans in registration order (pre-order)

    Examples
    --------
        >>> from mdcomponents.parsers.markdown import markdown_to_ast
        >>> source = "a `\\\\*` b"
        >>> source_map = SourceMap.build(markdown_to_ast(source), source)
        >>> type(source_map.innermost(3).node).__name__
        'Code'

    """

    def __init__(self, spans: list[NodeSpan]):
        """Initialize the arena."""
        self.spans = spans

    @classmethod
    def build(cls, root: Node, source: str) -> SourceMap:
        """Build the arena for a tree parsed from ``source``.

        Parameters
        ----------
        root : Node
            Tree parsed from ``source``
        source : str
            Single-line source text the tree was parsed from

        Returns
        -------
        SourceMap
            Arena covering the located nodes

        """
        builder = _SpanBuilder(source)
        builder.add_block(root, 0)
        return cls(builder.spans)

    def innermost(self, index: int) -> Optional[NodeSpan]:
        """Return the deepest span covering ``index``, or None."""
        best: Optional[NodeSpan] = None
        for span in self.spans:
            if span.covers(index) and (best is None or span.depth > best.depth):
                best = span
        return best

    def allows_unescape(self, index: int) -> bool:
        """Return True unless the deepest node covering ``index`` is protected."""
        span = self.innermost(index)
        return span is None or not isinstance(span.node, PROTECTED_NODES)


class _SpanBuilder:
    def __init__(self, source: str):
        self.source = source
        self.spans: list[NodeSpan] = []
        self.cursor = 0

    def add_block(self, node: Node, depth: int) -> None:
        self.spans.append(NodeSpan(node, 0, len(self.source), depth))
        if isinstance(node, PROTECTED_NODES):
            return

        if isinstance(node, (Paragraph, Heading)):
            prefix = _BLOCK_PREFIX.match(self.source)
            self.cursor = prefix.end() if prefix else 0
            self.add_inlines(node.content, depth + 1)
            return

        for child in get_node_children(node):
            self.add_block(child, depth + 1)

    def add_inlines(self, nodes: list[Node], depth: int) -> None:
        for node in nodes:
            if isinstance(node, Text):
                self._advance_text(node.content)
            elif isinstance(node, LineBreak):
                self._skip_chars(" \t\\")
            elif isinstance(node, (Emphasis, Strong, Strikethrough)):
                self._add_delimited(node, depth)
            elif isinstance(node, Code):
                self._add_code(node, depth)
            elif isinstance(node, HTMLInline):
                self._add_found(node, node.content, depth)
            elif isinstance(node, Link):
                self._add_link(node, depth)
            elif isinstance(node, Image):
                self._add_image(node, depth)

    def _skip_chars(self, chars: str) -> None:
        while self.cursor < len(self.source) and self.source[self.cursor] in chars:
            self.cursor += 1

    def _advance_text(self, content: str) -> None:
        """Move the cursor over a text run.

        Source characters may be backslash-escaped, written as an entity or
        numeric character reference, or separated by collapsed whitespace.

        """
        source = self.source
        position = self.cursor
        index = 0
        while index < len(content):
            char = content[index]
            if source.startswith("\\" + char, position):
                position += 2
                index += 1
                continue
            reference = _ENTITY_REFERENCE.match(source, position)
            if reference is not None:
                decoded = unescape_entities(reference.group())
                if decoded != reference.group() and content.startswith(decoded, index):
                    position = reference.end()
                    index += len(decoded)
                    continue
            if source.startswith(char, position):
                position += 1
                index += 1
                continue
            if position < len(source) and source[position] in " \t" and char not in " \t":
                position += 1
                continue
            # Text the source does not spell out; leave the cursor where it was
            return
        self.cursor = position

    def _add_delimited(self, node: Node, depth: int) -> None:
        start = self.cursor
        self._skip_chars("*_~")
        self.add_inlines(get_node_children(node), depth + 1)
        self._skip_chars("*_~")
        self.spans.append(NodeSpan(node, start, self.cursor, depth))

    def _add_code(self, node: Code, depth: int) -> None:
        start = find_unescaped(self.source, "`", self.cursor)
        if start == -1:
            return
        run_end = start
        while run_end < len(self.source) and self.source[run_end] == "`":
            run_end += 1
        fence = self.source[start:run_end]

        close = self.source.find(fence, run_end)
        while close != -1 and close + len(fence) < len(self.source) and self.source[close + len(fence)] == "`":
            close = self.source.find(fence, close + len(fence) + 1)
        end = len(self.source) if close == -1 else close + len(fence)

        self.spans.append(NodeSpan(node, start, end, depth))
        self.cursor = end

    def _add_found(self, node: Node, raw: str, depth: int) -> None:
        start = self.source.find(raw, self.cursor)
        if start == -1:
            return
        self.spans.append(NodeSpan(node, start, start + len(raw), depth))
        self.cursor = start + len(raw)

    def _add_link(self, node: Link, depth: int) -> None:
        bracket = find_unescaped(self.source, "[", self.cursor)
        autolink = _AUTOLINK.search(self.source, self.cursor)
        while autolink is not None and is_escaped(self.source, autolink.start()):
            autolink = _AUTOLINK.search(self.source, autolink.start() + 1)

        if autolink is not None and (bracket == -1 or autolink.start() < bracket):
            self.spans.append(NodeSpan(node, autolink.start(), autolink.end(), depth))
            self.cursor = autolink.end()
            return

        if bracket == -1:
            return
        end = self._bracketed_end(bracket)
        self.spans.append(NodeSpan(node, bracket, end, depth))
        self.cursor = end

    def _add_image(self, node: Image, depth: int) -> None:
        start = find_unescaped(self.source, "![", self.cursor)
        if start == -1:
            return
        end = self._bracketed_end(start + 1)
        self.spans.append(NodeSpan(node, start, end, depth))
        self.cursor = end

    def _bracketed_end(self, bracket: int) -> int:
        """Return the end of ``[text](destination)``, ``[text][label]`` or ``[text]``."""
        label_end = _find_closing(self.source, bracket, "[", "]")
        if label_end == -1:
            return len(self.source)
        if label_end < len(self.source) and self.source[label_end] == "(":
            end = _find_closing(self.source, label_end, "(", ")")
            return len(self.source) if end == -1 else end
        if label_end < len(self.source) and self.source[label_end] == "[":
            end = _find_closing(self.source, label_end, "[", "]")
            return len(self.source) if end == -1 else end
        return label_end
