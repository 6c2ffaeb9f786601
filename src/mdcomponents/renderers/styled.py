#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/renderers/styled.py
"""Styled-text rendering of AST nodes and HTML fragments.

Styled text is a :class:`rich.text.Text`: a string plus style spans. Two
values concatenate with :meth:`rich.text.Text.append_text`, which keeps the
spans of both operands; that is the *append* operation the compiler folds
components with.

:class:`StyledTextRenderer` walks AST nodes; :func:`html_to_styled_text`
converts HTML (raw HTML nodes, and containers rendered to HTML because they
hold raw HTML) with BeautifulSoup.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag
from rich.errors import StyleError, StyleSyntaxError
from rich.style import Style
from rich.text import Text

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
    ThematicBreak,
)
from mdcomponents.ast.nodes import Text as TextNode
from mdcomponents.ast.visitors import NodeVisitor
from mdcomponents.exceptions import RenderingError
from mdcomponents.options.style import StyleConfig

logger = logging.getLogger(__name__)


def list_marker(node: List, index: int, depth: int, style: StyleConfig) -> str:
    """Return the marker prefixed to a list item.

    Parameters
    ----------
    node : List
        The list the item belongs to
    index : int
        Zero-based position of the item in the list
    depth : int
        Nesting level of the list; top-level lists have depth 0
    style : StyleConfig
        Supplies the bullet, indentation unit and task glyphs

    Returns
    -------
    str
        Indentation, delimiter and a tab, plus a checkbox glyph for task items

    Examples
    --------
        >>> list_marker(List(ordered=True, start=3), 1, 0, StyleConfig())
        '4.\\t'

    """
    if node.ordered:
        delimiter = f"{node.start + index}{node.delimiter if node.delimiter in ('.', ')') else '.'}"
    else:
        delimiter = style.bullet

    marker = f"{style.indent * depth}{delimiter}\t"

    item = node.items[index] if index < len(node.items) else None
    if item is not None and item.task_status is not None:
        glyph = style.task_checked if item.task_status == "checked" else style.task_unchecked
        marker = f"{marker}{glyph} "
    return marker


class StyledTextRenderer(NodeVisitor):
    """Render AST nodes to rich ``Text`` under a :class:`StyleConfig`.

    Inline formatting is layered: the style of a span is the base style of
    the configuration combined with every enclosing emphasis, strong, code
    or link style. Blocks are joined with the configured paragraph
    separator.

    Parameters
    ----------
    style : StyleConfig or None, default = None
        Default configuration used when :meth:`render` is called without one

    Examples
    --------
        >>> from mdcomponents.ast import Paragraph, Strong, Text
        >>> text = StyledTextRenderer().render(Paragraph(content=[Text("a "), Strong(content=[Text("b")])]))
        >>> text.plain
        'a b'

    """

    def __init__(self, style: StyleConfig | None = None):
        """Initialize the renderer with a default style configuration."""
        self.style_config = style or StyleConfig()
        self._config = self.style_config
        self._text = Text()
        self._styles: list[Style] = []
        self._list_depth = 0

    def render(self, node: Node, style: StyleConfig | None = None) -> Text:
        """Render a node to styled text.

        Parameters
        ----------
        node : Node
            Node to render
        style : StyleConfig or None, default = None
            Configuration for this call; falls back to the renderer default

        Returns
        -------
        Text
            Styled text for the node

        Raises
        ------
        RenderingError
            If a style cannot be applied

        """
        self._config = style or self.style_config
        self._text = Text(justify=self._config.justify)
        self._styles = [self._config.style]
        self._list_depth = 0

        try:
            node.accept(self)
        except (StyleError, StyleSyntaxError, ValueError, TypeError) as e:
            raise RenderingError(
                f"Failed to render {type(node).__name__} to styled text: {e}",
                rendering_stage="styled_text",
                node_type=type(node).__name__,
                original_error=e,
            ) from e

        return self._text

    def __call__(self, node: Node, style: StyleConfig | None = None) -> Text:
        """Render a node; lets the renderer act as a plain callable."""
        return self.render(node, style)

    @property
    def _current_style(self) -> Style:
        return Style.combine(self._styles)

    def _append(self, text: str, extra: Optional[Style] = None) -> None:
        if not text:
            return
        style = self._current_style if extra is None else self._current_style + extra
        self._text.append(text, style=style or None)

    def _with_style(self, style: Style, nodes: list[Node]) -> None:
        self._styles.append(style)
        try:
            for node in nodes:
                node.accept(self)
        finally:
            self._styles.pop()

    def _render_blocks(self, children: list[Node]) -> None:
        for i, child in enumerate(children):
            if i > 0:
                self._text.append(self._config.paragraph_separator)
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._render_blocks(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node with the style of its level."""
        index = min(max(node.level, 1), len(self._config.heading_styles)) - 1
        self._with_style(Style.parse(self._config.heading_styles[index]), node.content)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        for child in node.content:
            child.accept(self)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        self._append(node.content, Style.parse(self._config.code_block_style))

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._styles.append(Style.parse(self._config.block_quote_style))
        try:
            self._render_blocks(node.children)
        finally:
            self._styles.pop()

    def visit_list(self, node: List) -> None:
        """Render a List node with one marker per item."""
        depth = self._list_depth
        marker_style = Style.parse(self._config.list_marker_style)
        self._list_depth += 1
        try:
            for i, item in enumerate(node.items):
                if i > 0:
                    self._text.append(self._config.paragraph_separator)
                self._append(list_marker(node, i, depth, self._config), marker_style)
                item.accept(self)
        finally:
            self._list_depth -= 1

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node."""
        self._render_blocks(node.children)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._append(self._config.thematic_break)

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node through the HTML converter."""
        self._text.append_text(html_to_styled_text(node.content, self._config))

    def visit_text(self, node: TextNode) -> None:
        """Render a Text node."""
        self._append(node.content)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._with_style(Style.parse(self._config.emphasis_style), node.content)

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._with_style(Style.parse(self._config.strong_style), node.content)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._with_style(Style.parse(self._config.strikethrough_style), node.content)

    def visit_code(self, node: Code) -> None:
        """Render a Code node."""
        self._append(node.content, Style.parse(self._config.code_style))

    def visit_link(self, node: Link) -> None:
        """Render a Link node; the destination is attached as a rich link."""
        style = Style.parse(self._config.link_style) + Style(link=node.url or None)
        self._with_style(style, node.content)

    def visit_image(self, node: Image) -> None:
        """Render an Image node as its alt text."""
        self._append(node.alt_text)

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._append(self._config.soft_break if node.soft else "\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node through the HTML converter."""
        self._text.append_text(html_to_styled_text(node.content, self._config))


# ============================================================================
# HTML to styled text
# ============================================================================

_BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "div",
        "dl",
        "dt",
        "dd",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "tr",
        "ul",
    }
)
_SKIPPED_TAGS = frozenset({"script", "style", "head", "title", "template"})
_WHITESPACE = re.compile(r"\s+")


class HtmlStyledTextBuilder:
    """Convert an HTML fragment to rich ``Text`` using BeautifulSoup.

    Inline tags map onto the styles of the configuration (``em`` to the
    emphasis style, ``a`` to the link style, ...). Block tags are separated
    by the paragraph separator; whitespace is collapsed outside ``pre``.

    Parameters
    ----------
    style : StyleConfig
        Styles and glyphs to use

    """

    def __init__(self, style: StyleConfig):
        """Initialize the builder."""
        self.config = style
        self._text = Text()
        self._styles: list[Style] = []
        self._pending_break = False
        self._in_pre = 0

    def build(self, html: str) -> Text:
        """Convert ``html`` to styled text.

        Parameters
        ----------
        html : str
            HTML fragment

        Returns
        -------
        Text
            Styled text with surrounding whitespace removed

        """
        self._text = Text(justify=self.config.justify)
        self._styles = [self.config.style]
        self._pending_break = False
        self._in_pre = 0

        soup = BeautifulSoup(html, "html.parser")
        for child in soup.children:
            self._walk(child)

        self._text.rstrip()
        return self._text

    def _tag_style(self, tag: Tag) -> Optional[Style]:
        name = tag.name
        config = self.config
        if name in ("em", "i", "cite", "var"):
            return Style.parse(config.emphasis_style)
        if name in ("strong", "b"):
            return Style.parse(config.strong_style)
        if name in ("del", "s", "strike"):
            return Style.parse(config.strikethrough_style)
        if name in ("code", "kbd", "samp", "tt") and not self._in_pre:
            return Style.parse(config.code_style)
        if name == "u" or name == "ins":
            return Style(underline=True)
        if name == "a":
            href = tag.get("href")
            return Style.parse(config.link_style) + Style(link=str(href) if href else None)
        if name in ("h1", "h2", "h3", "h4", "h5", "h6"):
            return Style.parse(config.heading_styles[int(name[1]) - 1])
        if name == "blockquote":
            return Style.parse(config.block_quote_style)
        if name == "pre":
            return Style.parse(config.code_block_style)
        return None

    def _append(self, text: str, collapse: bool = True) -> None:
        if not text:
            return
        if collapse and not self._in_pre:
            text = _WHITESPACE.sub(" ", text)
            if self._pending_break or not self._text.plain or self._text.plain.endswith(("\n", " ")):
                text = text.lstrip(" ")
            if not text:
                return
        if self._pending_break:
            if self._text.plain:
                self._text.append(self.config.paragraph_separator)
            self._pending_break = False
        style = Style.combine(self._styles)
        self._text.append(text, style=style or None)

    def _walk(self, node: Any) -> None:
        if isinstance(node, PreformattedString):
            # Comments, doctypes and processing instructions
            return
        if isinstance(node, NavigableString):
            self._append(str(node))
            return
        if not isinstance(node, Tag) or node.name in _SKIPPED_TAGS:
            return

        name = node.name
        if name == "br":
            self._append_raw("\n")
            return
        if name == "hr":
            self._pending_break = True
            self._append(self.config.thematic_break)
            self._pending_break = True
            return
        if name == "img":
            alt = node.get("alt")
            if alt:
                self._append(str(alt))
            return

        is_block = name in _BLOCK_TAGS
        if is_block:
            self._pending_break = True
        if name == "li":
            self._append(self._li_marker(node), collapse=False)
        if name == "pre":
            self._in_pre += 1

        style = self._tag_style(node)
        if style is not None:
            self._styles.append(style)
        try:
            for child in node.children:
                self._walk(child)
        finally:
            if style is not None:
                self._styles.pop()
            if name == "pre":
                self._in_pre -= 1

        if is_block:
            self._pending_break = True

    def _append_raw(self, text: str) -> None:
        style = Style.combine(self._styles)
        self._text.append(text, style=style or None)

    def _li_marker(self, node: Tag) -> str:
        parent = node.parent
        depth = max(len([p for p in node.parents if isinstance(p, Tag) and p.name in ("ul", "ol")]) - 1, 0)
        indent = self.config.indent * depth
        if isinstance(parent, Tag) and parent.name == "ol":
            start_attr = parent.get("start")
            try:
                start = int(str(start_attr)) if start_attr is not None else 1
            except ValueError:
                start = 1
            position = len([sibling for sibling in node.find_previous_siblings("li")])
            return f"{indent}{start + position}.\t"
        return f"{indent}{self.config.bullet}\t"


def html_to_styled_text(html: str, style: StyleConfig | None = None) -> Text:
    """Convert an HTML fragment to styled text.

    Parameters
    ----------
    html : str
        HTML fragment
    style : StyleConfig or None, default = None
        Styles and glyphs to use

    Returns
    -------
    Text
        Styled text

    Raises
    ------
    RenderingError
        If the HTML cannot be converted

    Examples
    --------
        >>> html_to_styled_text("<p>Hello <em>world</em></p>").plain
        'Hello world'

    """
    try:
        return HtmlStyledTextBuilder(style or StyleConfig()).build(html)
    except (StyleError, StyleSyntaxError, ValueError, TypeError) as e:
        raise RenderingError(
            f"Failed to convert HTML to styled text: {e}", rendering_stage="html_styled_text", original_error=e
        ) from e
