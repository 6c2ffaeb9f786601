#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/renderers/html.py
"""HTML rendering of AST nodes.

The compiler renders containers that hold raw HTML through this renderer and
hands the result to :func:`mdcomponents.renderers.styled.html_to_styled_text`,
so raw HTML blocks and inline tags keep their meaning instead of being
re-serialized as Markdown.

"""

from __future__ import annotations

from html import escape

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
)
from mdcomponents.ast.visitors import NodeVisitor
from mdcomponents.exceptions import RenderingError
from mdcomponents.renderers.base import BaseRenderer, InlineContentMixin


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to an HTML fragment.

    Text is HTML-escaped; raw HTML nodes pass through verbatim.

    Examples
    --------
        >>> from mdcomponents.ast import Emphasis, Paragraph, Text
        >>> HtmlRenderer().render_to_string(Paragraph(content=[Text("a < "), Emphasis(content=[Text("b")])]))
        '<p>a &lt; <em>b</em></p>'

    """

    def __init__(self) -> None:
        """Initialize the renderer with an empty output buffer."""
        BaseRenderer.__init__(self)
        self._output: list[str] = []

    def render_to_string(self, node: Node) -> str:
        """Render a node to HTML.

        Parameters
        ----------
        node : Node
            Node to render

        Returns
        -------
        str
            HTML fragment without trailing newlines

        Raises
        ------
        RenderingError
            If the node cannot be rendered

        """
        self._output = []
        try:
            node.accept(self)
        except (AttributeError, TypeError, ValueError) as e:
            raise RenderingError(
                f"Failed to render {type(node).__name__} to HTML: {e}",
                rendering_stage="html",
                node_type=type(node).__name__,
                original_error=e,
            ) from e
        result = "".join(self._output)
        self._output = []
        return result.rstrip("\n")

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        level = min(6, max(1, node.level))
        content = self._render_inline_content(node.content)
        self._output.append(f"<h{level}>{content}</h{level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        content = self._render_inline_content(node.content)
        self._output.append(f"<p>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        class_attr = f' class="language-{escape(node.language)}"' if node.language else ""
        self._output.append(f"<pre><code{class_attr}>{escape(node.content)}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._output.append("<blockquote>\n")
        for child in node.children:
            child.accept(self)
        self._output.append("</blockquote>\n")

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        tag = "ol" if node.ordered else "ul"
        start_attr = f' start="{node.start}"' if node.ordered and node.start != 1 else ""
        self._output.append(f"<{tag}{start_attr}>\n")
        for item in node.items:
            item.accept(self)
        self._output.append(f"</{tag}>\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        Tight list paragraphs are rendered without ``<p>`` tags; task items
        start with a checkbox glyph.

        """
        self._output.append("<li>")
        if node.task_status:
            self._output.append("&#9745; " if node.task_status == "checked" else "&#9744; ")

        for child in node.children:
            if isinstance(child, Paragraph):
                self._output.append(self._render_inline_content(child.content))
            else:
                child.accept(self)

        self._output.append("</li>\n")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("<hr>\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content)
        if not node.content.endswith("\n"):
            self._output.append("\n")

    def visit_text(self, node: Text) -> None:
        """Render a Text node."""
        self._output.append(escape(node.content, quote=False))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"<del>{self._render_inline_content(node.content)}</del>")

    def visit_code(self, node: Code) -> None:
        """Render a Code node."""
        self._output.append(f"<code>{escape(node.content, quote=False)}</code>")

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        content = self._render_inline_content(node.content)
        title_attr = f' title="{escape(node.title)}"' if node.title else ""
        self._output.append(f'<a href="{escape(node.url)}"{title_attr}>{content}</a>')

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        title_attr = f' title="{escape(node.title)}"' if node.title else ""
        self._output.append(f'<img src="{escape(node.url)}" alt="{escape(node.alt_text)}"{title_attr}>')

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node; soft breaks become a space."""
        self._output.append(" " if node.soft else "<br>\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)
