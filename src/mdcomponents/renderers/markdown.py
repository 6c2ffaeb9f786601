#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/renderers/markdown.py
"""CommonMark re-serialization of AST nodes.

The compiler matches extension syntax against the source text of a node,
not against its parsed children. This renderer produces that source text
(the node's *description*): canonical CommonMark in which literal ASCII
punctuation inside text runs is backslash-escaped, so the output re-parses
to the same tree. :func:`mdcomponents.utils.escape.unescape_commonmark`
reverses the escaping before tokenization.

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
)
from mdcomponents.ast.visitors import NodeVisitor
from mdcomponents.exceptions import RenderingError
from mdcomponents.renderers.base import BaseRenderer, InlineContentMixin
from mdcomponents.utils.escape import escape_inline_code, escape_markdown_text


def _longest_run(text: str, char: str) -> int:
    longest = current = 0
    for c in text:
        current = current + 1 if c == char else 0
        longest = max(longest, current)
    return longest


def _indent_lines(text: str, first_prefix: str, rest_prefix: str) -> str:
    lines = text.split("\n")
    indented = [first_prefix + lines[0]]
    for line in lines[1:]:
        indented.append(rest_prefix + line if line else rest_prefix.rstrip())
    return "\n".join(indented)


class CommonMarkRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes back to CommonMark source text.

    Any node can be rendered, not only a Document. Blocks are separated by a
    blank line, tight list items by a single newline, soft breaks become a
    newline and hard breaks two trailing spaces.

    Examples
    --------
        >>> from mdcomponents.ast import Paragraph, Strong, Text
        >>> renderer = CommonMarkRenderer()
        >>> renderer.render_to_string(Paragraph(content=[Text("a*b "), Strong(content=[Text("c")])]))
        'a\\\\*b **c**'

    """

    def __init__(self) -> None:
        """Initialize the renderer with an empty output buffer."""
        BaseRenderer.__init__(self)
        self._output: list[str] = []

    def render_to_string(self, node: Node) -> str:
        """Render a node to CommonMark.

        Parameters
        ----------
        node : Node
            The node to render

        Returns
        -------
        str
            CommonMark source text, without trailing newlines

        Raises
        ------
        RenderingError
            If the node cannot be serialized

        """
        self._output = []
        try:
            node.accept(self)
        except (AttributeError, TypeError, ValueError) as e:
            raise RenderingError(
                f"Failed to serialize {type(node).__name__}: {e}",
                rendering_stage="commonmark",
                node_type=type(node).__name__,
                original_error=e,
            ) from e
        result = "".join(self._output)
        self._output = []
        return result.rstrip("\n")

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children, "\n\n"))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node in ATX style."""
        content = self._render_inline_content(node.content)
        self._output.append(f"{'#' * node.level} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node.

        Fenced blocks keep their fence character; the fence is lengthened when
        the content holds a longer run of it. Indented blocks stay indented.

        """
        if not node.fenced:
            self._output.append("\n".join(f"    {line}" if line else "" for line in node.content.split("\n")))
            return

        fence_char = node.fence_char if node.fence_char in ("`", "~") else "`"
        fence_length = max(3, node.fence_length, _longest_run(node.content, fence_char) + 1)
        fence = fence_char * fence_length
        lang = node.language or ""

        self._output.append(f"{fence}{lang}\n")
        if node.content:
            self._output.append(node.content)
            self._output.append("\n")
        self._output.append(fence)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node, prefixing every line with ``>``."""
        quoted = self._render_blocks(node.children, "\n\n")
        self._output.append(_indent_lines(quoted, "> ", "> "))

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        separator = "\n" if node.tight else "\n\n"
        rendered = []
        for i, item in enumerate(node.items):
            if node.ordered:
                delimiter = node.delimiter if node.delimiter in (".", ")") else "."
                marker = f"{node.start + i}{delimiter} "
            else:
                bullet = node.delimiter if node.delimiter in ("-", "*", "+") else "-"
                marker = f"{bullet} "
            rendered.append(self._render_list_item(item, marker, node.tight))
        self._output.append(separator.join(rendered))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node reached outside of a List."""
        self._output.append(self._render_list_item(node, "- ", True))

    def _render_list_item(self, node: ListItem, marker: str, tight: bool) -> str:
        if node.task_status:
            checkbox = "[x] " if node.task_status == "checked" else "[ ] "
        else:
            checkbox = ""
        body = self._render_blocks(node.children, "\n" if tight else "\n\n")
        return _indent_lines(checkbox + body, marker, " " * len(marker))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("---")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content.rstrip("\n"))

    def visit_text(self, node: Text) -> None:
        """Render a Text node with literal punctuation escaped."""
        line_start = not self._output or self._output[-1].endswith("\n")
        self._output.append(escape_markdown_text(node.content, line_start=line_start))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"*{self._render_inline_content(node.content)}*")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"**{self._render_inline_content(node.content)}**")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"~~{self._render_inline_content(node.content)}~~")

    def visit_code(self, node: Code) -> None:
        """Render a Code node with a backtick fence longer than any run inside."""
        code, delimiter = escape_inline_code(node.content)
        self._output.append(f"{delimiter}{code}{delimiter}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node, as an autolink when the text is the destination."""
        if len(node.content) == 1 and isinstance(node.content[0], Text):
            text = node.content[0].content
            if text and node.url in (text, f"mailto:{text}") and " " not in text:
                self._output.append(f"<{text}>")
                return

        content = self._render_inline_content(node.content)
        destination = self._format_destination(node.url)
        if node.title:
            title = node.title.replace('"', '\\"')
            self._output.append(f'[{content}]({destination} "{title}")')
        else:
            self._output.append(f"[{content}]({destination})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt = node.alt_text.replace("[", "\\[").replace("]", "\\]")
        destination = self._format_destination(node.url)
        if node.title:
            title = node.title.replace('"', '\\"')
            self._output.append(f'![{alt}]({destination} "{title}")')
        else:
            self._output.append(f"![{alt}]({destination})")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("\n" if node.soft else "  \n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)

    @staticmethod
    def _format_destination(url: str) -> str:
        if any(c in url for c in " ()<>") or not url:
            return "<" + url.replace("<", "\\<").replace(">", "\\>") + ">"
        return url


def describe(node: Node) -> str:
    """Return the CommonMark description of a node.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    str
        Canonical CommonMark source of the node

    """
    return CommonMarkRenderer().render_to_string(node)
