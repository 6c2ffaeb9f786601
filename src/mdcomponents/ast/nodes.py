#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/ast/nodes.py
"""Document tree consumed by the component compiler.

The tree covers CommonMark plus the two GitHub extensions the parser
enables (strikethrough and task list items). It is built once per parse,
never modified while it is being compiled, and thrown away afterwards;
every extension body or surrounding text that gets re-parsed builds a
tree of its own.

Block nodes
    Document, Heading, Paragraph, CodeBlock, BlockQuote, List, ListItem,
    ThematicBreak, HTMLBlock

Inline nodes
    Text, Emphasis, Strong, Strikethrough, Code, Link, Image, LineBreak,
    HTMLInline

Each class names the visitor method it dispatches to in ``visit_name``;
see :mod:`mdcomponents.ast.visitors` for the fallback used when a visitor
does not define it.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Optional


class Node:
    """Base class of every tree node.

    Subclasses set ``visit_name``; :meth:`accept` calls
    ``visitor.visit_<visit_name>(node)`` when the visitor has it and
    ``visitor.visit_node(node)`` otherwise.

    """

    visit_name: ClassVar[str] = "node"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to the visitor method for this node type.

        Parameters
        ----------
        visitor : NodeVisitor
            Object with ``visit_*`` methods

        Returns
        -------
        Any
            Whatever the visit method returns

        """
        method = getattr(visitor, f"visit_{self.visit_name}", None)
        if method is None:
            return visitor.visit_node(self)
        return method(self)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root of a parsed document; its description is matched against block extensions."""

    visit_name: ClassVar[str] = "document"

    children: list[Node] = field(default_factory=list)


@dataclass
class Heading(Node):
    """ATX or setext heading.

    Parameters
    ----------
    level : int
        Heading level, 1 to 6; selects the heading style
    content : list of Node, default = empty list
        Inline content

    Raises
    ------
    ValueError
        If ``level`` is outside 1 to 6

    """

    visit_name: ClassVar[str] = "heading"

    level: int
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Run of inline content; the usual home of inline extensions."""

    visit_name: ClassVar[str] = "paragraph"

    content: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code.

    The content is literal: no Markdown inside it is parsed and no
    backslash escape inside it is resolved.

    Parameters
    ----------
    content : str
        Code without the closing newline
    language : str or None, default = None
        Info string of a fenced block
    fence_char : str, default = '`'
        Fence character, backtick or tilde
    fence_length : int, default = 3
        Length of the opening fence
    fenced : bool, default = True
        False for indented code

    """

    visit_name: ClassVar[str] = "code_block"

    content: str
    language: Optional[str] = None
    fence_char: str = "`"
    fence_length: int = 3
    fenced: bool = True


@dataclass
class BlockQuote(Node):
    """Quoted blocks, compiled under the block quote style."""

    visit_name: ClassVar[str] = "block_quote"

    children: list[Node] = field(default_factory=list)


@dataclass
class List(Node):
    """Ordered or bulleted list.

    Parameters
    ----------
    ordered : bool
        True for numbered lists
    items : list of ListItem, default = empty list
        Items in source order
    start : int, default = 1
        Number of the first item of an ordered list
    tight : bool, default = True
        False when items are separated by blank lines
    delimiter : str, default = '.'
        ``.`` or ``)`` for ordered lists; the bullet character otherwise

    """

    visit_name: ClassVar[str] = "list"

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    delimiter: str = "."


@dataclass
class ListItem(Node):
    """One list item; ``task_status`` is set for ``[ ]`` and ``[x]`` items."""

    visit_name: ClassVar[str] = "list_item"

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None


@dataclass
class ThematicBreak(Node):
    """Horizontal rule."""

    visit_name: ClassVar[str] = "thematic_break"


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, kept verbatim."""

    visit_name: ClassVar[str] = "html_block"

    content: str


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Literal text with backslash escapes resolved and character references decoded."""

    visit_name: ClassVar[str] = "text"

    content: str


@dataclass
class Emphasis(Node):
    visit_name: ClassVar[str] = "emphasis"

    content: list[Node] = field(default_factory=list)


@dataclass
class Strong(Node):
    visit_name: ClassVar[str] = "strong"

    content: list[Node] = field(default_factory=list)


@dataclass
class Strikethrough(Node):
    visit_name: ClassVar[str] = "strikethrough"

    content: list[Node] = field(default_factory=list)


@dataclass
class Code(Node):
    """Inline code span; backslashes inside it are literal."""

    visit_name: ClassVar[str] = "code"

    content: str


@dataclass
class Link(Node):
    """Hyperlink, inline or autolink.

    Parameters
    ----------
    url : str
        Destination as reported by the parser (percent-encoded)
    content : list of Node, default = empty list
        Link text
    title : str or None, default = None
        Optional title

    """

    visit_name: ClassVar[str] = "link"

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(Node):
    """Image; compiles to a URL reference when ``url`` is usable.

    Parameters
    ----------
    url : str
        Source URL, possibly empty
    alt_text : str, default = ''
        Plain text of the image description
    title : str or None, default = None
        Optional title

    """

    visit_name: ClassVar[str] = "image"

    url: str
    alt_text: str = ""
    title: Optional[str] = None


@dataclass
class LineBreak(Node):
    """Soft (newline in source) or hard (two spaces or backslash) line break."""

    visit_name: ClassVar[str] = "line_break"

    soft: bool = False


@dataclass
class HTMLInline(Node):
    """Raw inline tag or comment, kept verbatim."""

    visit_name: ClassVar[str] = "html_inline"

    content: str


BLOCK_CONTAINERS = (Document, BlockQuote, ListItem)
INLINE_CONTAINERS = (Heading, Paragraph, Emphasis, Strong, Strikethrough, Link)


def get_node_children(node: Node) -> list[Node]:
    """Return a new list of the direct children of ``node``.

    Block containers yield their blocks, inline containers their inline
    content and lists their items; leaves yield an empty list.

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, BLOCK_CONTAINERS):
        return list(node.children)

    if isinstance(node, INLINE_CONTAINERS):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    return []
