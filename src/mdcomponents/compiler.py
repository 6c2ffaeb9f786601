#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/compiler.py
"""Compilation of a Markdown AST into a flat list of components.

The :class:`ComponentCompiler` walks the tree with the visitor protocol.
Containers are first checked for extension syntax: the node is
re-serialized to CommonMark, unescaped, and handed to the
:class:`~mdcomponents.extensions.tokenizer.Tokenizer`. When an extension is
found, the text before it, its body and the text after it are parsed and
compiled as independent documents. Otherwise the children are compiled and
adjacent styled text is folded together, splitting at images.

Examples
--------
Compile a document with an inline extension:

    >>> components = compile_markdown('Intro !Note[Careful](warn){level=2}')
    >>> [type(c).__name__ for c in components]
    ['StyledText', 'ExtensionComponent']

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional
from urllib.parse import urljoin, urlparse

from rich.text import Text

from mdcomponents.ast.nodes import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    List,
    ListItem,
    Node,
    Paragraph,
)
from mdcomponents.ast.utils import tree_depth
from mdcomponents.ast.visitors import NodeVisitor
from mdcomponents.components import (
    Component,
    ExtensionComponent,
    StyledText,
    URLReference,
    join_components,
)
from mdcomponents.exceptions import ValidationError
from mdcomponents.extensions.tokenizer import Extension, Tokenizer
from mdcomponents.options.markdown import CompilerOptions
from mdcomponents.options.style import StyleConfig
from mdcomponents.parsers.markdown import MarkdownToAstConverter
from mdcomponents.renderers.html import HtmlRenderer
from mdcomponents.renderers.markdown import describe
from mdcomponents.renderers.styled import StyledTextRenderer, html_to_styled_text, list_marker
from mdcomponents.utils.escape import unescape_commonmark

logger = logging.getLogger(__name__)

ParseFunction = Callable[[str], Document]
RenderFunction = Callable[[Node, StyleConfig], Text]
HtmlRenderFunction = Callable[[Node], str]


def resolve_image_url(url: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """Return the URL an image refers to, or None if it is not a usable URL.

    Parameters
    ----------
    url : str or None
        Destination of the image node
    base_url : str or None, default = None
        Base against which relative URLs are resolved

    Returns
    -------
    str or None
        Resolved URL; None for missing, blank or malformed destinations

    Examples
    --------
        >>> resolve_image_url("img/a.png", "https://example.com/docs/")
        'https://example.com/docs/img/a.png'
        >>> resolve_image_url("has space.png") is None
        True

    """
    if not url or any(char.isspace() or ord(char) < 32 or ord(char) == 127 for char in url):
        return None
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if base_url and not parsed.scheme:
        return urljoin(base_url, url)
    return url


class ComponentCompiler(NodeVisitor):
    """Compile AST nodes into components.

    Parameters
    ----------
    style : StyleConfig or None, default = None
        Style configuration threaded through rendering
    options : CompilerOptions or None, default = None
        Parser options for sub-documents and the depth limit
    parse : callable or None, default = None
        ``parse(markdown) -> Document``; defaults to the mistune-based parser
    renderer : callable or None, default = None
        ``renderer(node, style) -> rich.text.Text``; defaults to
        :class:`StyledTextRenderer`
    html_renderer : callable or None, default = None
        ``html_renderer(node) -> str``; defaults to :class:`HtmlRenderer`

    Notes
    -----
    The only state kept between visits is the list nesting depth, the style
    configuration in effect and whether extension recognition is disabled.
    All three live on the instance and are reset by :meth:`compile`, so a
    compiler can be reused for any number of sequential calls but must not
    be shared between threads. :func:`compile_markdown` builds a new compiler
    for every call and is safe to call from several threads at once.

    """

    def __init__(
        self,
        style: StyleConfig | None = None,
        options: CompilerOptions | None = None,
        parse: Optional[ParseFunction] = None,
        renderer: Optional[RenderFunction] = None,
        html_renderer: Optional[HtmlRenderFunction] = None,
    ):
        """Initialize the compiler and its collaborators."""
        self.style = style or StyleConfig()
        self.options = options or CompilerOptions()
        self.parse: ParseFunction = parse or MarkdownToAstConverter(self.options.parser_options).parse
        self.renderer: RenderFunction = renderer or StyledTextRenderer(self.style)
        self.html_renderer: HtmlRenderFunction = html_renderer or HtmlRenderer()
        self.tokenizer = Tokenizer()

        self._config = self.style
        self._simple = False
        self._list_depth = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def compile(self, node: Node) -> list[Component]:
        """Compile a node and everything below it.

        Parameters
        ----------
        node : Node
            Any AST node, usually a Document

        Returns
        -------
        list[Component]
            Components in source order

        Raises
        ------
        ValidationError
            If the tree is deeper than ``options.max_depth``
        ParsingError
            If a sub-document fails to parse
        RenderingError
            If a node cannot be rendered

        """
        self._check_depth(node)
        self._config = self.style
        self._simple = False
        self._list_depth = 0
        return node.accept(self)

    def compile_source(self, markdown_source: str) -> list[Component]:
        """Parse Markdown source and compile the resulting document."""
        return self.compile(self.parse(markdown_source))

    def _check_depth(self, node: Node) -> None:
        max_depth = self.options.max_depth
        if max_depth is None:
            return
        depth = tree_depth(node)
        if depth > max_depth:
            raise ValidationError(
                f"Document nesting depth {depth} exceeds the limit of {max_depth}",
                parameter_name="max_depth",
                parameter_value=depth,
            )

    def _compile_document(self, source: str, simple: bool = False) -> list[Component]:
        """Compile ``source`` as an independent document under the current style."""
        document = self.parse(source)
        self._check_depth(document)

        saved = (self._simple, self._list_depth)
        self._simple = self._simple or simple
        self._list_depth = 0
        try:
            return document.accept(self)
        finally:
            self._simple, self._list_depth = saved

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _render(self, node: Node) -> StyledText:
        return StyledText(self.renderer(node, self._config))

    def _render_html(self, node: Node) -> StyledText:
        logger.debug(f"Rendering {type(node).__name__} through HTML")
        return StyledText(html_to_styled_text(self.html_renderer(node), self._config))

    def _image(self, node: Image) -> list[Component]:
        url = resolve_image_url(node.url, self._config.base_url)
        if url is None:
            logger.debug(f"Dropping image with unusable URL {node.url!r}")
            return []
        return [URLReference(url)]

    def _compile_nodes(self, nodes: Iterable[Node]) -> list[Component]:
        components: list[Component] = []
        for node in nodes:
            components.extend(node.accept(self))
        return components

    def _with_config(self, config: StyleConfig, compile_fn: Callable[[], list[Component]]) -> list[Component]:
        saved = self._config
        self._config = config
        try:
            return compile_fn()
        finally:
            self._config = saved

    def _match_extension(self, source: str, allow_inline: bool) -> Optional[Extension]:
        text = unescape_commonmark(source, self.parse)
        extension = self.tokenizer.block_extension(text)
        if extension is None and allow_inline:
            extension = self.tokenizer.inline_extension(text)
        return extension

    def _compile_extension(self, extension: Extension) -> list[Component]:
        """Compile an extension and the text around it."""
        before = self._compile_document(extension.text_before) if extension.text_before else []
        content = self._compile_document(extension.content, simple=True) if extension.content else []
        after = self._compile_document(extension.text_after) if extension.text_after else []

        component = ExtensionComponent(
            kind=extension.kind,
            name=extension.name,
            argument=extension.argument,
            properties=extension.properties,
            content=tuple(c for c in content if isinstance(c, (StyledText, URLReference))),
        )
        return [*before, component, *after]

    def _compile_block_container(self, node: Node, children: list[Node]) -> list[Component]:
        """Compile a container of blocks: extension first, otherwise its children."""
        if any(isinstance(child, HTMLBlock) for child in children):
            return [self._render_html(node)]

        if not self._simple:
            extension = self._match_extension(describe(node), allow_inline=False)
            if extension is not None:
                return self._compile_extension(extension)

        return join_components(self._compile_nodes(children), self._config.paragraph_separator)

    def _compile_inline_container(self, node: Node, content: list[Node], source: str) -> list[Component]:
        """Compile a container of inline nodes: extension first, otherwise fold."""
        if any(isinstance(child, HTMLInline) for child in content):
            return [self._render_html(node)]

        if not self._simple:
            extension = self._match_extension(source, allow_inline=True)
            if extension is not None:
                return self._compile_extension(extension)

        return self._fold(content)

    def _fold(self, nodes: list[Node]) -> list[Component]:
        """Render inline nodes, merging adjacent text and splitting at images."""
        components: list[Component] = []
        for node in nodes:
            if isinstance(node, Image):
                components.extend(self._image(node))
            else:
                components.append(self._render(node))
        return join_components(components)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> list[Component]:
        """Compile a Document node."""
        return self._compile_block_container(node, node.children)

    def visit_block_quote(self, node: BlockQuote) -> list[Component]:
        """Compile a BlockQuote node; its children see the block quote style."""
        return self._with_config(
            self._config.for_block_quote(), lambda: self._compile_block_container(node, node.children)
        )

    def visit_heading(self, node: Heading) -> list[Component]:
        """Compile a Heading node; its content sees the style of its level."""
        source = describe(Paragraph(content=node.content))
        return self._with_config(
            self._config.for_heading(node.level),
            lambda: self._compile_inline_container(node, node.content, source),
        )

    def visit_paragraph(self, node: Paragraph) -> list[Component]:
        """Compile a Paragraph node."""
        return self._compile_inline_container(node, node.content, describe(node))

    def visit_code_block(self, node: CodeBlock) -> list[Component]:
        """Compile a CodeBlock node.

        The code is literal text, so it is scanned for extensions as-is; the
        block otherwise becomes a single styled text.

        """

        def compile_code() -> list[Component]:
            if not self._simple:
                extension = self.tokenizer.block_extension(node.content) or self.tokenizer.inline_extension(
                    node.content
                )
                if extension is not None:
                    return self._compile_extension(extension)
            return [self._render(node)]

        return self._with_config(self._config.for_code_block(), compile_code)

    def visit_list(self, node: List) -> list[Component]:
        """Compile a List node.

        Each item's marker is folded into the item's first styled text, or
        emitted before it when the item starts with an image or extension.
        Items are joined with the paragraph separator.

        """
        depth = self._list_depth
        marker_style = self._config.list_marker_style or None
        components: list[Component] = []

        self._list_depth += 1
        try:
            for index, item in enumerate(node.items):
                item_components = self._compile_item(item)
                if not item_components:
                    continue

                marker = StyledText.from_plain(list_marker(node, index, depth, self._config), marker_style)
                first = item_components[0]
                if isinstance(first, StyledText):
                    item_components[0] = marker.append(first)
                else:
                    item_components.insert(0, marker)
                components.extend(item_components)
        finally:
            self._list_depth -= 1

        return join_components(components, self._config.paragraph_separator)

    def _compile_item(self, item: ListItem) -> list[Component]:
        if any(isinstance(child, HTMLBlock) for child in item.children):
            return [self._render_html(Document(children=item.children))]
        return join_components(self._compile_nodes(item.children), self._config.paragraph_separator)

    def visit_list_item(self, node: ListItem) -> list[Component]:
        """Compile a ListItem reached outside of a List as a block container."""
        return self._compile_block_container(node, node.children)

    def visit_html_block(self, node: HTMLBlock) -> list[Component]:
        """Compile an HTMLBlock node."""
        return [self._render_html(node)]

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def visit_image(self, node: Image) -> list[Component]:
        """Compile an Image node to its URL, or nothing."""
        return self._image(node)

    def visit_html_inline(self, node: HTMLInline) -> list[Component]:
        """Compile an HTMLInline node."""
        return [self._render_html(node)]

    def visit_node(self, node: Node) -> list[Component]:
        """Render any other leaf, such as a thematic break or stray inline node, as one styled text."""
        return [self._render(node)]


def compile_markdown(
    markdown_source: str,
    style: StyleConfig | None = None,
    options: CompilerOptions | None = None,
) -> list[Component]:
    """Compile extended Markdown into components.

    Parameters
    ----------
    markdown_source : str
        Markdown text, optionally with block and inline extensions
    style : StyleConfig or None, default = None
        Style configuration; defaults to :class:`StyleConfig()`
    options : CompilerOptions or None, default = None
        Parser options and depth limit

    Returns
    -------
    list[Component]
        Styled text, image URLs and extensions in source order

    Raises
    ------
    MdComponentsError
        A :class:`ParsingError`, :class:`RenderingError` or
        :class:`ValidationError` describing the failure

    Examples
    --------
        >>> [c.plain for c in compile_markdown("# Title\\n\\nBody")]
        ['Title\\u2029Body']
        >>> compile_markdown("![logo](https://example.com/logo.png)")
        [URLReference(url='https://example.com/logo.png')]

    """
    return ComponentCompiler(style=style, options=options).compile_source(markdown_source)


__all__ = ["ComponentCompiler", "compile_markdown", "resolve_image_url"]
