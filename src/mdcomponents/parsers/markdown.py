#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/parsers/markdown.py
"""Markdown parsing into the :mod:`mdcomponents.ast` tree.

mistune 3 is run without a renderer, so it returns its token stream, and
the stream is turned into nodes through two dispatch tables: one for block
tokens and one for inline tokens. The same converter parses the top-level
document, every sub-document compiled around or inside an extension, and the
flattened copies used by the unescape engine for position lookups.

Text tokens arrive with entity and numeric character references still
encoded; they are decoded here, token by token, so ``Fish &amp; Chips``
becomes the text ``Fish & Chips``. Code spans stay literal. Link destinations
have the percent-encoding mistune adds removed again, so a destination reads
as the author typed it.

Tokens the tree has no node for (for example ``blank_line``) are dropped and
logged at debug level.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Literal, Optional
from urllib.parse import quote

import mistune
from mistune.util import unescape as unescape_entities

from mdcomponents.ast import (
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
    extract_text,
)
from mdcomponents.constants import URL_SAFE_CHARS
from mdcomponents.exceptions import ParsingError
from mdcomponents.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

Token = dict[str, Any]

# Token types mistune emits that never carry content
_SILENT_TOKENS = frozenset({"blank_line"})


def _attrs(token: Token) -> dict[str, Any]:
    attrs = token.get("attrs")
    return attrs if isinstance(attrs, dict) else {}


def _children(token: Token) -> list[Token]:
    children = token.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def _title(attrs: dict[str, Any]) -> Optional[str]:
    title = attrs.get("title")
    return unescape_entities(title) if title else title


# Percent-encoded octets as urllib.parse.quote writes them
_PERCENT_RUN = re.compile(r"(?:%[0-9A-F]{2})+")


def unquote_destination(url: str) -> str:
    """Undo the percent-encoding mistune applies to link destinations.

    mistune quotes every character outside ``URL_SAFE_CHARS`` with
    upper-case hex digits, so ``Caf\u00e9`` arrives as ``Caf%C3%A9``. Runs that
    decode to such characters are restored. Octets that decode to safe or
    unprintable characters, and runs that are not valid UTF-8, are kept as
    written.

    Examples
    --------
        >>> unquote_destination("Caf%C3%A9")
        'Caf\u00e9'
        >>> unquote_destination("a%2Fb%20c")
        'a%2Fb c'

    """

    def restore(match: re.Match[str]) -> str:
        run = match.group()
        try:
            decoded = bytes.fromhex(run.replace("%", "")).decode("utf-8")
        except UnicodeDecodeError:
            return run
        return "".join(
            quote(char, safe="") if char in URL_SAFE_CHARS or not char.isprintable() else char for char in decoded
        )

    return _PERCENT_RUN.sub(restore, url)


class MarkdownToAstConverter:
    r"""Parse Markdown into a :class:`~mdcomponents.ast.Document`.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Which GitHub extensions mistune enables

    Examples
    --------
        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\n- [x] done")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'List']
        >>> doc.children[1].items[0].task_status
        'checked'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Build the mistune instance for ``options``."""
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_task_lists:
            plugins.append("task_lists")

        self._markdown = mistune.create_markdown(plugins=plugins, renderer=None)

        self._block_handlers: dict[str, Callable[[Token], Node]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            # Tight list items hold block_text instead of paragraphs
            "block_text": self._paragraph,
            "block_code": self._code_block,
            "block_quote": self._block_quote,
            "list": self._list,
            "thematic_break": self._thematic_break,
            "block_html": self._html_block,
        }
        self._inline_handlers: dict[str, Callable[[Token], Node]] = {
            "text": self._text,
            "emphasis": lambda token: Emphasis(content=self._inlines(_children(token))),
            "strong": lambda token: Strong(content=self._inlines(_children(token))),
            "strikethrough": lambda token: Strikethrough(content=self._inlines(_children(token))),
            "codespan": lambda token: Code(content=token.get("raw", "")),
            "link": self._link,
            "image": self._image,
            "linebreak": lambda token: LineBreak(soft=False),
            "softbreak": lambda token: LineBreak(soft=True),
            "inline_html": lambda token: HTMLInline(content=token.get("raw", "")),
        }

    def parse(self, markdown_content: str) -> Document:
        """Parse Markdown source into a document.

        Parameters
        ----------
        markdown_content : str
            Markdown source

        Returns
        -------
        Document
            Root of the new tree

        Raises
        ------
        ParsingError
            If the input is not a string, mistune fails, or the token stream
            cannot be turned into nodes

        """
        if not isinstance(markdown_content, str):
            raise ParsingError(
                f"Markdown input must be a string, got {type(markdown_content).__name__}",
                parsing_stage="input_validation",
            )

        try:
            tokens, _state = self._markdown.parse(markdown_content)
        except Exception as e:
            raise ParsingError(
                f"Failed to parse Markdown: {e}",
                parsing_stage="tokenization",
                source=markdown_content,
                original_error=e,
            ) from e

        if not isinstance(tokens, list):
            raise ParsingError(
                f"Unexpected token stream from mistune: {type(tokens).__name__}",
                parsing_stage="tokenization",
            )

        try:
            return Document(children=self._blocks(tokens))
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingError(
                f"Failed to build AST: {e}", parsing_stage="tree_building", source=markdown_content, original_error=e
            ) from e

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _blocks(self, tokens: list[Token]) -> list[Node]:
        nodes = (self._dispatch(token, self._block_handlers) for token in tokens)
        return [node for node in nodes if node is not None]

    def _inlines(self, tokens: list[Token]) -> list[Node]:
        """Convert inline tokens, merging consecutive text into one Text node.

        mistune emits a separate text token for each resolved backslash
        escape, so ``a\\*b`` arrives as three text tokens.

        """
        nodes: list[Node] = []
        for token in tokens:
            node = self._dispatch(token, self._inline_handlers)
            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)
        return nodes

    @staticmethod
    def _dispatch(token: Token, handlers: dict[str, Callable[[Token], Node]]) -> Optional[Node]:
        token_type = token.get("type", "")
        handler = handlers.get(token_type)
        if handler is not None:
            return handler(token)
        if token_type not in _SILENT_TOKENS:
            logger.debug(f"Ignoring unsupported token: {token_type}")
        return None

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _heading(self, token: Token) -> Heading:
        level = _attrs(token).get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._inlines(_children(token)))

    def _paragraph(self, token: Token) -> Paragraph:
        return Paragraph(content=self._inlines(_children(token)))

    def _code_block(self, token: Token) -> CodeBlock:
        """Convert fenced and indented code; the closing newline is dropped."""
        code = token.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]

        if token.get("style") == "indent":
            return CodeBlock(content=code, fenced=False)

        info = _attrs(token).get("info")
        marker = token.get("marker") or "```"
        return CodeBlock(
            content=code,
            language=(info.strip() or None) if info else None,
            fence_char=marker[0],
            fence_length=len(marker),
        )

    def _block_quote(self, token: Token) -> BlockQuote:
        return BlockQuote(children=self._blocks(_children(token)))

    def _list(self, token: Token) -> List:
        attrs = _attrs(token)
        ordered = bool(attrs.get("ordered", False))
        return List(
            ordered=ordered,
            items=[self._list_item(child) for child in _children(token)],
            start=attrs.get("start", 1),
            tight=token.get("tight", True),
            delimiter=token.get("bullet") or ("." if ordered else "-"),
        )

    def _list_item(self, token: Token) -> ListItem:
        # The task_lists plugin turns list_item into task_list_item with a checked attr
        task_status: Literal["checked", "unchecked"] | None = None
        attrs = _attrs(token)
        if "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"
        return ListItem(children=self._blocks(_children(token)), task_status=task_status)

    def _thematic_break(self, token: Token) -> ThematicBreak:
        return ThematicBreak()

    def _html_block(self, token: Token) -> HTMLBlock:
        return HTMLBlock(content=token.get("raw", ""))

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _text(self, token: Token) -> Text:
        # An escaped "&" is a token of its own, so it never starts a reference here
        return Text(content=unescape_entities(token.get("raw", "")))

    def _link(self, token: Token) -> Link:
        attrs = _attrs(token)
        return Link(
            url=unquote_destination(attrs.get("url", "")),
            content=self._inlines(_children(token)),
            title=_title(attrs),
        )

    def _image(self, token: Token) -> Image:
        attrs = _attrs(token)
        # Alt text arrives as inline child tokens rather than an attribute
        alt_text = extract_text(self._inlines(_children(token)))
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=_title(attrs))


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Parse Markdown into a document with a one-off converter.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        Root of the new tree

    Raises
    ------
    ParsingError
        If parsing fails

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
