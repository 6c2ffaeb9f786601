#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/utils/escape.py
r"""CommonMark escaping and context-sensitive unescaping.

:func:`escape_markdown_text` is what the CommonMark re-serializer applies to
literal text. :func:`unescape_commonmark` reverses it so that extension
syntax such as ``!Name[content]{key=value}`` can be matched against the
characters the author actually typed, while leaving backslashes inside code,
links and raw HTML untouched.

Known gaps: escapes inside link destinations, link titles and fenced code
info strings are not resolved (CommonMark backslash-escape examples 308-310).

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from mdcomponents.ast.nodes import Document
from mdcomponents.constants import ASCII_PUNCTUATION, ENTITY_REFERENCE_PATTERN
from mdcomponents.utils.sourcemap import SourceMap

logger = logging.getLogger(__name__)

# Characters escaped wherever they appear in a text run
_ALWAYS_ESCAPE = "\\`*{}[]<~"

# Characters escaped only where they would start a block construct
_LINE_START_ESCAPE = "#>-+="

_NEWLINES = "\n\r"

_ENTITY_REFERENCE = re.compile(ENTITY_REFERENCE_PATTERN)


def escape_markdown_text(text: str, line_start: bool = True) -> str:
    r"""Escape literal text so that it re-parses as the same text.

    Parameters
    ----------
    text : str
        Literal text of a Text node
    line_start : bool, default = True
        Whether the text begins a line in the surrounding output

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown_text("a*b {c}")
        'a\\*b \\{c\\}'
        >>> escape_markdown_text("# not a heading")
        '\\# not a heading'
        >>> escape_markdown_text("snake_case")
        'snake_case'
        >>> escape_markdown_text("&amp; & co")
        '\\&amp; & co'

    """
    if not text:
        return text

    escaped_chars = []
    for i, char in enumerate(text):
        at_line_start = (i == 0 and line_start) or (i > 0 and text[i - 1] in _NEWLINES)
        next_char = text[i + 1] if i < len(text) - 1 else ""

        if char in _ALWAYS_ESCAPE:
            escaped_chars.append("\\")
        elif char == "_":
            # snake_case is safe; underscores at word boundaries could open emphasis
            prev_alnum = i > 0 and text[i - 1].isalnum()
            next_alnum = next_char.isalnum()
            if not (prev_alnum and next_alnum):
                escaped_chars.append("\\")
        elif char == "!" and next_char in ("[", ""):
            escaped_chars.append("\\")
        elif char == "&" and _ENTITY_REFERENCE.match(text, i):
            escaped_chars.append("\\")
        elif at_line_start and char in _LINE_START_ESCAPE:
            escaped_chars.append("\\")
        elif char in ".)" and _ends_ordinal(text, i, line_start):
            escaped_chars.append("\\")
        escaped_chars.append(char)

    return "".join(escaped_chars)


def _ends_ordinal(text: str, index: int, line_start: bool) -> bool:
    """Return True if ``text[index]`` would close an ordered list marker."""
    line_begin = max(text.rfind("\n", 0, index), text.rfind("\r", 0, index)) + 1
    if line_begin == 0 and not line_start:
        return False
    prefix = text[line_begin:index]
    return 0 < len(prefix) <= 9 and prefix.isdigit()


def escape_inline_code(code: str, delimiter: str = "`") -> tuple[str, str]:
    """Escape inline code and determine appropriate delimiter.

    Parameters
    ----------
    code : str
        Code content to escape
    delimiter : str, default = '`'
        Preferred delimiter character

    Returns
    -------
    tuple[str, str]
        (escaped_code, delimiter_to_use)

    Examples
    --------
        >>> escape_inline_code("simple code")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick")
        ('code with ` backtick', '``')

    """
    if not code:
        return code, delimiter

    max_consecutive = 0
    current_consecutive = 0
    for char in code:
        if char == delimiter:
            current_consecutive += 1
            max_consecutive = max(max_consecutive, current_consecutive)
        else:
            current_consecutive = 0

    final_delimiter = delimiter * (max_consecutive + 1)

    # CommonMark strips one space from each side when both are present
    needs_padding = code.startswith(delimiter) or code.endswith(delimiter)
    if code.startswith(" ") and code.endswith(" ") and code.strip(" "):
        needs_padding = True
    if needs_padding:
        code = " " + code + " "

    return code, final_delimiter


def unescape_commonmark(text: str, parse: Optional[Callable[[str], Document]] = None) -> str:
    r"""Reverse backslash escaping of ASCII punctuation, context-sensitively.

    A backslash followed by an ASCII punctuation character collapses to the
    character, except when the backslash was itself produced by the previous
    escape (so ``\\*`` yields ``\*``), or when the deepest node covering the
    backslash is a code block, code span, link, HTML block or inline HTML.

    Positions are looked up in a tree parsed from a copy of ``text`` with its
    line breaks removed; the returned string keeps the line breaks.

    Parameters
    ----------
    text : str
        Re-serialized CommonMark source
    parse : callable, optional
        Markdown parser used for the position lookup; defaults to
        :func:`mdcomponents.parsers.markdown.markdown_to_ast`

    Returns
    -------
    str
        Text with escapes resolved outside protected regions

    Raises
    ------
    ParsingError
        If the position-lookup parse fails

    Examples
    --------
        >>> unescape_commonmark(r"\*not emphasized*")
        '*not emphasized*'
        >>> unescape_commonmark(r"\\*emphasis*")
        '\\*emphasis*'
        >>> unescape_commonmark(r"`\[\]`")
        '`\\[\\]`'

    """
    if len(text) < 2 or "\\" not in text:
        return text

    if parse is None:
        from mdcomponents.parsers.markdown import markdown_to_ast

        parse = markdown_to_ast

    flat_positions = []
    newlines_seen = 0
    for char in text:
        flat_positions.append(len(flat_positions) - newlines_seen)
        if char in _NEWLINES:
            newlines_seen += 1

    flat = "".join(char for char in text if char not in _NEWLINES)
    source_map = SourceMap.build(parse(flat), flat)

    result = []
    did_escape = False
    for index in range(1, len(text)):
        previous, current = text[index - 1], text[index]
        if did_escape:
            did_escape = False
            continue
        if previous == "\\" and current in ASCII_PUNCTUATION and source_map.allows_unescape(flat_positions[index - 1]):
            result.append(current)
            did_escape = True
        else:
            result.append(previous)

    if not did_escape:
        result.append(text[-1])

    unescaped = "".join(result)
    if unescaped != text:
        logger.debug(f"Unescaped {len(text) - len(unescaped)} characters")
    return unescaped
