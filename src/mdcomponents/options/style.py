#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/options/style.py
"""Style configuration threaded through the component compiler.

Style values are rich style definitions (``"bold italic"``, ``"underline
blue on white"``, ...). They are validated eagerly so that a typo surfaces
when the configuration is built rather than halfway through a compilation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from rich.errors import StyleSyntaxError
from rich.style import Style

from mdcomponents.constants import (
    DEFAULT_BASE_STYLE,
    DEFAULT_BLOCK_QUOTE_STYLE,
    DEFAULT_BULLET,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_CODE_STYLE,
    DEFAULT_EMPHASIS_STYLE,
    DEFAULT_HEADING_STYLES,
    DEFAULT_INDENT,
    DEFAULT_LINK_STYLE,
    DEFAULT_LIST_MARKER_STYLE,
    DEFAULT_SOFT_BREAK,
    DEFAULT_STRIKETHROUGH_STYLE,
    DEFAULT_STRONG_STYLE,
    DEFAULT_TASK_CHECKED,
    DEFAULT_TASK_UNCHECKED,
    DEFAULT_THEMATIC_BREAK,
    HEADING_LEVELS,
    PARAGRAPH_SEPARATOR,
    JustifyMethod,
)
from mdcomponents.exceptions import ValidationError
from mdcomponents.options.base import CloneFrozenMixin

_STYLE_FIELDS = (
    "base_style",
    "emphasis_style",
    "strong_style",
    "strikethrough_style",
    "code_style",
    "link_style",
    "block_quote_style",
    "code_block_style",
    "list_marker_style",
)


def _combine_definitions(*definitions: str) -> str:
    return " ".join(definition for definition in definitions if definition.strip())


def _validate_style(name: str, value: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a style string, got {type(value).__name__}", name, value)
    try:
        Style.parse(value)
    except StyleSyntaxError as e:
        raise ValidationError(f"Invalid style for {name}: {e}", name, value, original_error=e) from e


@dataclass(frozen=True)
class StyleConfig(CloneFrozenMixin):
    """Presentation settings for styled-text components.

    The compiler never interprets these values beyond threading them through
    and swapping in the heading, block quote and code block variants while it
    walks those nodes.

    Parameters
    ----------
    base_style : str, default ""
        Style applied to every span of text.
    emphasis_style, strong_style, strikethrough_style : str
        Styles layered over the base style for ``*em*``, ``**strong**`` and
        ``~~strike~~`` runs.
    code_style : str, default "bold cyan"
        Style for inline code spans.
    link_style : str, default "underline blue"
        Style for link text; the destination is attached as a rich link.
    heading_styles : tuple of str
        One style per heading level, 1 through 6.
    block_quote_style : str, default "italic dim"
        Style layered over the base style inside block quotes.
    code_block_style : str, default "cyan"
        Style layered over the base style inside code blocks.
    list_marker_style : str, default ""
        Style for list delimiters (``1.``, bullet).
    bullet : str, default "\\u2022"
        Delimiter used for unordered list items.
    indent : str, default "\\t"
        Indentation unit repeated once per list nesting level.
    soft_break : str, default " "
        Text emitted for a soft line break inside a paragraph.
    thematic_break : str
        Text emitted for a thematic break (``---``).
    paragraph_separator : str, default "\\u2029"
        Marker injected between joined blocks.
    task_checked, task_unchecked : str
        Glyphs appended to the marker of task list items.
    base_url : str or None, default None
        When set, relative image URLs are resolved against it.
    justify : str or None, default None
        Justification stored on produced rich ``Text`` values.

    """

    base_style: str = field(default=DEFAULT_BASE_STYLE, metadata={"help": "Style applied to all text"})
    emphasis_style: str = field(default=DEFAULT_EMPHASIS_STYLE, metadata={"help": "Style for emphasis"})
    strong_style: str = field(default=DEFAULT_STRONG_STYLE, metadata={"help": "Style for strong emphasis"})
    strikethrough_style: str = field(default=DEFAULT_STRIKETHROUGH_STYLE, metadata={"help": "Style for strikethrough"})
    code_style: str = field(default=DEFAULT_CODE_STYLE, metadata={"help": "Style for inline code"})
    link_style: str = field(default=DEFAULT_LINK_STYLE, metadata={"help": "Style for link text"})
    heading_styles: tuple[str, ...] = field(
        default=DEFAULT_HEADING_STYLES,
        metadata={"help": "Styles for heading levels 1-6"},
    )
    block_quote_style: str = field(default=DEFAULT_BLOCK_QUOTE_STYLE, metadata={"help": "Style inside block quotes"})
    code_block_style: str = field(default=DEFAULT_CODE_BLOCK_STYLE, metadata={"help": "Style inside code blocks"})
    list_marker_style: str = field(default=DEFAULT_LIST_MARKER_STYLE, metadata={"help": "Style for list delimiters"})
    bullet: str = field(default=DEFAULT_BULLET, metadata={"help": "Delimiter for unordered list items"})
    indent: str = field(default=DEFAULT_INDENT, metadata={"help": "Indentation per list nesting level"})
    soft_break: str = field(default=DEFAULT_SOFT_BREAK, metadata={"help": "Text for soft line breaks"})
    thematic_break: str = field(default=DEFAULT_THEMATIC_BREAK, metadata={"help": "Text for thematic breaks"})
    paragraph_separator: str = field(default=PARAGRAPH_SEPARATOR, metadata={"help": "Separator between blocks"})
    task_checked: str = field(default=DEFAULT_TASK_CHECKED, metadata={"help": "Glyph for checked task items"})
    task_unchecked: str = field(default=DEFAULT_TASK_UNCHECKED, metadata={"help": "Glyph for unchecked task items"})
    base_url: Optional[str] = field(default=None, metadata={"help": "Base URL for relative image URLs"})
    justify: Optional[JustifyMethod] = field(default=None, metadata={"help": "Justification of produced text"})

    def __post_init__(self) -> None:
        """Validate style definitions and heading level coverage.

        Raises
        ------
        ValidationError
            If a style string does not parse or heading styles are missing.

        """
        for name in _STYLE_FIELDS:
            _validate_style(name, getattr(self, name))

        if len(self.heading_styles) != HEADING_LEVELS:
            raise ValidationError(
                f"heading_styles must define {HEADING_LEVELS} styles, got {len(self.heading_styles)}",
                "heading_styles",
                self.heading_styles,
            )
        for level, heading_style in enumerate(self.heading_styles, start=1):
            _validate_style(f"heading_styles[{level}]", heading_style)

        if not self.paragraph_separator:
            raise ValidationError("paragraph_separator must not be empty", "paragraph_separator", "")

    @property
    def style(self) -> Style:
        """Return the parsed base style."""
        return Style.parse(self.base_style)

    def for_heading(self, level: int) -> StyleConfig:
        """Return the configuration seen by the inline content of a heading.

        Parameters
        ----------
        level : int
            Heading level, clamped into 1-6.

        Returns
        -------
        StyleConfig
            Copy whose base style carries the heading style.

        """
        index = min(max(level, 1), HEADING_LEVELS) - 1
        return self.create_updated(base_style=_combine_definitions(self.base_style, self.heading_styles[index]))

    def for_block_quote(self) -> StyleConfig:
        """Return the configuration seen by the children of a block quote."""
        return self.create_updated(base_style=_combine_definitions(self.base_style, self.block_quote_style))

    def for_code_block(self) -> StyleConfig:
        """Return the configuration seen by the content of a code block."""
        return self.create_updated(base_style=_combine_definitions(self.base_style, self.code_block_style))
