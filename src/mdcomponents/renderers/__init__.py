#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/renderers/__init__.py
"""Node renderers: CommonMark source, HTML and styled text."""

from mdcomponents.renderers.base import BaseRenderer, InlineContentMixin
from mdcomponents.renderers.html import HtmlRenderer
from mdcomponents.renderers.markdown import CommonMarkRenderer, describe
from mdcomponents.renderers.styled import (
    HtmlStyledTextBuilder,
    StyledTextRenderer,
    html_to_styled_text,
    list_marker,
)

__all__ = [
    "BaseRenderer",
    "CommonMarkRenderer",
    "HtmlRenderer",
    "HtmlStyledTextBuilder",
    "InlineContentMixin",
    "StyledTextRenderer",
    "describe",
    "html_to_styled_text",
    "list_marker",
]
