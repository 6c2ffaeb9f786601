#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdcomponents library.

This module centralizes the hardcoded values used across the library:

1. Type Definitions - Literal types and type aliases
2. Component Joining - separators used when flattening blocks
3. Styling Defaults - default rich style strings and glyphs
4. Extension Grammar - punctuation and limits used by the tokenizer
5. CommonMark Text - character references and URL quoting
"""

from __future__ import annotations

import string
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

JustifyMethod = Literal["default", "left", "center", "right", "full"]

# =============================================================================
# Component Joining
# =============================================================================

# Unicode PARAGRAPH SEPARATOR, injected between joined blocks
PARAGRAPH_SEPARATOR = "\u2029"

# =============================================================================
# Styling Defaults
# =============================================================================

DEFAULT_BASE_STYLE = ""
DEFAULT_EMPHASIS_STYLE = "italic"
DEFAULT_STRONG_STYLE = "bold"
DEFAULT_STRIKETHROUGH_STYLE = "strike"
DEFAULT_CODE_STYLE = "bold cyan"
DEFAULT_LINK_STYLE = "underline blue"
DEFAULT_HEADING_STYLES: tuple[str, str, str, str, str, str] = (
    "bold underline",
    "bold",
    "bold",
    "bold italic",
    "italic",
    "italic dim",
)
DEFAULT_BLOCK_QUOTE_STYLE = "italic dim"
DEFAULT_CODE_BLOCK_STYLE = "cyan"
DEFAULT_LIST_MARKER_STYLE = ""

DEFAULT_BULLET = "\u2022"
DEFAULT_INDENT = "\t"
DEFAULT_SOFT_BREAK = " "
DEFAULT_THEMATIC_BREAK = "\u2014" * 3
DEFAULT_TASK_CHECKED = "\u2611"
DEFAULT_TASK_UNCHECKED = "\u2610"

# =============================================================================
# Extension Grammar
# =============================================================================

# Characters a backslash may escape in CommonMark
ASCII_PUNCTUATION = frozenset(string.punctuation)

# Characters that may not appear in a property key or unquoted value
PROPERTY_EXCLUDED_CHARS = "\t />\"'="

# Unlimited nesting unless the caller configures a bound
DEFAULT_MAX_DEPTH: int | None = None

# Heading levels supported by CommonMark
HEADING_LEVELS = 6

# =============================================================================
# CommonMark Text
# =============================================================================

# Entity and numeric character references; the trailing semicolon is required
ENTITY_REFERENCE_PATTERN = r"&(?:#[0-9]{1,7};|#[xX][0-9a-fA-F]+;|[^\t\n\f <&#;]{1,32};)"

# Characters mistune leaves unencoded in link destinations
URL_SAFE_CHARS = frozenset(string.ascii_letters + string.digits + "_.-~" + ":/?#@!$&()*+,;=%")
