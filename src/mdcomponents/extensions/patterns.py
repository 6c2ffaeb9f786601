#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/extensions/patterns.py
"""Compiled regular expressions for the extension micro-grammar.

Inline extensions look like ``!Name[Content](Argument){Properties}`` where
every bracketed part is optional. Block extensions look like::

    Name: Argument
    :::
    Content
    :::
    {Properties}

Both grammars are wrapped in ``^(.*?)(...)(.*?)\\Z`` so a match also yields
the text before and after the extension.

"""

from __future__ import annotations

import re

from mdcomponents.constants import PROPERTY_EXCLUDED_CHARS

INLINE_EXTENSION = r"!(\w+)(?:\[([^\]]*)\])?(?:\(([^)]*)\))?(?:\{([^}]*)\})?"
BLOCK_EXTENSION = (
    r"(\w+):(?:(?:[ \t]+)([^\f\n\r\v]*))?(?:[\f\n\r\v]+)"
    r":::(.*?):::"
    r"(?:(?:[\f\n\r\v]+)(?:\{([^}]*)\}))?"
)


def surrounded(pattern: str) -> str:
    """Wrap an extension pattern with lazy leading and trailing text groups."""
    return rf"^(.*?)({pattern})(.*?)\Z"


# Groups: 1 before, 2 whole extension, 3 name, 4 content, 5 argument, 6 properties, 7 after
INLINE_PATTERN = re.compile(surrounded(INLINE_EXTENSION), re.DOTALL)

# Groups: 1 before, 2 whole extension, 3 name, 4 argument, 5 content, 6 properties, 7 after
BLOCK_PATTERN = re.compile(surrounded(BLOCK_EXTENSION), re.DOTALL)

_EXCLUDED = rf"[^{re.escape(PROPERTY_EXCLUDED_CHARS)}]"
QUOTED_PROPERTY = re.compile(rf"[ \t]*({_EXCLUDED}+)=\"([^\"]*)\"")
UNQUOTED_PROPERTY = re.compile(rf"[ \t]*({_EXCLUDED}+)=({_EXCLUDED}+)")
LONE_PROPERTY = re.compile(rf"[ \t]*({_EXCLUDED}+)")

TRIMMED_NEWLINES = re.compile(r"\A[\n\r]+|[\n\r]+\Z")

__all__ = [
    "BLOCK_EXTENSION",
    "BLOCK_PATTERN",
    "INLINE_EXTENSION",
    "INLINE_PATTERN",
    "LONE_PROPERTY",
    "QUOTED_PROPERTY",
    "TRIMMED_NEWLINES",
    "UNQUOTED_PROPERTY",
    "surrounded",
]
