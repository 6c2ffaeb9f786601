#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/extensions/properties.py
"""Parsing of extension property fragments.

The interior of an extension's ``{...}`` block is a whitespace-separated list
of ``key="quoted value"``, ``key=value`` and bare ``key`` tokens.

"""

from __future__ import annotations

import re

from mdcomponents.extensions.patterns import LONE_PROPERTY, QUOTED_PROPERTY, UNQUOTED_PROPERTY


def _extract(pattern: re.Pattern[str], buffer: str, properties: dict[str, str]) -> str:
    """Collect every match of ``pattern`` into ``properties`` and return the residual buffer."""
    for match in pattern.finditer(buffer):
        value = match.group(2) if pattern.groups > 1 else ""
        properties.setdefault(match.group(1), value or "")
    return pattern.sub("", buffer)


def parse_properties(raw: str) -> dict[str, str]:
    """Parse a property fragment into an ordered mapping.

    The quoted form is matched first, then the unquoted form, then lone
    keys; each pass removes what it matched before the next pass runs. When
    a key occurs more than once the first value found is kept.

    Parameters
    ----------
    raw : str
        Text between the braces of a property block

    Returns
    -------
    dict[str, str]
        Property values in discovery order; lone keys map to ``""``

    Examples
    --------
        >>> parse_properties('title="Hello world" width=10 hidden')
        {'title': 'Hello world', 'width': '10', 'hidden': ''}
        >>> parse_properties("k=1 k=2")
        {'k': '1'}

    """
    properties: dict[str, str] = {}
    if not raw:
        return properties

    buffer = raw
    for pattern in (QUOTED_PROPERTY, UNQUOTED_PROPERTY, LONE_PROPERTY):
        buffer = _extract(pattern, buffer, properties)
    return properties


__all__ = ["parse_properties"]
