#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/extensions/tokenizer.py
"""Detection of block and inline extensions in unescaped source text.

A :class:`Tokenizer` finds the first extension in a fragment and splits the
fragment into the text before it, the extension itself and the text after
it. The caller compiles the surrounding text as independent documents.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from mdcomponents.extensions.patterns import BLOCK_PATTERN, INLINE_PATTERN, TRIMMED_NEWLINES
from mdcomponents.extensions.properties import parse_properties

logger = logging.getLogger(__name__)


class ExtensionKind(Enum):
    """Whether an extension was written in block or inline form."""

    BLOCK = "block"
    INLINE = "inline"


@dataclass(frozen=True)
class Extension:
    """An extension found by the tokenizer.

    Parameters
    ----------
    text_before : str
        Source text preceding the extension, possibly empty
    text_after : str
        Source text following the extension, possibly empty
    kind : ExtensionKind
        Block or inline form
    name : str
        Extension name
    content : str
        Body text of the extension
    argument : str, default = ""
        Argument text, empty when absent
    properties : dict[str, str]
        Parsed properties, empty when absent

    """

    text_before: str
    text_after: str
    kind: ExtensionKind
    name: str
    content: str
    argument: str = ""
    properties: dict[str, str] = field(default_factory=dict)


def trimmed_newlines(text: str) -> str:
    r"""Strip leading and trailing runs of ``\n`` and ``\r``.

    Examples
    --------
        >>> trimmed_newlines("\n\nbody\nmore\n")
        'body\nmore'

    """
    return TRIMMED_NEWLINES.sub("", text)


class Tokenizer:
    """Match extension syntax against a fragment of source text.

    The tokenizer holds no state between calls; one instance can be shared.

    Examples
    --------
        >>> ext = Tokenizer().inline_extension('See !Video[intro](clip.mp4){autoplay} now')
        >>> ext.name, ext.content, ext.argument, ext.properties
        ('Video', 'intro', 'clip.mp4', {'autoplay': ''})
        >>> ext.text_before, ext.text_after
        ('See ', ' now')

    """

    def block_extension(self, text: str) -> Optional[Extension]:
        """Return the first block extension in ``text``, or None.

        Parameters
        ----------
        text : str
            Unescaped source text; may span several lines

        Returns
        -------
        Extension or None
            The extension with its content trimmed of surrounding line breaks

        """
        match = BLOCK_PATTERN.match(text)
        if match is None:
            return None

        extension = Extension(
            text_before=match.group(1) or "",
            text_after=match.group(7) or "",
            kind=ExtensionKind.BLOCK,
            name=match.group(3),
            content=trimmed_newlines(match.group(5) or ""),
            argument=match.group(4) or "",
            properties=parse_properties(match.group(6) or ""),
        )
        logger.debug(f"Matched block extension {extension.name!r}")
        return extension

    def inline_extension(self, text: str) -> Optional[Extension]:
        """Return the first inline extension in ``text``, or None.

        Parameters
        ----------
        text : str
            Unescaped source text

        Returns
        -------
        Extension or None
            The extension with its content taken verbatim

        """
        match = INLINE_PATTERN.match(text)
        if match is None:
            return None

        extension = Extension(
            text_before=match.group(1) or "",
            text_after=match.group(7) or "",
            kind=ExtensionKind.INLINE,
            name=match.group(3),
            content=match.group(4) or "",
            argument=match.group(5) or "",
            properties=parse_properties(match.group(6) or ""),
        )
        logger.debug(f"Matched inline extension {extension.name!r}")
        return extension


__all__ = ["Extension", "ExtensionKind", "Tokenizer", "trimmed_newlines"]
