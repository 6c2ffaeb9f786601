#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/components.py
"""Component types produced by the compiler.

A compiled document is a flat list of components, in source order:

* :class:`StyledText` - a run of styled text (a :class:`rich.text.Text`);
* :class:`URLReference` - the resolved URL of an image;
* :class:`ExtensionComponent` - a block or inline extension with its
  compiled body.

Components are immutable: appending two styled texts builds a new value.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from rich.text import Text

from mdcomponents.constants import PARAGRAPH_SEPARATOR
from mdcomponents.extensions.tokenizer import ExtensionKind


@dataclass(frozen=True)
class StyledText:
    """A run of styled text.

    Parameters
    ----------
    text : Text
        Text and style spans; never mutated after construction

    Examples
    --------
        >>> StyledText.from_plain("a").append(StyledText.from_plain("b")).plain
        'ab'
        >>> StyledText.from_plain("a").joined(StyledText.from_plain("b")).plain
        'a\\u2029b'

    """

    text: Text

    @classmethod
    def from_plain(cls, plain: str, style: Optional[str] = None) -> StyledText:
        """Build styled text from a plain string with one optional style."""
        text = Text()
        text.append(plain, style=style)
        return cls(text)

    @property
    def plain(self) -> str:
        """Return the text without styles."""
        return self.text.plain

    def append(self, other: StyledText) -> StyledText:
        """Return this text followed directly by ``other``; both keep their spans."""
        text = self.text.copy()
        text.append_text(other.text)
        return StyledText(text)

    def joined(self, other: StyledText, separator: str = PARAGRAPH_SEPARATOR) -> StyledText:
        """Return this text, ``separator`` and ``other`` concatenated."""
        text = self.text.copy()
        text.append(separator)
        text.append_text(other.text)
        return StyledText(text)

    def __len__(self) -> int:
        """Return the number of characters."""
        return len(self.text)


@dataclass(frozen=True)
class URLReference:
    """The absolute or document-relative URL of an image."""

    url: str


@dataclass(frozen=True)
class ExtensionComponent:
    """A compiled extension.

    Parameters
    ----------
    kind : ExtensionKind
        Block or inline form
    name : str
        Extension name
    argument : str
        Argument text, empty when absent
    properties : Mapping[str, str]
        Properties in source order; stored as a read-only view of a private copy
    content : tuple of StyledText or URLReference
        Compiled body; never holds nested extensions

    """

    kind: ExtensionKind
    name: str
    argument: str = ""
    properties: Mapping[str, str] = field(default_factory=dict)
    content: tuple[Union[StyledText, URLReference], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))


Component = Union[StyledText, URLReference, ExtensionComponent]


def join_components(components: Iterable[Component], separator: Optional[str] = None) -> list[Component]:
    """Fold adjacent styled texts together.

    Parameters
    ----------
    components : iterable of Component
        Components in source order
    separator : str or None, default = None
        Text injected between folded styled texts; None appends directly

    Returns
    -------
    list[Component]
        Components with no two styled texts adjacent; URLs and extensions
        are kept in place and never folded across

    """
    joined: list[Component] = []
    for component in components:
        previous = joined[-1] if joined else None
        if isinstance(component, StyledText) and isinstance(previous, StyledText):
            if separator is None:
                joined[-1] = previous.append(component)
            else:
                joined[-1] = previous.joined(component, separator)
        else:
            joined.append(component)
    return joined


__all__ = [
    "Component",
    "ExtensionComponent",
    "ExtensionKind",
    "StyledText",
    "URLReference",
    "join_components",
]
