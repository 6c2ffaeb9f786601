#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/serialization.py
"""JSON serialization of compiled components.

Presentation layers that live in another process receive components as
JSON. Styled text is carried both as plain text and as rich console markup,
so the receiver can choose how much of the styling it honours.

Examples
--------
    >>> from mdcomponents.components import StyledText, URLReference
    >>> component_to_dict(URLReference("https://example.com/a.png"))
    {'type': 'url', 'url': 'https://example.com/a.png'}
    >>> print(components_to_json([StyledText.from_plain("hi", "bold")]))
    {"schema_version": 1, "components": [{"type": "styled_text", "plain": "hi", "markup": "[bold]hi[/bold]"}]}

"""

from __future__ import annotations

import json
from typing import Any, Iterable

from mdcomponents.components import Component, ExtensionComponent, StyledText, URLReference


def _serialize_styled_text(component: StyledText) -> dict[str, Any]:
    return {"type": "styled_text", "plain": component.plain, "markup": component.text.markup}


def _serialize_url(component: URLReference) -> dict[str, Any]:
    return {"type": "url", "url": component.url}


def _serialize_extension(component: ExtensionComponent) -> dict[str, Any]:
    return {
        "type": "extension",
        "kind": component.kind.value,
        "name": component.name,
        "argument": component.argument,
        "properties": dict(component.properties),
        "content": [component_to_dict(child) for child in component.content],
    }


_SERIALIZATION_DISPATCH: dict[type, Any] = {
    StyledText: _serialize_styled_text,
    URLReference: _serialize_url,
    ExtensionComponent: _serialize_extension,
}


def component_to_dict(component: Component) -> dict[str, Any]:
    """Convert a component to a JSON-ready dictionary.

    Parameters
    ----------
    component : Component
        Styled text, URL reference or extension

    Returns
    -------
    dict
        Dictionary with a ``type`` key and the fields of the component

    Raises
    ------
    ValueError
        If ``component`` is not a component type

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(component))
    if serializer:
        return serializer(component)

    raise ValueError(f"Unknown component type for serialization: {type(component).__name__}")


def components_to_json(components: Iterable[Component], indent: int | None = None) -> str:
    """Serialize a component list to a JSON string with schema versioning.

    Parameters
    ----------
    components : iterable of Component
        Components in source order
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON object holding ``schema_version`` and ``components``

    """
    payload = {"schema_version": 1, "components": [component_to_dict(c) for c in components]}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


__all__ = ["component_to_dict", "components_to_json"]
