#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/__init__.py
"""mdcomponents - compile extended Markdown into presentation components.

mdcomponents turns Markdown, extended with named block and inline
directives, into a flat list of components that a presentation layer can
lay out directly:

- :class:`StyledText` runs of rich text, with adjacent text folded together
- :class:`URLReference` values for images
- :class:`ExtensionComponent` values for directives such as
  ``!Video[Intro](clip.mp4){autoplay}`` or a ``:::``-fenced block

Requirements
------------
- Python 3.10+
- mistune for parsing, rich for styled text, BeautifulSoup for raw HTML

Examples
--------
    >>> from mdcomponents import compile_markdown, StyleConfig
    >>> components = compile_markdown(
    ...     "Callout: tip\\n:::\\nRemember to **save**.\\n:::\\n{icon=bulb}",
    ...     style=StyleConfig(strong_style="bold red"),
    ... )
    >>> components[0].name, components[0].argument, dict(components[0].properties)
    ('Callout', 'tip', {'icon': 'bulb'})

"""

from __future__ import annotations

from mdcomponents.compiler import ComponentCompiler, compile_markdown
from mdcomponents.components import (
    Component,
    ExtensionComponent,
    ExtensionKind,
    StyledText,
    URLReference,
    join_components,
)
from mdcomponents.exceptions import MdComponentsError, ParsingError, RenderingError, ValidationError
from mdcomponents.logging_utils import configure_logging
from mdcomponents.options import CompilerOptions, MarkdownParserOptions, StyleConfig
from mdcomponents.serialization import component_to_dict, components_to_json

__version__ = "0.1.0"

__all__ = [
    "Component",
    "ComponentCompiler",
    "CompilerOptions",
    "ExtensionComponent",
    "ExtensionKind",
    "MarkdownParserOptions",
    "MdComponentsError",
    "ParsingError",
    "RenderingError",
    "StyleConfig",
    "StyledText",
    "URLReference",
    "ValidationError",
    "__version__",
    "component_to_dict",
    "components_to_json",
    "compile_markdown",
    "configure_logging",
    "join_components",
]
