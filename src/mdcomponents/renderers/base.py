#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/renderers/base.py
"""Node renderers used by the component compiler.

The compiler never renders a whole document to a file. It asks for the
re-serialized Markdown of one paragraph, the HTML of one block quote, and
so on, so renderers here map a single :class:`~mdcomponents.ast.Node` of
any type to a string. Any callable with that shape can be injected into
:class:`~mdcomponents.compiler.ComponentCompiler`; subclassing
:class:`BaseRenderer` is optional.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdcomponents.ast.nodes import Node


class BaseRenderer(ABC):
    """Renderer from one node to a string.

    Parameters
    ----------
    options : Any, optional
        Renderer-specific configuration

    Examples
    --------
        >>> from mdcomponents.ast import Text
        >>> from mdcomponents.ast.utils import extract_text
        >>> class ShoutingRenderer(BaseRenderer):
        ...     def render_to_string(self, node):
        ...         return extract_text(node).upper()
        >>> ShoutingRenderer()(Text("hi"))
        'HI'

    """

    def __init__(self, options: Any = None):
        self.options = options

    @abstractmethod
    def render_to_string(self, node: Node) -> str:
        """Render ``node`` and everything below it.

        Raises
        ------
        RenderingError
            If the node cannot be rendered

        """

    def __call__(self, node: Node) -> str:
        return self.render_to_string(node)


class InlineContentMixin:
    """Render child nodes into a string instead of the shared output buffer.

    Renderers using this mixin keep an ``_output`` list that visit methods
    append to. Rendering children swaps in a fresh buffer, visits them and
    restores the caller's buffer, so a visit method can wrap its children's
    output, e.g. ``f"<em>{self._render_inline_content(node.content)}</em>"``.

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        outer, self._output = self._output, []
        try:
            for node in content:
                node.accept(self)
            return "".join(self._output)
        finally:
            self._output = outer

    def _render_blocks(self, children: list[Node], separator: str) -> str:
        """Render each block on its own and join them with ``separator``."""
        return separator.join(self._render_inline_content([child]) for child in children)
