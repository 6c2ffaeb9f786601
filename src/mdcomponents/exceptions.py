#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/exceptions.py
"""Exceptions raised while compiling extended Markdown into components.

Not finding an extension and meeting an image whose URL cannot be used are
normal outcomes, not errors. Everything that does abort a compilation is a
:class:`MdComponentsError`:

- ValidationError: a style or option value is rejected, or a document is
  nested deeper than ``CompilerOptions.max_depth``
- ParsingError: mistune could not parse a document or sub-document
- RenderingError: a node could not be rendered to styled text or HTML

"""

from typing import Any, Optional

# Length of the source excerpt kept on a ParsingError
EXCERPT_LENGTH = 60


class MdComponentsError(Exception):
    """Base class of every error the library raises on purpose.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        Exception from a collaborator (mistune, rich, BeautifulSoup) that
        caused this error

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdComponentsError):
    """A configuration value or document shape was rejected.

    Attributes
    ----------
    parameter_name : str or None
        Option or limit that was violated, e.g. ``"strong_style"`` or
        ``"max_depth"``
    parameter_value : any
        The rejected value (for depth limits, the measured depth)

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ParsingError(MdComponentsError):
    """Markdown source could not be turned into a document tree.

    Raised for the top-level document and for the sub-documents built from
    the text around an extension and from extension bodies.

    Attributes
    ----------
    parsing_stage : str or None
        ``"input_validation"``, ``"tokenization"`` or ``"tree_building"``
    source_excerpt : str or None
        Start of the source that failed, truncated to ``EXCERPT_LENGTH``
        characters

    """

    def __init__(
        self,
        message: str,
        parsing_stage: str | None = None,
        source: Optional[str] = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage
        self.source_excerpt = source[:EXCERPT_LENGTH] if source is not None else None


class RenderingError(MdComponentsError):
    """A node could not be rendered.

    Attributes
    ----------
    rendering_stage : str or None
        ``"styled_text"``, ``"html"`` or ``"html_styled_text"``
    node_type : str or None
        Class name of the node being rendered, when known

    """

    def __init__(
        self,
        message: str,
        rendering_stage: str | None = None,
        node_type: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error with stage information."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage
        self.node_type = node_type


__all__ = [
    "MdComponentsError",
    "ValidationError",
    "ParsingError",
    "RenderingError",
]
