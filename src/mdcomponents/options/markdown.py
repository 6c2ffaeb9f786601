#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/options/markdown.py
"""Configuration options for Markdown parsing and compilation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdcomponents.constants import DEFAULT_MAX_DEPTH
from mdcomponents.exceptions import ValidationError
from mdcomponents.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).

    """

    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "importance": "core"},
    )


@dataclass(frozen=True)
class CompilerOptions(CloneFrozenMixin):
    """Configuration options for the component compiler.

    Parameters
    ----------
    parser_options : MarkdownParserOptions
        Options used for the top-level parse and for every sub-document parse.
    max_depth : int or None, default None
        Maximum nesting depth accepted for a parsed tree. ``None`` disables
        the check.

    """

    parser_options: MarkdownParserOptions = field(
        default_factory=MarkdownParserOptions,
        metadata={"help": "Options for parsing Markdown source", "importance": "core"},
    )
    max_depth: Optional[int] = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum nesting depth of a parsed document", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate the depth limit.

        Raises
        ------
        ValidationError
            If ``max_depth`` is not a positive integer.

        """
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValidationError(f"max_depth must be positive, got {self.max_depth}", "max_depth", self.max_depth)
