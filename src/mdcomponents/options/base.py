#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/options/base.py
"""Shared behavior of the frozen option dataclasses.

``StyleConfig``, ``MarkdownParserOptions`` and ``CompilerOptions`` are
immutable, so one instance can be handed to many compilers. Variants are
built with :meth:`CloneFrozenMixin.create_updated`, which runs the same
``__post_init__`` validation as the constructor.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdcomponents.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes support for frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy of these options with some fields replaced.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New, validated instance

        Raises
        ------
        ValidationError
            If a keyword does not name a field, or a new value fails validation

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)
