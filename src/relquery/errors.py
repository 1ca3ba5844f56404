"""Exceptions raised by relquery.

Building queries never raises; only the file-facing scope loader does.
"""

from __future__ import annotations


class RelQueryError(ValueError):
    """Base class for relquery errors."""


class ScopeError(RelQueryError):
    """A scope file or mapping could not be turned into queries."""


__all__ = ["RelQueryError", "ScopeError"]
