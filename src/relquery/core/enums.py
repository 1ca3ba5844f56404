"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class FilterOp(str, Enum):
    """Kinds of filter tree nodes.

    Values are strings to ease logging and debugging.
    """

    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    EQ = "="
    NE = "<>"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    NIL = "IS NULL"
    NOT_NIL = "IS NOT NULL"
    IN = "IN"
    NIN = "NOT IN"
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    FRAGMENT = "FRAGMENT"

    @property
    def is_combinator(self) -> bool:
        return self in (FilterOp.AND, FilterOp.OR, FilterOp.NOT)

    @property
    def is_unary(self) -> bool:
        """True for predicates that take no value (null checks)."""
        return self in (FilterOp.NIL, FilterOp.NOT_NIL)


class SortDirection(int, Enum):
    """Sign-encoded sort direction."""

    ASC = 1
    DESC = -1


__all__ = ["FilterOp", "SortDirection"]
