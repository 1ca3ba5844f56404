"""Filter expression tree.

A ``FilterQuery`` is a tagged node: a field predicate (``age > 18``), a raw
fragment with positional arguments, or an AND/OR/NOT combinator over nested
filters. An AND node with no inner filters is the identity element: combining
it with any filter ``f`` yields ``f``.

Combining two filters whose left side is already the same combinator extends
the existing list instead of nesting, so serialized output stays flat.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Tuple

from .enums import FilterOp
from .utils import format_value, substitute_placeholders

if TYPE_CHECKING:
    from .query import Query


@dataclass(frozen=True)
class FilterQuery:
    """One node of a where/having filter tree.

    Attributes:
        type: Node kind. Combinators use ``inner``; predicates use ``field``
            and ``value``; fragments keep the raw expression in ``field`` and
            its positional arguments in ``value``.
        field: Column name, or raw expression for fragments.
        value: Compared value, or the argument tuple for fragments.
        inner: Child filters of a combinator.

    Examples:
        >>> str(FilterQuery())
        ''
        >>> str(eq("completed", True).and_(gt("priority", 2)))
        'completed = true AND priority > 2'
    """

    type: FilterOp = FilterOp.AND
    field: str = ""
    value: Any = None
    inner: Tuple["FilterQuery", ...] = ()

    def none(self) -> bool:
        """True when this filter is the empty identity element."""
        return self.type.is_combinator and not self.inner

    def and_(self, *filters: "FilterQuery") -> "FilterQuery":
        """AND this filter with ``filters``."""
        return _combine(FilterOp.AND, self, filters)

    def or_(self, *filters: "FilterQuery") -> "FilterQuery":
        """OR this filter with ``filters``."""
        return _combine(FilterOp.OR, self, filters)

    def build(self, query: "Query") -> "Query":
        return replace(query, where_query=query.where_query.and_(self))

    def __str__(self) -> str:
        if self.none():
            return ""
        if self.type in (FilterOp.AND, FilterOp.OR):
            sep = f" {self.type.value} "
            return sep.join(_render_operand(self.type, f) for f in self.inner)
        if self.type == FilterOp.NOT:
            operand = and_(*self.inner)
            return "NOT " + _render_operand(FilterOp.NOT, operand)
        if self.type == FilterOp.FRAGMENT:
            return substitute_placeholders(self.field, self.value or ())
        if self.type.is_unary:
            return f"{self.field} {self.type.value}"
        return f"{self.field} {self.type.value} {format_value(self.value)}"


def _render_operand(parent: FilterOp, child: FilterQuery) -> str:
    text = str(child)
    # nested AND/OR of a different kind keeps its own precedence
    if child.type in (FilterOp.AND, FilterOp.OR) and child.type != parent and len(child.inner) > 1:
        return f"({text})"
    return text


def _combine(op: FilterOp, left: FilterQuery, filters) -> FilterQuery:
    rest = tuple(f for f in filters if not f.none())
    if left.none():
        return _join(op, rest)
    if not rest:
        return left
    if left.type == op:
        return replace(left, inner=left.inner + _flatten(op, rest))
    return _join(op, (left,) + rest)


def _flatten(op: FilterOp, filters) -> Tuple[FilterQuery, ...]:
    out = []
    for f in filters:
        if f.none():
            continue
        if f.type == op:
            out.extend(f.inner)
        else:
            out.append(f)
    return tuple(out)


def _join(op: FilterOp, filters) -> FilterQuery:
    flat = _flatten(op, filters)
    if not flat:
        return FilterQuery()
    if len(flat) == 1:
        return flat[0]
    return FilterQuery(type=op, inner=flat)


# ============================================================================
# COMBINATORS
# ============================================================================

def and_(*filters: FilterQuery) -> FilterQuery:
    """Combine filters with AND. Identity filters are dropped."""
    return _join(FilterOp.AND, filters)


def or_(*filters: FilterQuery) -> FilterQuery:
    """Combine filters with OR. Identity filters are dropped."""
    return _join(FilterOp.OR, filters)


def not_(*filters: FilterQuery) -> FilterQuery:
    """Negate the AND of ``filters``."""
    inner = tuple(f for f in filters if not f.none())
    if not inner:
        return FilterQuery()
    return FilterQuery(type=FilterOp.NOT, inner=inner)


def filter_fragment(expr: str, *args: Any) -> FilterQuery:
    """Raw filter text with positional ``?`` arguments, passed through as is."""
    return FilterQuery(type=FilterOp.FRAGMENT, field=expr, value=tuple(args))


# ============================================================================
# PREDICATES
# ============================================================================

def eq(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.EQ, field=field, value=value)


def ne(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.NE, field=field, value=value)


def lt(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.LT, field=field, value=value)


def lte(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.LTE, field=field, value=value)


def gt(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.GT, field=field, value=value)


def gte(field: str, value: Any) -> FilterQuery:
    return FilterQuery(type=FilterOp.GTE, field=field, value=value)


def nil(field: str) -> FilterQuery:
    """``field IS NULL``."""
    return FilterQuery(type=FilterOp.NIL, field=field)


def not_nil(field: str) -> FilterQuery:
    """``field IS NOT NULL``."""
    return FilterQuery(type=FilterOp.NOT_NIL, field=field)


def in_(field: str, *values: Any) -> FilterQuery:
    """``field IN (values...)``. A single list or tuple argument is unpacked."""
    return FilterQuery(type=FilterOp.IN, field=field, value=_as_tuple(values))


def nin(field: str, *values: Any) -> FilterQuery:
    """``field NOT IN (values...)``. A single list or tuple argument is unpacked."""
    return FilterQuery(type=FilterOp.NIN, field=field, value=_as_tuple(values))


def like(field: str, pattern: str) -> FilterQuery:
    return FilterQuery(type=FilterOp.LIKE, field=field, value=pattern)


def not_like(field: str, pattern: str) -> FilterQuery:
    return FilterQuery(type=FilterOp.NOT_LIKE, field=field, value=pattern)


def _as_tuple(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
    if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
        return tuple(values[0])
    return tuple(values)


__all__ = [
    "FilterQuery",
    "and_",
    "or_",
    "not_",
    "filter_fragment",
    "eq",
    "ne",
    "lt",
    "lte",
    "gt",
    "gte",
    "nil",
    "not_nil",
    "in_",
    "nin",
    "like",
    "not_like",
]
