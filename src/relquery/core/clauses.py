"""Select, join, sort and group clause fragments.

Each clause is a frozen value that can be folded into a ``Query`` through its
``build`` method. Joins and sorts append; select and group replace.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Tuple

from relquery.config import DEFAULT_JOIN_MODE
from .enums import SortDirection
from .filter import FilterQuery, and_, filter_fragment

if TYPE_CHECKING:
    from .query import Query


@dataclass(frozen=True)
class SelectQuery:
    """Projected fields and the distinct flag."""

    fields: Tuple[str, ...] = ()
    only_distinct: bool = False

    def distinct(self) -> "SelectQuery":
        return replace(self, only_distinct=True)

    def build(self, query: "Query") -> "Query":
        return replace(query, select_query=self)


@dataclass(frozen=True)
class JoinQuery:
    """A join against another table.

    Column joins fill ``from_`` and ``to``. Fragment joins keep the raw join
    expression in ``mode`` and its positional arguments in ``arguments``.
    ``filter`` holds extra join conditions.
    """

    mode: str = DEFAULT_JOIN_MODE
    table: str = ""
    from_: str = ""
    to: str = ""
    filter: FilterQuery = FilterQuery()
    arguments: Tuple[Any, ...] = ()

    @classmethod
    def with_mode(
        cls, mode: str, table: str, from_: str = "", to: str = "", *filters: FilterQuery
    ) -> "JoinQuery":
        return cls(mode=mode, table=table, from_=from_, to=to, filter=and_(*filters))

    @classmethod
    def on(cls, table: str, from_: str = "", to: str = "", *filters: FilterQuery) -> "JoinQuery":
        return cls.with_mode(DEFAULT_JOIN_MODE, table, from_, to, *filters)

    @classmethod
    def fragment(cls, expr: str, *args: Any) -> "JoinQuery":
        return cls(mode=expr, arguments=tuple(args))

    def is_fragment(self) -> bool:
        """True for raw joins created from an expression."""
        return not self.table and not self.from_ and not self.to

    def condition(self) -> FilterQuery:
        """Join condition as a filter tree, raw expression included."""
        if self.is_fragment():
            return filter_fragment(self.mode, *self.arguments).and_(self.filter)
        return self.filter

    def build(self, query: "Query") -> "Query":
        return replace(query, join_query=query.join_query + (self,))


@dataclass(frozen=True)
class SortQuery:
    """Sort on ``field``; direction is the sign of ``sort``."""

    field: str
    sort: int = SortDirection.ASC.value

    def asc(self) -> bool:
        return self.sort >= 0

    def desc(self) -> bool:
        return self.sort < 0

    def build(self, query: "Query") -> "Query":
        return replace(query, sort_query=query.sort_query + (self,))


def sort_asc(field: str) -> SortQuery:
    return SortQuery(field=field, sort=SortDirection.ASC.value)


def sort_desc(field: str) -> SortQuery:
    return SortQuery(field=field, sort=SortDirection.DESC.value)


@dataclass(frozen=True)
class GroupQuery:
    """Grouped fields and the having filter tree."""

    fields: Tuple[str, ...] = ()
    filter: FilterQuery = FilterQuery()

    def having(self, *filters: FilterQuery) -> "GroupQuery":
        return replace(self, filter=self.filter.and_(*filters))

    def havingf(self, expr: str, *args: Any) -> "GroupQuery":
        return replace(self, filter=self.filter.and_(filter_fragment(expr, *args)))

    def or_having(self, *filters: FilterQuery) -> "GroupQuery":
        return replace(self, filter=self.filter.or_(and_(*filters)))

    def or_havingf(self, expr: str, *args: Any) -> "GroupQuery":
        return replace(self, filter=self.filter.or_(filter_fragment(expr, *args)))

    def build(self, query: "Query") -> "Query":
        return replace(query, group_query=self)


def group(*fields: str) -> GroupQuery:
    return GroupQuery(fields=tuple(fields))


__all__ = [
    "SelectQuery",
    "JoinQuery",
    "SortQuery",
    "sort_asc",
    "sort_desc",
    "GroupQuery",
    "group",
]
