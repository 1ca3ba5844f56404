"""Query aggregate, composition protocol and builder surface.

A ``Query`` accumulates every directive composed so far. It is a frozen
value: each builder call returns a new ``Query`` and never touches the
receiver, so one base query can be safely derived into many variants.

Fragments (filters, joins, sorts, primitives and whole queries) share the
``Querier`` protocol and can be folded together with ``build``::

    >>> from relquery import build, eq, from_, sort_asc, Limit
    >>> active = from_("todos").where(eq("completed", False))
    >>> str(build("todos", active, sort_asc("id"), Limit(20)))
    'From("todos").Where(completed = false).SortAsc("id").Limit(20)'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Protocol, Tuple, runtime_checkable

from .clauses import GroupQuery, JoinQuery, SelectQuery, SortQuery, sort_asc, sort_desc
from .filter import FilterQuery, and_, filter_fragment
from .primitives import SQLQuery
from .utils import quote_all

logger = logging.getLogger(__name__)


@runtime_checkable
class Querier(Protocol):
    """Anything that can apply itself onto a query aggregate."""

    def build(self, query: "Query") -> "Query":
        ...


@dataclass(frozen=True)
class Query:
    """Accumulated, immutable query representation.

    Attributes:
        table: Main table name.
        select_query: Projected fields and distinct flag.
        join_query: Joins in insertion order.
        where_query: Where filter tree.
        group_query: Group fields and having filter tree.
        sort_query: Sorts in insertion order.
        offset_query: Rows to skip (0 means unset).
        limit_query: Maximum rows (0 means unset).
        lock_query: Lock clause ("" means unset).
        sql_query: Raw SQL statement overriding every other clause.
        unscoped_query: Bypass default scoping.
        reload_query: Reload associations on preload.
        cascade_query: Autoload associations. Defaults to True.
        preload_query: Associations to preload, in order.
        use_primary_db: Route to the primary database.
    """

    table: str = ""
    select_query: SelectQuery = SelectQuery()
    join_query: Tuple[JoinQuery, ...] = ()
    where_query: FilterQuery = FilterQuery()
    group_query: GroupQuery = GroupQuery()
    sort_query: Tuple[SortQuery, ...] = ()
    offset_query: int = 0
    limit_query: int = 0
    lock_query: str = ""
    sql_query: SQLQuery = SQLQuery()
    unscoped_query: bool = False
    reload_query: bool = False
    cascade_query: bool = True
    preload_query: Tuple[str, ...] = ()
    use_primary_db: bool = False
    # set only on the aggregate of a fold whose first fragment is a Query
    _fresh: bool = field(default=False, repr=False, compare=False)

    def build(self, query: "Query") -> "Query":
        """Merge this query into ``query``.

        A fresh aggregate is replaced entirely. Otherwise fields merge one by
        one: sequences append, select and group replace when set, where and
        having trees are ANDed, scalars overwrite when non-zero and flags OR.
        """
        if query._fresh:
            return replace(self, _fresh=False)

        merged = query
        if self.table:
            merged = replace(merged, table=self.table)

        if self.select_query.fields:
            merged = replace(merged, select_query=self.select_query)
        elif self.select_query.only_distinct:
            merged = replace(merged, select_query=merged.select_query.distinct())

        group = merged.group_query
        if self.group_query.fields:
            group = replace(group, fields=self.group_query.fields)
        group = replace(group, filter=group.filter.and_(self.group_query.filter))

        merged = replace(
            merged,
            join_query=merged.join_query + self.join_query,
            where_query=merged.where_query.and_(self.where_query),
            group_query=group,
            sort_query=merged.sort_query + self.sort_query,
            preload_query=merged.preload_query + self.preload_query,
            unscoped_query=merged.unscoped_query or self.unscoped_query,
            reload_query=merged.reload_query or self.reload_query,
            cascade_query=merged.cascade_query or self.cascade_query,
            use_primary_db=merged.use_primary_db or self.use_primary_db,
        )

        if self.offset_query != 0:
            merged = replace(merged, offset_query=self.offset_query)
        if self.limit_query != 0:
            merged = replace(merged, limit_query=self.limit_query)
        if self.lock_query:
            merged = replace(merged, lock_query=self.lock_query)
        if self.sql_query.statement:
            merged = replace(merged, sql_query=self.sql_query)

        return merged

    # ------------------------------------------------------------------
    # Select / from
    # ------------------------------------------------------------------

    def select(self, *fields: str) -> "Query":
        """Fields to select. Replaces any previous selection."""
        return replace(self, select_query=SelectQuery(fields=tuple(fields)))

    def from_(self, table: str) -> "Query":
        return replace(self, table=table)

    def distinct(self) -> "Query":
        return replace(self, select_query=self.select_query.distinct())

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, table: str, *filters: FilterQuery) -> "Query":
        """Join ``table`` using only the given filters as the condition."""
        return self.join_on(table, "", "", *filters)

    def join_on(self, table: str, from_: str, to: str, *filters: FilterQuery) -> "Query":
        return JoinQuery.on(table, from_, to, *filters).build(self)

    def join_with(
        self, mode: str, table: str, from_: str, to: str, *filters: FilterQuery
    ) -> "Query":
        """Join ``table`` with a custom join keyword such as ``LEFT JOIN``."""
        return JoinQuery.with_mode(mode, table, from_, to, *filters).build(self)

    def joinf(self, expr: str, *args: Any) -> "Query":
        """Join using a raw expression with positional arguments."""
        return JoinQuery.fragment(expr, *args).build(self)

    # ------------------------------------------------------------------
    # Where
    # ------------------------------------------------------------------

    def where(self, *filters: FilterQuery) -> "Query":
        return replace(self, where_query=self.where_query.and_(*filters))

    def wheref(self, expr: str, *args: Any) -> "Query":
        return replace(self, where_query=self.where_query.and_(filter_fragment(expr, *args)))

    def or_where(self, *filters: FilterQuery) -> "Query":
        """OR the whole accumulated where clause with the AND of ``filters``.

        ``where(a).where(b).or_where(c)`` means ``(a AND b) OR c``.
        """
        return replace(self, where_query=self.where_query.or_(and_(*filters)))

    def or_wheref(self, expr: str, *args: Any) -> "Query":
        return replace(self, where_query=self.where_query.or_(filter_fragment(expr, *args)))

    # ------------------------------------------------------------------
    # Group / having
    # ------------------------------------------------------------------

    def group(self, *fields: str) -> "Query":
        """Group by ``fields``. Keeps any having clause already set."""
        return replace(self, group_query=replace(self.group_query, fields=tuple(fields)))

    def having(self, *filters: FilterQuery) -> "Query":
        return replace(self, group_query=self.group_query.having(*filters))

    def havingf(self, expr: str, *args: Any) -> "Query":
        return replace(self, group_query=self.group_query.havingf(expr, *args))

    def or_having(self, *filters: FilterQuery) -> "Query":
        """OR the whole accumulated having clause with the AND of ``filters``."""
        return replace(self, group_query=self.group_query.or_having(*filters))

    def or_havingf(self, expr: str, *args: Any) -> "Query":
        return replace(self, group_query=self.group_query.or_havingf(expr, *args))

    # ------------------------------------------------------------------
    # Sort
    # ------------------------------------------------------------------

    def sort(self, *fields: str) -> "Query":
        return self.sort_asc(*fields)

    def sort_asc(self, *fields: str) -> "Query":
        return replace(self, sort_query=self.sort_query + tuple(sort_asc(f) for f in fields))

    def sort_desc(self, *fields: str) -> "Query":
        return replace(self, sort_query=self.sort_query + tuple(sort_desc(f) for f in fields))

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def offset(self, offset: int) -> "Query":
        return replace(self, offset_query=int(offset))

    def limit(self, limit: int) -> "Query":
        return replace(self, limit_query=int(limit))

    def lock(self, lock: str) -> "Query":
        return replace(self, lock_query=lock)

    def unscoped(self) -> "Query":
        """Ignore default scoping such as soft-delete exclusion."""
        return replace(self, unscoped_query=True)

    def reload(self) -> "Query":
        return replace(self, reload_query=True)

    def cascade(self, c: bool) -> "Query":
        """Enable or disable association autoloading."""
        return replace(self, cascade_query=bool(c))

    def preload(self, field: str) -> "Query":
        return replace(self, preload_query=self.preload_query + (field,))

    def use_primary(self) -> "Query":
        return replace(self, use_primary_db=True)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        """Describe the query as the builder calls that would rebuild it."""
        if self.sql_query.statement:
            return str(self.sql_query)

        calls = []
        if self.use_primary_db:
            calls.append("UsePrimary()")

        if self.table:
            calls.append(f'From("{self.table}")')

        if self.select_query.fields:
            calls.append(f"Select({quote_all(self.select_query.fields)})")

        if self.select_query.only_distinct:
            calls.append("Distinct()")

        for jq in self.join_query:
            calls.append(f"JoinWith({quote_all((jq.mode, jq.table, jq.from_, jq.to))})")

        if not self.where_query.none():
            calls.append(f"Where({self.where_query})")

        if self.group_query.fields:
            calls.append(f"Group({quote_all(self.group_query.fields)})")
            if not self.group_query.filter.none():
                calls.append(f"Having({self.group_query.filter})")

        for sq in self.sort_query:
            name = "SortAsc" if sq.asc() else "SortDesc"
            calls.append(f'{name}("{sq.field}")')

        if self.limit_query > 0:
            calls.append(f"Limit({self.limit_query})")

        if self.offset_query > 0:
            calls.append(f"Offset({self.offset_query})")

        if self.lock_query:
            calls.append(f'Lock("{self.lock_query}")')

        if self.unscoped_query:
            calls.append("Unscoped()")

        if self.reload_query:
            calls.append("Reload()")

        if not self.cascade_query:
            calls.append("Cascade(false)")

        if self.preload_query:
            calls.append(f"Preload({quote_all(self.preload_query)})")

        return ".".join(calls)


def build(table: str, *queriers: Any) -> Query:
    """Fold ``queriers`` into one query for ``table``.

    If the first querier is itself a ``Query`` the result starts as a copy of
    it; later queriers merge on top. Objects without a ``build`` method are
    skipped. ``table`` is only used when no querier set a table.

    Examples:
        >>> str(build("todos"))
        'From("todos")'
        >>> from relquery import Offset
        >>> str(build("todos", from_("users").limit(5), Offset(10)))
        'From("users").Limit(5).Offset(10)'
    """
    query = Query()
    if queriers and isinstance(queriers[0], Query):
        query = replace(query, _fresh=True)

    for querier in queriers:
        if not isinstance(querier, Querier) or not callable(querier.build):
            logger.debug("Skipping unrecognized query fragment: %r", querier)
            continue
        query = querier.build(query)

    if not query.table:
        query = replace(query, table=table)

    return query


# ============================================================================
# FREE CONSTRUCTORS
# ============================================================================

def select(*fields: str) -> Query:
    """Start a query from its selected fields."""
    return Query(select_query=SelectQuery(fields=tuple(fields)))


def from_(table: str) -> Query:
    """Start a query from its table."""
    return Query(table=table)


def join(table: str, *filters: FilterQuery) -> Query:
    return join_on(table, "", "", *filters)


def join_on(table: str, from_: str, to: str, *filters: FilterQuery) -> Query:
    return Query(join_query=(JoinQuery.on(table, from_, to, *filters),))


def join_with(mode: str, table: str, from_: str, to: str, *filters: FilterQuery) -> Query:
    return Query(join_query=(JoinQuery.with_mode(mode, table, from_, to, *filters),))


def joinf(expr: str, *args: Any) -> Query:
    return Query(join_query=(JoinQuery.fragment(expr, *args),))


def where(*filters: FilterQuery) -> Query:
    """Start a query from its where clause."""
    return Query(where_query=and_(*filters))


def use_primary() -> Query:
    return Query(use_primary_db=True)


__all__ = [
    "Querier",
    "Query",
    "build",
    "select",
    "from_",
    "join",
    "join_on",
    "join_with",
    "joinf",
    "where",
    "use_primary",
]
