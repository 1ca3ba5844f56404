"""Expression primitives.

Small scalar directives that can be folded into a ``Query`` on their own:
pagination, locking, scoping and association loading flags, and raw SQL.

Examples:
    >>> from relquery import build, Limit, Offset
    >>> str(build("todos", Limit(10), Offset(20)))
    'From("todos").Limit(10).Offset(20)'
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Tuple

from relquery.config import FOR_SHARE, FOR_UPDATE
from .utils import format_args

if TYPE_CHECKING:
    from .query import Query


@dataclass(frozen=True)
class Offset:
    """Skip the first ``value`` rows."""

    value: int

    def build(self, query: "Query") -> "Query":
        return replace(query, offset_query=int(self.value))


@dataclass(frozen=True)
class Limit:
    """Return at most ``value`` rows."""

    value: int

    def build(self, query: "Query") -> "Query":
        return replace(query, limit_query=int(self.value))


@dataclass(frozen=True)
class Lock:
    """Row lock clause. Consumers ignore it outside of a transaction."""

    mode: str

    def build(self, query: "Query") -> "Query":
        return replace(query, lock_query=self.mode)


def for_update() -> Lock:
    return Lock(FOR_UPDATE)


def for_share() -> Lock:
    return Lock(FOR_SHARE)


@dataclass(frozen=True)
class Unscoped:
    """Bypass default scoping such as soft-delete exclusion."""

    value: bool = True

    def build(self, query: "Query") -> "Query":
        return replace(query, unscoped_query=bool(self.value))


@dataclass(frozen=True)
class Reload:
    """Force associations to be reloaded on preload."""

    value: bool = True

    def build(self, query: "Query") -> "Query":
        return replace(query, reload_query=bool(self.value))


@dataclass(frozen=True)
class Cascade:
    """Enable or disable association autoloading."""

    value: bool = True

    def build(self, query: "Query") -> "Query":
        return replace(query, cascade_query=bool(self.value))


@dataclass(frozen=True)
class Preload:
    """Association to load alongside the main result."""

    field: str

    def build(self, query: "Query") -> "Query":
        return replace(query, preload_query=query.preload_query + (self.field,))


@dataclass(frozen=True)
class UsePrimary:
    """Route the query to the primary database."""

    value: bool = True

    def build(self, query: "Query") -> "Query":
        return replace(query, use_primary_db=bool(self.value))


@dataclass(frozen=True)
class SQLQuery:
    """Raw SQL statement with positional values.

    When set on a query it supersedes every other clause.
    """

    statement: str = ""
    values: Tuple[Any, ...] = ()

    def build(self, query: "Query") -> "Query":
        return replace(query, sql_query=self)

    def __str__(self) -> str:
        out = f'SQL("{self.statement}"'
        if self.values:
            out += ", " + format_args(self.values)
        return out + ")"


def sql(statement: str, *values: Any) -> SQLQuery:
    return SQLQuery(statement=statement, values=tuple(values))


__all__ = [
    "Offset",
    "Limit",
    "Lock",
    "for_update",
    "for_share",
    "Unscoped",
    "Reload",
    "Cascade",
    "Preload",
    "UsePrimary",
    "SQLQuery",
    "sql",
]
