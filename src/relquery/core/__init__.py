"""Core query representation.

Leaves first: enums and primitives, the filter tree, clause fragments, then
the ``Query`` aggregate with its fold and builder surface. Structured plans
and named scopes sit on top.
"""

from .enums import FilterOp, SortDirection
from .filter import (
    FilterQuery,
    and_,
    eq,
    filter_fragment,
    gt,
    gte,
    in_,
    like,
    lt,
    lte,
    ne,
    nil,
    nin,
    not_,
    not_like,
    not_nil,
    or_,
)
from .primitives import (
    Cascade,
    Limit,
    Lock,
    Offset,
    Preload,
    Reload,
    SQLQuery,
    Unscoped,
    UsePrimary,
    for_share,
    for_update,
    sql,
)
from .clauses import GroupQuery, JoinQuery, SelectQuery, SortQuery, group, sort_asc, sort_desc
from .query import (
    Querier,
    Query,
    build,
    from_,
    join,
    join_on,
    join_with,
    joinf,
    select,
    use_primary,
    where,
)
from .plan import build_filter, build_query
from .scopes import apply_scopes, load_scopes, scopes_from_mapping

__all__ = [
    "FilterOp",
    "SortDirection",
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
    "SelectQuery",
    "JoinQuery",
    "SortQuery",
    "GroupQuery",
    "group",
    "sort_asc",
    "sort_desc",
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
    "build_filter",
    "build_query",
    "scopes_from_mapping",
    "load_scopes",
    "apply_scopes",
]
