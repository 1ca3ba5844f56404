from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from relquery.config import PLAN_FILTER_OPS
from . import filter as f
from .filter import FilterQuery
from .query import Query

logger = logging.getLogger(__name__)


def _filter_from_knob(knob: Dict[str, Any]) -> Optional[FilterQuery]:
    col = knob.get("col")
    op = knob.get("op")
    val = knob.get("value")
    if op not in PLAN_FILTER_OPS:
        return None
    if op == "fragment":
        # the raw expression rides in value; col is not needed
        if isinstance(val, str):
            return f.filter_fragment(val)
        if isinstance(val, (list, tuple)) and val:
            return f.filter_fragment(str(val[0]), *val[1:])
        return None
    if not col or op is None:
        return None
    if op == "eq":
        return f.eq(col, val)
    if op == "neq":
        return f.ne(col, val)
    if op == "lt":
        return f.lt(col, val)
    if op == "lte":
        return f.lte(col, val)
    if op == "gt":
        return f.gt(col, val)
    if op == "gte":
        return f.gte(col, val)
    if op == "in":
        return f.in_(col, val if isinstance(val, (list, tuple)) else [val])
    if op == "nin":
        return f.nin(col, val if isinstance(val, (list, tuple)) else [val])
    if op == "nil":
        return f.nil(col)
    if op == "not_nil":
        return f.not_nil(col)
    if op == "like":
        return f.like(col, str(val))
    if op == "not_like":
        return f.not_like(col, str(val))
    if op == "contains":
        return f.like(col, f"%{val}%")
    if op == "range":
        rng = val or {}
        bounds = []
        if rng.get("min") is not None:
            bounds.append(f.gte(col, rng["min"]))
        if rng.get("max") is not None:
            bounds.append(f.lte(col, rng["max"]))
        return f.and_(*bounds) if bounds else None
    return None


def build_filter(filters: Optional[List[Dict[str, Any]]]) -> FilterQuery:
    """AND together ``{"col", "op", "value"}`` knobs into one filter tree.

    Knobs without a column or operator, or with an unknown operator, are
    skipped.
    """
    if not filters:
        return FilterQuery()
    exprs = []
    for knob in filters:
        expr = _filter_from_knob(knob)
        if expr is None:
            logger.debug("Skipping filter knob: %r", knob)
            continue
        exprs.append(expr)
    return f.and_(*exprs)


def build_query(
    table: str = "",
    *,
    columns: Optional[List[str]] = None,
    filters: Optional[List[Dict[str, Any]]] = None,
    group_by: Optional[List[str]] = None,
    having: Optional[List[Dict[str, Any]]] = None,
    distinct: bool = False,
    order_by: Optional[List[Dict[str, Any]]] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    lock: Optional[str] = None,
    preload: Optional[List[str]] = None,
) -> Query:
    """Build a Query from structured knobs.

    Every clause is optional; an empty call returns an empty query for
    ``table``. Nothing is checked against a schema.

    Examples:
        >>> q = build_query(
        ...     "todos",
        ...     filters=[{"col": "completed", "op": "eq", "value": True}],
        ...     order_by=[{"col": "id"}],
        ...     limit=20,
        ... )
        >>> str(q)
        'From("todos").Where(completed = true).SortAsc("id").Limit(20)'
    """
    q = Query(table=table)

    if columns:
        q = q.select(*columns)

    if distinct:
        q = q.distinct()

    where = build_filter(filters)
    if not where.none():
        q = q.where(where)

    if group_by:
        q = q.group(*group_by)
        cond = build_filter(having)
        if not cond.none():
            q = q.having(cond)

    if order_by:
        for ob in order_by:
            col = ob.get("col")
            if not col:
                logger.debug("Skipping order_by knob without col: %r", ob)
                continue
            q = q.sort_desc(col) if ob.get("desc", False) else q.sort_asc(col)

    if limit:
        q = q.limit(int(limit))

    if offset:
        q = q.offset(int(offset))

    if lock:
        q = q.lock(lock)

    for association in preload or []:
        q = q.preload(association)

    return q
