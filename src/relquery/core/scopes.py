"""Named query scopes.

A scope is a reusable query fragment ("active records only", "most recent
first") authored once and folded onto any query. Scopes are declared as
structured knobs, usually in a YAML file:

    active:
      filters:
        - {col: deleted_at, op: nil}
    recent:
      order_by:
        - {col: created_at, desc: true}
      limit: 20

Usage:

    scopes = load_scopes(Path("config/scopes.yaml"))
    q = apply_scopes(from_("todos"), scopes, "active", "recent")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from relquery.errors import ScopeError
from .plan import build_query
from .query import Query, build

logger = logging.getLogger(__name__)

_SCOPE_KEYS = {
    "table",
    "columns",
    "filters",
    "group_by",
    "having",
    "distinct",
    "order_by",
    "limit",
    "offset",
    "lock",
    "preload",
}


def scopes_from_mapping(mapping: Mapping[str, Any]) -> Dict[str, Query]:
    """Build named queries from a ``{name: knobs}`` mapping.

    Args:
        mapping: Scope names mapped to ``build_query`` knobs. ``table`` is
            optional; scopes usually leave it empty so the target query
            keeps its own table.

    Returns:
        Dictionary of scope name to Query.

    Raises:
        ScopeError: If the mapping or one of its entries has the wrong shape.
    """
    if not isinstance(mapping, Mapping):
        raise ScopeError(f"Scopes must be a mapping of name to knobs, got {type(mapping).__name__}")

    scopes: Dict[str, Query] = {}
    for name, knobs in mapping.items():
        if knobs is None:
            knobs = {}
        if not isinstance(knobs, Mapping):
            raise ScopeError(f"Scope '{name}' must be a mapping, got {type(knobs).__name__}")
        unknown = set(knobs) - _SCOPE_KEYS
        if unknown:
            raise ScopeError(
                f"Scope '{name}' has unknown keys: {', '.join(sorted(unknown))}. "
                f"Valid keys: {', '.join(sorted(_SCOPE_KEYS))}"
            )
        params = dict(knobs)
        table = params.pop("table", "") or ""
        try:
            scopes[str(name)] = build_query(table, **params)
        except (AttributeError, TypeError, ValueError) as e:
            raise ScopeError(f"Scope '{name}' could not be built: {e}") from e
    return scopes


def load_scopes(path: Path) -> Dict[str, Query]:
    """Load named scopes from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ScopeError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scope file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ScopeError(f"Failed to read scope file {path}: {e}") from e

    scopes = scopes_from_mapping(data or {})
    logger.info("Loaded %d scopes from %s", len(scopes), path)
    return scopes


def apply_scopes(query: Query, scopes: Mapping[str, Query], *names: str) -> Query:
    """Fold the named scopes onto ``query`` in order.

    Raises:
        KeyError: If a name is not in ``scopes``.
    """
    missing = [n for n in names if n not in scopes]
    if missing:
        raise KeyError(f"Unknown scopes: {', '.join(missing)}")
    return build(query.table, query, *(scopes[n] for n in names))
