"""Query builder configuration constants.

This module centralizes the keywords and tokens the builder emits, plus the
logging layout used by ``setup_logging``. Adjust these constants to tune
defaults without touching the builder itself.

Join Modes:
    - "JOIN": Default mode used by ``join`` and ``join_on``
    - "INNER JOIN", "LEFT JOIN", "RIGHT JOIN", "FULL JOIN": Explicit modes for ``join_with``

Lock Modes:
    - "FOR UPDATE": Row lock for writes
    - "FOR SHARE": Row lock for reads
"""

from __future__ import annotations

# ============================================================================
# JOIN MODES
# ============================================================================

DEFAULT_JOIN_MODE = "JOIN"
INNER_JOIN = "INNER JOIN"
LEFT_JOIN = "LEFT JOIN"
RIGHT_JOIN = "RIGHT JOIN"
FULL_JOIN = "FULL JOIN"

_JOIN_MODES = {
    "join": DEFAULT_JOIN_MODE,
    "inner": INNER_JOIN,
    "left": LEFT_JOIN,
    "right": RIGHT_JOIN,
    "full": FULL_JOIN,
}


# ============================================================================
# LOCK MODES
# ============================================================================

FOR_UPDATE = "FOR UPDATE"
FOR_SHARE = "FOR SHARE"


# ============================================================================
# FRAGMENTS
# ============================================================================

# Positional placeholder substituted by arguments when rendering raw fragments
FRAGMENT_PLACEHOLDER = "?"


# ============================================================================
# STRUCTURED PLANS
# ============================================================================

# Operator names accepted in plan/scope filter knobs
PLAN_FILTER_OPS = (
    "eq",
    "neq",
    "lt",
    "lte",
    "gt",
    "gte",
    "in",
    "nin",
    "nil",
    "not_nil",
    "like",
    "not_like",
    "contains",
    "range",
    "fragment",
)


# ============================================================================
# LOGGING
# ============================================================================

LOG_FORMAT = (
    "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_join_mode(name: str) -> str:
    """Resolve a short join name to the join keyword.

    Args:
        name: Short join name ("join", "inner", "left", "right", "full").
            Case and surrounding whitespace are ignored.

    Returns:
        The join keyword (e.g., "LEFT JOIN").

    Raises:
        ValueError: If the name is not a known join mode.

    Examples:
        >>> get_join_mode("left")
        'LEFT JOIN'
        >>> get_join_mode("Inner")
        'INNER JOIN'
    """
    key = str(name).strip().lower()
    if key not in _JOIN_MODES:
        raise ValueError(
            f"Unknown join mode: {name}. Valid modes: {', '.join(sorted(_JOIN_MODES))}"
        )
    return _JOIN_MODES[key]
