"""Core utility functions for relquery.

This module provides the value formatting shared by the debug renderers and
the colorlog-based logging setup.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

import colorlog

from relquery.config import FRAGMENT_PLACEHOLDER, LOG_COLORS, LOG_FORMAT


def format_value(value: Any) -> str:
    """Render a filter or argument value for debug output.

    Strings are double-quoted, booleans lowercase, ``None`` is ``NULL``,
    numbers are bare and sequences render as a parenthesized list.

    Examples:
        >>> format_value(True)
        'true'
        >>> format_value("done")
        '"done"'
        >>> format_value([1, 2])
        '(1, 2)'
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (list, tuple, set, frozenset)):
        return "(" + ", ".join(format_value(v) for v in value) + ")"
    return f'"{value}"'


def format_args(values: Iterable[Any]) -> str:
    """Render a comma-separated argument list."""
    return ", ".join(format_value(v) for v in values)


def quote_all(names: Iterable[str]) -> str:
    """Render names as a comma-separated list of double-quoted strings."""
    return ", ".join(f'"{n}"' for n in names)


def substitute_placeholders(expr: str, args: Sequence[Any]) -> str:
    """Replace each placeholder in ``expr`` with the next formatted argument.

    Substitution is textual only. Extra arguments are ignored and extra
    placeholders are left untouched.

    Examples:
        >>> substitute_placeholders("age > ? AND name = ?", (18, "bob"))
        'age > 18 AND name = "bob"'
    """
    if not args:
        return expr
    parts = expr.split(FRAGMENT_PLACEHOLDER)
    out = [parts[0]]
    for i, part in enumerate(parts[1:]):
        if i < len(args):
            out.append(format_value(args[i]))
        else:
            out.append(FRAGMENT_PLACEHOLDER)
        out.append(part)
    return "".join(out)


def setup_logging(
    verbose: bool = False,
    warnings_only: bool = False,
    errors_only: bool = False,
    name: Optional[str] = None,
) -> logging.Logger:
    """Attach a colored stream handler to a logger. Opt-in.

    relquery itself never configures logging; its modules only emit through
    ``logging.getLogger(__name__)``. Applications and scripts call this
    helper when they want relquery's DEBUG output (skipped fragments and
    knobs, loaded scope files) on the console.

    Args:
        verbose: Log at DEBUG instead of INFO.
        warnings_only: Log at WARNING. Overrides ``verbose``.
        errors_only: Log at ERROR. Overrides the other two.
        name: Logger to configure, e.g. ``"relquery"``. Defaults to root.

    Returns:
        The configured logger. Its previous handlers are removed, so
        calling this twice does not duplicate output.
    """
    target = logging.getLogger(name)
    for handler in list(target.handlers):
        target.removeHandler(handler)

    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(f"%(log_color)s{LOG_FORMAT}", log_colors=LOG_COLORS)
    )
    target.addHandler(handler)

    if errors_only:
        level = logging.ERROR
    elif warnings_only:
        level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.INFO
    target.setLevel(level)
    return target
