"""relquery: composable, immutable query builder.

Queries are frozen values built by chaining or by folding fragments:

    >>> from relquery import from_, eq
    >>> str(from_("todos").where(eq("completed", True)).sort_asc("id").limit(20))
    'From("todos").Where(completed = true).SortAsc("id").Limit(20)'

Rendering a query into executable SQL is left to adapters that walk the
finished ``Query`` fields.
"""

__version__ = "0.1.0"

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .errors import RelQueryError, ScopeError

__all__ = ["__version__", "RelQueryError", "ScopeError", *_core_all]
