"""Run the usage examples embedded in module docstrings."""

import doctest
import importlib

import pytest

MODULES = [
    "relquery",
    "relquery.config",
    "relquery.core.utils",
    "relquery.core.filter",
    "relquery.core.primitives",
    "relquery.core.clauses",
    "relquery.core.query",
    "relquery.core.plan",
    "relquery.core.scopes",
]


@pytest.mark.parametrize("name", MODULES)
def test_docstring_examples(name):
    module = importlib.import_module(name)
    result = doctest.testmod(module, verbose=False)
    assert result.failed == 0
