"""Shared fixtures for query builder tests."""

import pytest

from relquery import FilterQuery, eq, from_, gt, lt


@pytest.fixture
def a() -> FilterQuery:
    return eq("completed", True)


@pytest.fixture
def b() -> FilterQuery:
    return gt("priority", 2)


@pytest.fixture
def c() -> FilterQuery:
    return lt("due", 10)


@pytest.fixture
def todos():
    """A small base query most tests derive from."""
    return from_("todos").where(eq("completed", False)).sort_asc("id")
