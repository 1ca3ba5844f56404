"""Tests for named scopes loaded from mappings and YAML files."""

from pathlib import Path

import pytest

from relquery import ScopeError, apply_scopes, from_, load_scopes, scopes_from_mapping

SCOPES_YAML = """\
active:
  filters:
    - {col: deleted_at, op: nil}
recent:
  order_by:
    - {col: created_at, desc: true}
  limit: 20
mine:
  filters:
    - {col: user_id, op: eq, value: 7}
  preload: [user]
"""


@pytest.fixture
def scopes_file(tmp_path: Path) -> Path:
    path = tmp_path / "scopes.yaml"
    path.write_text(SCOPES_YAML, encoding="utf-8")
    return path


def test_load_scopes(scopes_file: Path):  # pylint: disable=redefined-outer-name
    scopes = load_scopes(scopes_file)
    assert sorted(scopes) == ["active", "mine", "recent"]
    assert str(scopes["active"]) == "Where(deleted_at IS NULL)"
    assert str(scopes["recent"]) == 'SortDesc("created_at").Limit(20)'


def test_apply_scopes_folds_in_order(scopes_file: Path):  # pylint: disable=redefined-outer-name
    scopes = load_scopes(scopes_file)
    q = apply_scopes(from_("todos"), scopes, "active", "mine", "recent")
    assert str(q) == (
        'From("todos").Where(deleted_at IS NULL AND user_id = 7)'
        '.SortDesc("created_at").Limit(20).Preload("user")'
    )


def test_apply_scopes_keeps_query_clauses(scopes_file: Path):  # pylint: disable=redefined-outer-name
    scopes = load_scopes(scopes_file)
    base = from_("todos").sort_asc("id").limit(5)
    q = apply_scopes(base, scopes, "recent")
    assert [s.field for s in q.sort_query] == ["id", "created_at"]
    assert q.limit_query == 20
    assert base.limit_query == 5


def test_apply_unknown_scope_raises():
    with pytest.raises(KeyError, match="Unknown scopes: missing"):
        apply_scopes(from_("todos"), {}, "missing")


def test_scope_table_is_optional():
    scopes = scopes_from_mapping({"users": {"table": "users"}, "empty": None})
    assert scopes["users"].table == "users"
    assert str(scopes["empty"]) == ""


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError, match="Scope file not found"):
        load_scopes(tmp_path / "nope.yaml")


def test_load_invalid_yaml(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("active: [unclosed", encoding="utf-8")
    with pytest.raises(ScopeError, match="Failed to read scope file"):
        load_scopes(path)


def test_load_empty_file(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_scopes(path) == {}


@pytest.mark.parametrize(
    "mapping, message",
    [
        (["active"], "Scopes must be a mapping"),
        ({"active": ["deleted_at"]}, "Scope 'active' must be a mapping"),
        ({"active": {"where": []}}, "Scope 'active' has unknown keys: where"),
        ({"active": {"limit": "ten"}}, "Scope 'active' could not be built"),
    ],
    ids=["not_mapping", "entry_not_mapping", "unknown_key", "bad_value"],
)
def test_scope_shape_errors(mapping, message):
    with pytest.raises(ScopeError, match=message):
        scopes_from_mapping(mapping)


def test_scope_error_is_value_error():
    assert issubclass(ScopeError, ValueError)
