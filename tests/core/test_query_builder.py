"""Tests for the chainable Query builder surface and free constructors."""

from relquery import (
    FilterQuery,
    JoinQuery,
    Query,
    and_,
    eq,
    from_,
    gt,
    join,
    join_on,
    join_with,
    joinf,
    or_,
    select,
    use_primary,
    where,
)


def test_new_query_defaults():
    q = Query()
    assert q.table == ""
    assert q.cascade_query is True
    assert q.where_query.none()
    assert q.group_query.filter.none()
    assert q.join_query == ()
    assert q.sort_query == ()
    assert q.preload_query == ()
    assert q.offset_query == 0 and q.limit_query == 0
    assert q.lock_query == ""
    assert str(q) == ""


def test_chaining_never_mutates_receiver(todos):  # pylint: disable=redefined-outer-name
    """Deriving variants from one base leaves the base and siblings alone."""
    before = str(todos)
    paged = todos.limit(10).offset(20)
    filtered = todos.where(gt("priority", 3))
    sorted_more = todos.sort_desc("created_at")

    assert str(todos) == before
    assert todos.limit_query == 0
    assert len(todos.sort_query) == 1
    assert paged.where_query == todos.where_query
    assert str(filtered) == 'From("todos").Where(completed = false AND priority > 3).SortAsc("id")'
    assert [s.field for s in sorted_more.sort_query] == ["id", "created_at"]
    assert [s.field for s in paged.sort_query] == ["id"]


def test_select_replaces_fields():
    q = from_("todos").select("id").select("title", "completed")
    assert q.select_query.fields == ("title", "completed")


def test_distinct_keeps_fields():
    q = select("id", "title").distinct()
    assert q.select_query.only_distinct is True
    assert q.select_query.fields == ("id", "title")


def test_where_ands_filters(a, b, c):  # pylint: disable=redefined-outer-name
    q = where(a).where(b, c)
    assert q.where_query == and_(a, b, c)


def test_or_where_ors_whole_accumulated_clause(a, b, c):  # pylint: disable=redefined-outer-name
    """where(a).where(b).or_where(c) means (a AND b) OR c."""
    q = from_("todos").where(a).where(b).or_where(c)
    assert q.where_query == or_(and_(a, b), c)
    assert str(q) == 'From("todos").Where((completed = true AND priority > 2) OR due < 10)'


def test_or_where_with_multiple_filters_ands_them(a, b, c):  # pylint: disable=redefined-outer-name
    q = where(a).or_where(b, c)
    assert str(q.where_query) == "completed = true OR (priority > 2 AND due < 10)"


def test_or_where_on_empty_clause(a):  # pylint: disable=redefined-outer-name
    assert Query().or_where(a).where_query == a


def test_wheref_and_or_wheref():
    q = from_("todos").wheref("title LIKE ?", "%milk%").or_wheref("id = ?", 3)
    assert str(q) == 'From("todos").Where(title LIKE "%milk%" OR id = 3)'


def test_group_having_or_having(a, b, c):  # pylint: disable=redefined-outer-name
    q = from_("todos").group("user_id").having(a).having(b).or_having(c)
    assert q.group_query.fields == ("user_id",)
    assert str(q.group_query.filter) == "(completed = true AND priority > 2) OR due < 10"


def test_havingf_and_or_havingf():
    q = from_("todos").group("user_id").havingf("COUNT(id) > ?", 1).or_havingf("MAX(score) = ?", 10)
    assert str(q) == 'From("todos").Group("user_id").Having(COUNT(id) > 1 OR MAX(score) = 10)'


def test_group_keeps_having():
    q = from_("todos").having(gt("count", 1)).group("user_id")
    assert str(q) == 'From("todos").Group("user_id").Having(count > 1)'


def test_sort_is_ascending_and_multi_field():
    q = from_("todos").sort("priority", "id").sort_desc("created_at", "title")
    assert [(s.field, s.sort) for s in q.sort_query] == [
        ("priority", 1),
        ("id", 1),
        ("created_at", -1),
        ("title", -1),
    ]


def test_join_methods():
    q = (
        from_("todos")
        .join("users")
        .join_on("tags", "tag_id", "id")
        .join_with("LEFT JOIN", "projects", "project_id", "id", eq("archived", False))
        .joinf("JOIN notes ON notes.todo_id = todos.id")
    )
    modes = [jq.mode for jq in q.join_query]
    assert modes == ["JOIN", "JOIN", "LEFT JOIN", "JOIN notes ON notes.todo_id = todos.id"]
    assert q.join_query[0].from_ == "" and q.join_query[0].to == ""
    assert str(q.join_query[2].filter) == "archived = false"
    assert q.join_query[3].is_fragment() is True


def test_free_join_constructors():
    assert join("users").join_query == (JoinQuery.on("users"),)
    assert join_on("users", "user_id", "id").join_query[0].to == "id"
    assert join_with("RIGHT JOIN", "users", "user_id", "id").join_query[0].mode == "RIGHT JOIN"
    frag = joinf("JOIN users ON users.id = ?", 1).join_query[0]
    assert frag.arguments == (1,)
    assert join("users").cascade_query is True


def test_free_constructors_start_fresh_queries():
    assert select("id").select_query.fields == ("id",)
    assert from_("todos").table == "todos"
    assert where().where_query == FilterQuery()
    assert use_primary().use_primary_db is True
    for q in (select("id"), from_("t"), where(eq("a", 1)), use_primary(), joinf("x")):
        assert q.cascade_query is True


def test_modifiers():
    q = (
        from_("todos")
        .offset(5)
        .limit(10)
        .lock("FOR UPDATE")
        .unscoped()
        .reload()
        .cascade(False)
        .preload("user")
        .preload("tags")
        .use_primary()
    )
    assert q.offset_query == 5
    assert q.limit_query == 10
    assert q.lock_query == "FOR UPDATE"
    assert q.unscoped_query and q.reload_query and q.use_primary_db
    assert q.cascade_query is False
    assert q.preload_query == ("user", "tags")


def test_queries_compare_structurally(a):  # pylint: disable=redefined-outer-name
    assert from_("todos").where(a).limit(3) == from_("todos").where(a).limit(3)
    assert from_("todos").limit(3) != from_("todos").limit(4)
