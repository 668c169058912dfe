import pytest

from pep_db.errors import MalformedInputError
from pep_db.statements import (
    build_delete,
    build_insert,
    build_select,
    build_update,
    leading_keyword,
    render_value,
    render_where,
)


def quote(value):
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    return str(value)


# ----------------------------------------------------------------------
# Filters
# ----------------------------------------------------------------------

def test_where_mapping_with_column_only_entry():
    where = {"status": "active", "flag": ""}
    assert render_where(where, quote) == "status = 'active' AND flag"


def test_where_mapping_keeps_insertion_order():
    where = {"b": 2, "a": "x", "c": 3}
    assert render_where(where, quote) == "b = 2 AND a = 'x' AND c = 3"


def test_where_string_is_verbatim():
    assert render_where("qty > 5 OR name LIKE 'b%'", quote) == "qty > 5 OR name LIKE 'b%'"


def test_where_none_value_is_null_check():
    assert render_where({"name": None}, quote) == "name IS NULL"


def test_where_values_go_through_escaper():
    seen = []

    def escape(value):
        seen.append(value)
        return quote(value)

    render_where({"id": 7, "name": "o'brien"}, escape)
    assert seen == [7, "o'brien"]


def test_render_value_null_is_never_escaped():
    def escape(value):
        raise AssertionError("escape called for None")

    assert render_value(None, escape) == "NULL"


# ----------------------------------------------------------------------
# SELECT
# ----------------------------------------------------------------------

def test_select_columns_and_table():
    sql = build_select(["id", "name"], table="widgets", escape=quote)
    assert sql == "SELECT id, name FROM widgets"


def test_select_single_expression():
    sql = build_select("count(*)", table="widgets", escape=quote)
    assert sql == "SELECT count(*) FROM widgets"


def test_select_with_filter_and_window():
    sql = build_select(["*"], {"qty": 5}, limit=10, offset=20, table="widgets", escape=quote)
    assert sql == "SELECT * FROM widgets WHERE qty = 5 LIMIT 10 OFFSET 20"


def test_select_offset_without_limit_is_ignored():
    sql = build_select(["*"], offset=20, table="widgets", escape=quote)
    assert sql == "SELECT * FROM widgets"


def test_select_limit_zero_is_rendered():
    sql = build_select(["*"], limit=0, table="widgets", escape=quote)
    assert sql == "SELECT * FROM widgets LIMIT 0"


@pytest.mark.parametrize("where", [None, "", {}, "id = 1", {"id": 1}, {"a": "", "b": "x"}])
def test_select_has_one_from_and_where_iff_filter(where):
    sql = build_select(["id"], where, table="widgets", escape=quote)
    assert sql.count(" FROM ") == 1
    assert (" WHERE " in sql) == bool(where)


@pytest.mark.parametrize("columns", [[], "", ()])
def test_select_without_columns_fails(columns):
    with pytest.raises(MalformedInputError):
        build_select(columns, table="widgets", escape=quote)


# ----------------------------------------------------------------------
# INSERT / UPDATE / DELETE
# ----------------------------------------------------------------------

def test_insert_renders_columns_and_values_in_order():
    sql = build_insert({"name": "bolt", "qty": 5, "note": None}, table="widgets", escape=quote)
    assert sql == "INSERT INTO widgets (name, qty, note) VALUES ('bolt', 5, NULL)"


def test_insert_column_and_value_counts_match():
    data = {"a": 1, "b": "two", "c": None, "d": 4.5}
    sql = build_insert(data, table="t", escape=quote)
    fields = sql.split("(")[1].split(")")[0].split(", ")
    values = sql.split("VALUES (")[1].rstrip(")").split(", ")
    assert fields == ["a", "b", "c", "d"]
    assert values == ["1", "'two'", "NULL", "4.5"]


def test_insert_without_data_fails():
    with pytest.raises(MalformedInputError):
        build_insert({}, table="widgets", escape=quote)


def test_update_mapping():
    sql = build_update({"qty": 10, "name": None}, {"id": 1}, table="widgets", escape=quote)
    assert sql == "UPDATE widgets SET qty = 10, name = NULL WHERE id = 1"


def test_update_raw_assignment_without_filter():
    sql = build_update("qty = qty + 1", table="widgets", escape=quote)
    assert sql == "UPDATE widgets SET qty = qty + 1"


@pytest.mark.parametrize("data", [{}, ""])
def test_update_without_data_fails(data):
    with pytest.raises(MalformedInputError):
        build_update(data, {"id": 1}, table="widgets", escape=quote)


def test_delete_with_filter():
    sql = build_delete({"name": "bolt"}, table="widgets", escape=quote)
    assert sql == "DELETE FROM widgets WHERE name = 'bolt'"


@pytest.mark.parametrize("where", [None, "", {}])
def test_delete_without_filter_targets_every_row(where):
    assert build_delete(where, table="widgets", escape=quote) == "DELETE FROM widgets"


# ----------------------------------------------------------------------
# Keyword detection
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "statement, expected",
    [
        ("SELECT 1", "SELECT"),
        ("  select * from t", "SELECT"),
        ("Insert into t values (1)", "INSERT"),
        ("\nUPDATE t SET a = 1", "UPDATE"),
        ("delete from t", "DELETE"),
        ("CREATE TABLE t (a)", "CREATE"),
        ("", ""),
        ("(SELECT 1)", ""),
    ],
)
def test_leading_keyword(statement, expected):
    assert leading_keyword(statement) == expected
