"""
SQL statement builders.

Pure functions turning structured CRUD input into statement text. They
hold no state: the target table and the escaping function are passed in
by the caller (normally a Model, which supplies its own table and its
driver's escaper).

Filters ("where") are either a pre-formed condition string used verbatim
or a mapping of column -> value joined with AND in insertion order:

    {"status": "active", "flag": ""}  ->  status = 'active' AND flag
    {"deleted_at": None}              ->  deleted_at IS NULL

An empty-string value renders the column alone, for expressions that
need no comparison.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .errors import MalformedInputError


Escaper = Callable[[Any], str]
Columns = Union[str, Sequence[str]]
Where = Union[str, Mapping[str, Any], None]

_KEYWORD = re.compile(r"\s*([A-Za-z]+)")


# ----------------------------------------------------------------------
# Fragments
# ----------------------------------------------------------------------

def render_value(value: Any, escape: Escaper) -> str:
    """
    Render a data value: None is the NULL keyword, anything else is
    passed through *escape*.
    """
    if value is None:
        return "NULL"
    return escape(value)


def render_where(where: Where, escape: Escaper) -> str:
    """
    Render a filter specification as the body of a WHERE clause.
    """
    if not isinstance(where, Mapping):
        return str(where)

    parts = []
    for key, val in where.items():
        if isinstance(val, str) and val == "":
            parts.append(f"{key}")
        elif val is None:
            parts.append(f"{key} IS NULL")
        else:
            parts.append(f"{key} = {escape(val)}")
    return " AND ".join(parts)


def leading_keyword(statement: str) -> str:
    """
    Return the upper-cased first word of *statement*, or "" if it has none.

        >>> leading_keyword("  select * from t")
        'SELECT'
    """
    m = _KEYWORD.match(statement)
    return m.group(1).upper() if m else ""


def _where_clause(where: Where, escape: Escaper) -> str:
    if not where:
        return ""
    return " WHERE " + render_where(where, escape)


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------

def build_select(
    columns: Columns,
    where: Where = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    table: str,
    escape: Escaper,
) -> str:
    """
    Build a SELECT statement.

    Parameters
    ----------
    columns:
        One column expression or a sequence of them, e.g.
        ``["id", "name"]`` or ``"count(*)"``.
    where:
        Optional filter (string or mapping).
    limit, offset:
        Optional row window. An offset is only rendered together with
        a limit; on its own it is ignored. Rendered as
        ``LIMIT <limit> OFFSET <offset>`` (at most *limit* rows, skipping
        *offset*), not SQLite's ``LIMIT <offset>, <limit>`` shorthand.

    Raises
    ------
    MalformedInputError
        If no columns are given.
    """
    if isinstance(columns, str):
        columns = [columns] if columns else []
    if not columns:
        raise MalformedInputError("select requires at least one column")

    query = "SELECT " + ", ".join(columns)
    query += " FROM " + table
    query += _where_clause(where, escape)
    if limit is not None:
        query += f" LIMIT {int(limit)}"
        if offset is not None:
            query += f" OFFSET {int(offset)}"
    return query


def build_insert(data: Mapping[str, Any], *, table: str, escape: Escaper) -> str:
    """
    Build an INSERT statement from a column -> value mapping.

    Raises
    ------
    MalformedInputError
        If *data* is empty.
    """
    if not data:
        raise MalformedInputError("insert requires at least one column value")

    fields = ", ".join(data.keys())
    values = ", ".join(render_value(v, escape) for v in data.values())
    return f"INSERT INTO {table} ({fields}) VALUES ({values})"


def build_update(
    data: Union[str, Mapping[str, Any]],
    where: Where = None,
    *,
    table: str,
    escape: Escaper,
) -> str:
    """
    Build an UPDATE statement.

    *data* is either a raw assignment string (``"qty = qty + 1"``) or a
    column -> value mapping. Without *where* every row is updated.

    Raises
    ------
    MalformedInputError
        If *data* is empty.
    """
    if not data:
        raise MalformedInputError("update requires at least one assignment")

    if isinstance(data, Mapping):
        sets = ", ".join(
            f"{key} = {render_value(val, escape)}" for key, val in data.items()
        )
    else:
        sets = str(data)

    return f"UPDATE {table} SET {sets}" + _where_clause(where, escape)


def build_delete(where: Where = None, *, table: str, escape: Escaper) -> str:
    """
    Build a DELETE statement. An empty *where* deletes every row.
    """
    return f"DELETE FROM {table}" + _where_clause(where, escape)


__all__ = [
    "Escaper",
    "render_value",
    "render_where",
    "leading_keyword",
    "build_select",
    "build_insert",
    "build_update",
    "build_delete",
]
