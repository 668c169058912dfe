"""
Standard-library sqlite3 driver for pep_db.

Used when SQLAlchemy is not installed (or when the probing order puts
"sqlite3" first).

Implements the DBDriver contract with the native SQLite primitives:
    - rows are pulled one at a time with ``fetchone()``
    - ``last_insert_rowid()`` / ``changes()`` are read from the connection
    - values are quoted by SQLite's own ``quote()`` function
"""

from __future__ import annotations
from typing import Any, Dict, List
try:
    import sqlite3
except ImportError:  # Python built without _sqlite3
    sqlite3 = None

from .backend_base import DBDriver
from ..errors import ConfigurationError, MalformedInputError


class SQLiteDriver(DBDriver):
    """
    Minimal sqlite3 driver.

    Parameters
    ----------
    conn : sqlite3.Connection
        Open connection in autocommit mode (``isolation_level=None``).
    """

    tag = "sqlite3"
    error_types = (sqlite3.Error, sqlite3.Warning) if sqlite3 is not None else ()

    def __init__(self, conn: Any):
        super().__init__()
        self._conn = conn

    # ------------------------------------------------------------------
    # Capability probing / construction
    # ------------------------------------------------------------------

    @classmethod
    def is_available(cls) -> bool:
        return sqlite3 is not None

    @classmethod
    def open(cls, path: str) -> "SQLiteDriver":
        """
        Open a sqlite3 connection that never implicitly opens transactions.
        """
        try:
            conn = sqlite3.connect(str(path), isolation_level=None)
        except sqlite3.Error as e:
            raise ConfigurationError(
                f"sqlite3 could not open database {str(path)!r}: {e}"
            ) from e
        return cls(conn)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, statement: str, params: Any) -> "sqlite3.Cursor":
        if params is None:
            return self._conn.execute(statement)
        return self._conn.execute(statement, params)

    def _fetch_rows(self, handle: "sqlite3.Cursor") -> List[Dict[str, Any]]:
        if handle.description is None:
            return []
        names = [d[0] for d in handle.description]

        rows: List[Dict[str, Any]] = []
        row = handle.fetchone()
        while row is not None:
            rows.append(dict(zip(names, row)))
            row = handle.fetchone()
        return rows

    def last_insert_id(self) -> int:
        return self._conn.execute("SELECT last_insert_rowid()").fetchone()[0]

    def rows_affected(self) -> int:
        return self._conn.execute("SELECT changes()").fetchone()[0]

    def escape(self, value: Any) -> str:
        """
        Quote *value* with SQLite's ``quote()``: text is wrapped in single
        quotes with embedded quotes doubled, numbers are left bare.
        """
        try:
            return self._conn.execute("SELECT quote(?)", (value,)).fetchone()[0]
        except (sqlite3.Error, OverflowError) as e:
            raise MalformedInputError(
                f"cannot render {type(value).__name__} value as SQL literal: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        # sqlite3 tolerates closing an already closed connection.
        self._conn.close()
