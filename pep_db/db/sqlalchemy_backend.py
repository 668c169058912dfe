"""
SQLAlchemy Core driver for pep_db.

This is the preferred driver: it is probed before the plain sqlite3
module. It talks to the same SQLite file through a single engine
connection in AUTOCOMMIT mode.

It provides:
    - native mapping extraction for SELECT results
    - ``last_insert_rowid()`` read from the connection
    - rowcount of the last statement for UPDATE/DELETE
    - literal rendering through the SQLite dialect's type processors

This file intentionally keeps the connection semantics simple: one
connection for the driver's whole life, no pooling, no transactions.
"""

from __future__ import annotations
from typing import Any, Dict, List
try:
    import sqlalchemy  # type: ignore
    from sqlalchemy import exc as sa_exc  # type: ignore
except ImportError:
    sqlalchemy = None
    sa_exc = None


from .backend_base import DBDriver
from ..errors import ConfigurationError, MalformedInputError


class SQLAlchemyDriver(DBDriver):
    """
    Minimal SQLAlchemy Core driver.

    Parameters
    ----------
    engine : sqlalchemy.engine.Engine
        Engine bound to the SQLite file.
    conn : sqlalchemy.engine.Connection
        The one connection used for every statement.
    """

    tag = "sqlalchemy"
    error_types = (sa_exc.SQLAlchemyError,) if sa_exc is not None else ()

    def __init__(self, engine: Any, conn: Any):
        super().__init__()
        self._engine = engine
        self._conn = conn
        self._rowcount = -1

    # ------------------------------------------------------------------
    # Capability probing / construction
    # ------------------------------------------------------------------

    @classmethod
    def is_available(cls) -> bool:
        return sqlalchemy is not None

    @classmethod
    def open(cls, path: str) -> "SQLAlchemyDriver":
        """
        Create an engine for *path* and check out its single connection.

        ``create_engine`` is lazy, so failures to open the file surface
        on ``connect()``.
        """
        url = sqlalchemy.engine.URL.create("sqlite", database=str(path))
        engine = sqlalchemy.create_engine(url, isolation_level="AUTOCOMMIT")
        try:
            conn = engine.connect()
        except sa_exc.SQLAlchemyError as e:
            engine.dispose()
            raise ConfigurationError(
                f"sqlalchemy could not open database {str(path)!r}: {e}"
            ) from e
        return cls(engine, conn)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, statement: str, params: Any) -> Any:
        # exec_driver_sql hands the text to the DBAPI untouched, so colons
        # inside escaped literals are never read as bind parameters.
        try:
            result = self._conn.exec_driver_sql(statement, params)
        except sa_exc.SQLAlchemyError:
            self._conn.rollback()
            raise
        self._rowcount = result.rowcount
        return result

    def _fetch_rows(self, handle: Any) -> List[Dict[str, Any]]:
        if not handle.returns_rows:
            return []
        try:
            return [dict(row) for row in handle.mappings().all()]
        except sa_exc.SQLAlchemyError:
            self._conn.rollback()
            raise

    def last_insert_id(self) -> int:
        return self._conn.exec_driver_sql("SELECT last_insert_rowid()").scalar()

    def rows_affected(self) -> int:
        return self._rowcount

    def escape(self, value: Any) -> str:
        """
        Render *value* through the dialect's literal processors, e.g.
        ``"it's"`` -> ``'it''s'`` and ``5`` -> ``5``.
        """
        try:
            compiled = sqlalchemy.literal(value).compile(
                dialect=self._engine.dialect,
                compile_kwargs={"literal_binds": True},
            )
        except sa_exc.CompileError as e:
            raise MalformedInputError(
                f"cannot render {type(value).__name__} value as SQL literal: {e}"
            ) from e
        return str(compiled)

    def _error_message(self, exc: BaseException) -> str:
        # DBAPIError wraps the sqlite3 exception; report the database's text.
        orig = getattr(exc, "orig", None)
        return str(orig) if orig is not None else str(exc)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._conn.close()
        self._engine.dispose()
