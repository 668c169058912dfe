from __future__ import annotations

"""
Model base class for pep_db.

Every table-backed entity subclasses Model:

    class Widgets(Model):
        allow = ("admin", "editor")
        description = "Parts in stock"

    widgets = Widgets()
    new_id = widgets.insert({"name": "bolt", "qty": 5})
    widgets.update({"qty": 10}, {"id": new_id})
    widgets.select(["qty"], {"id": new_id})   # -> [{"qty": 10}]

A Model owns exactly one DBConnection, opened in the constructor with
whichever driver the capability probe selects. Results come back
normalized by smart_query():

    SELECT           -> list of dict rows
    INSERT           -> last inserted rowid
    UPDATE / DELETE  -> number of rows changed
    anything else    -> the driver-native result handle

A rejected statement returns False; get_error() then describes it.

A Model instance is not thread-safe. Use one instance per thread.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import PepDBConfig, load_config
from .db import DBConnection, open_connection
from .errors import MalformedInputError, StatementError
from .statements import (
    Columns,
    Where,
    build_delete,
    build_insert,
    build_select,
    build_update,
    leading_keyword,
)

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]


class Model:
    """
    Base class for all models.

    Class attributes
    ----------------
    table:
        Backing table. Defaults to the lower-cased class name.
    menu:
        Human label. Defaults to the capitalized class name.
    allow:
        Roles permitted to manage this model.
    fields:
        Optional list of columns exposed for editing.
    creatable, updateable, deletable:
        Advisory flags for the application layer. They are not
        enforced by the data-access methods.
    description:
        Free text shown next to the menu label.
    """

    table: str = "model"
    menu: str = "Model"
    allow: Tuple[str, ...] = ("admin",)
    fields: Optional[List[str]] = None
    creatable: bool = True
    updateable: bool = True
    deletable: bool = True
    description: str = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Names follow the concrete class unless it sets its own.
        if "table" not in cls.__dict__:
            cls.table = cls.__name__.lower()
        if "menu" not in cls.__dict__:
            cls.menu = cls.__name__.capitalize()

    def __init__(
        self,
        config: Optional[PepDBConfig] = None,
        *,
        connection: Optional[DBConnection] = None,
    ):
        cfg = config or load_config()
        if cfg.enable_logging:
            logging.basicConfig(level=logging.INFO)

        self.config = cfg
        self.table = type(self).table
        self._connection = (
            connection
            if connection is not None
            else open_connection(cfg.db_path, cfg.drivers)
        )

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def connection_type(self) -> Optional[str]:
        """
        Return the driver tag: "sqlalchemy", "sqlite3", or None when no
        connection could be opened.
        """
        return self._connection.tag

    def close(self) -> None:
        """Close the connection. Calling it again does nothing."""
        self._connection.close()

    def __enter__(self) -> "Model":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        conn = getattr(self, "_connection", None)
        if conn is None or conn.closed:
            return
        try:
            conn.close()
        except Exception:
            logger.exception("Error closing DB connection of %s", type(self).__name__)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} table={self.table!r} {self._connection!r}>"

    # ------------------------------------------------------------------
    # Table helpers
    # ------------------------------------------------------------------

    def from_table(self, table: str) -> None:
        """Select the table used by later calls that omit ``table``."""
        self.table = table

    def num_rows(self, where: Where = None, table: Optional[str] = None) -> Union[int, bool]:
        """
        Return the number of rows in a table, optionally filtered.
        False if the count query failed.
        """
        rows = self.select("count(*)", where, table=table)
        if rows is False:
            return False
        return next(iter(rows[0].values()))

    def last_id(self) -> int:
        """Return the rowid of the last INSERT made on this connection."""
        return self._connection.driver.last_insert_id()

    def bottom_row(self, id_name: str, table: Optional[str] = None) -> Any:
        """
        Return ``id_name`` of the physically last row of a table, without
        relying on a previous INSERT. None for an empty table, False if
        the query failed.
        """
        query = "SELECT %s FROM %s ORDER BY ROWID DESC LIMIT 1" % (id_name, table or self.table)
        rows = self.smart_query(query)
        if rows is False:
            return False
        if not rows:
            return None
        return rows[0][id_name]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def select(
        self,
        columns: Columns,
        where: Where = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        table: Optional[str] = None,
    ) -> Union[Rows, bool]:
        """
        Select rows.

        Parameters
        ----------
        columns:
            A column expression or a sequence of them.
        where:
            The where clause as a string or a mapping.
        limit, offset:
            Optional row window (offset needs limit).
        table:
            Table to query instead of ``self.table``.
        """
        escape = self._connection.driver.escape
        try:
            query = build_select(
                columns, where, limit, offset,
                table=table or self.table, escape=escape,
            )
        except MalformedInputError as e:
            logger.warning("Refusing to build SELECT: %s", e)
            return False
        return self.smart_query(query)

    def insert(self, data: Dict[str, Any], table: Optional[str] = None) -> Union[int, bool]:
        """
        Insert one row from a column -> value mapping and return its rowid.
        """
        escape = self._connection.driver.escape
        try:
            query = build_insert(data, table=table or self.table, escape=escape)
        except MalformedInputError as e:
            logger.warning("Refusing to build INSERT: %s", e)
            return False
        return self.smart_query(query)

    def update(
        self,
        data: Union[str, Dict[str, Any]],
        where: Where = None,
        table: Optional[str] = None,
    ) -> Union[int, bool]:
        """
        Update rows and return how many changed. Without ``where`` every
        row of the table is updated.
        """
        escape = self._connection.driver.escape
        try:
            query = build_update(data, where, table=table or self.table, escape=escape)
        except MalformedInputError as e:
            logger.warning("Refusing to build UPDATE: %s", e)
            return False
        return self.smart_query(query)

    def delete(self, where: Where = None, table: Optional[str] = None) -> Union[int, bool]:
        """
        Delete rows and return how many were removed. An empty ``where``
        deletes every row of the table.
        """
        escape = self._connection.driver.escape
        try:
            query = build_delete(where, table=table or self.table, escape=escape)
        except MalformedInputError as e:
            logger.warning("Refusing to build DELETE: %s", e)
            return False
        return self.smart_query(query)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def smart_query(self, statement: str, params: Any = None) -> Any:
        """
        Run a statement and return a value depending on its type.

        A SELECT returns the rows as a list of dicts, an INSERT returns
        the last inserted id, and UPDATE / DELETE return the number of
        rows affected. Other statements go through query() and return
        the driver-native result. False means the statement failed.

        ``params`` is passed to the driver's own parameter binding.
        """
        driver = self._connection.driver
        keyword = leading_keyword(statement)

        if keyword == "SELECT":
            handle = self._execute(statement, params)
            if handle is None:
                return False
            try:
                return driver.fetch_rows(handle, statement)
            except StatementError as e:
                logger.warning("Statement failed: %s", e)
                return False

        if keyword == "INSERT":
            if self._execute(statement, params) is None:
                return False
            return driver.last_insert_id()

        if keyword in ("UPDATE", "DELETE"):
            if self._execute(statement, params) is None:
                return False
            return driver.rows_affected()

        return self.query(statement, params)

    def query(self, statement: str, params: Any = None) -> Any:
        """
        Run a statement and return the driver-native result
        (``sqlalchemy.CursorResult`` or ``sqlite3.Cursor``), or False.
        """
        handle = self._execute(statement, params)
        return handle if handle is not None else False

    def exec(self, statement: str) -> None:
        """Execute a statement with no return value."""
        self._execute(statement, None)

    def _execute(self, statement: str, params: Any) -> Any:
        driver = self._connection.driver
        logger.debug("[%s] %s", driver.tag, statement)
        try:
            return driver.execute(statement, params)
        except StatementError as e:
            logger.warning("Statement failed: %s", e)
            return None

    # ------------------------------------------------------------------
    # Escaping / errors
    # ------------------------------------------------------------------

    def escape(self, value: Any) -> str:
        """Escape a value to be injected into a query."""
        return self._connection.driver.escape(value)

    def get_error(self) -> Optional[str]:
        """
        Text describing the most recent failed statement, or None if the
        last statement succeeded. On an unconfigured model this is the
        configuration error.
        """
        if not self._connection.configured:
            return self._connection.error
        return self._connection.driver.last_error
