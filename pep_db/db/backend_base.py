"""
Driver base interfaces for pep_db.

This module defines the minimal contract that both client drivers
(SQLAlchemy Core and the standard-library sqlite3 module) must satisfy.

It is intentionally light-weight:

- It does NOT import any specific DB driver.
- It only encodes the structural requirements assumed by:
      * pep_db.db.connection.DBConnection
      * pep_db.model.Model

Drivers must expose:

    Driver.is_available()      -> bool  (capability probe)
    Driver.open(path)          -> driver instance
    driver.tag                 -> identifying tag
    driver.execute(sql, params)
    driver.fetch_rows(handle)  -> list of dict rows
    driver.last_insert_id()    -> int
    driver.rows_affected()     -> int
    driver.escape(value)       -> SQL literal text
    driver.close()

This file provides:
- DBDriver: abstract base class
- DriverLike: structural protocol
- ensure_driver: runtime validator
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from ..errors import DriverMismatchError, StatementError


# ---------------------------------------------------------------------------
# Abstract Base Driver
# ---------------------------------------------------------------------------

class DBDriver(ABC):
    """
    Abstract base class for a pep_db client driver.

    Subclasses wrap one live connection to the database file and
    translate the generic operations below into their own API.

    ``execute()`` is implemented here once: it delegates to
    ``_execute()``, records the message of a failed statement in
    ``last_error`` and re-raises it as StatementError. A successful
    statement clears ``last_error``.
    """

    #: Identifying tag, e.g. "sqlalchemy" or "sqlite3".
    tag: str = ""

    #: Native exception classes signalling a rejected statement.
    error_types: Tuple[type, ...] = ()

    def __init__(self) -> None:
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Capability probing / construction
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """
        Return True if this driver's client API imported successfully.
        """
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def open(cls, path: str) -> "DBDriver":
        """
        Open the database file at *path*.

        Raises
        ------
        ConfigurationError
            If the file cannot be opened.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, statement: str, params: Any = None) -> Any:
        """
        Execute a single statement and return the driver-native handle.

        Raises
        ------
        StatementError
            Wrapped native error; the message is kept in ``last_error``.
        """
        try:
            handle = self._execute(statement, params)
        except self.error_types as e:
            self.last_error = self._error_message(e)
            raise StatementError(self.last_error, statement) from e
        self.last_error = None
        return handle

    @abstractmethod
    def _execute(self, statement: str, params: Any) -> Any:
        raise NotImplementedError

    def fetch_rows(self, handle: Any, statement: str = "") -> List[Dict[str, Any]]:
        """
        Materialize every row of a SELECT handle as a column -> value dict.

        SQLite may still reject a statement while stepping through its
        rows (e.g. integer overflow in ``abs()``), so reading is guarded
        the same way as ``execute()``.

        Raises
        ------
        StatementError
            Wrapped native error; the message is kept in ``last_error``.
        """
        try:
            return self._fetch_rows(handle)
        except self.error_types as e:
            self.last_error = self._error_message(e)
            raise StatementError(self.last_error, statement) from e

    @abstractmethod
    def _fetch_rows(self, handle: Any) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def last_insert_id(self) -> int:
        """Rowid of the most recent successful INSERT on this connection."""
        raise NotImplementedError

    @abstractmethod
    def rows_affected(self) -> int:
        """Rows changed by the most recent UPDATE/DELETE on this connection."""
        raise NotImplementedError

    @abstractmethod
    def escape(self, value: Any) -> str:
        """Render *value* as an SQL literal using the driver's quoting."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Must be safe to call twice."""
        raise NotImplementedError

    def _error_message(self, exc: BaseException) -> str:
        return str(exc)


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class DriverLike(Protocol):
    """
    Structural protocol for objects usable as a pep_db driver.

    This lets DBConnection accept test doubles or third-party drivers
    without requiring them to subclass DBDriver.
    """

    tag: str
    last_error: Optional[str]

    def execute(self, statement: str, params: Any = None) -> Any:
        ...

    def fetch_rows(self, handle: Any, statement: str = "") -> List[Dict[str, Any]]:
        ...

    def last_insert_id(self) -> int:
        ...

    def rows_affected(self) -> int:
        ...

    def escape(self, value: Any) -> str:
        ...

    def close(self) -> None:
        ...


# ---------------------------------------------------------------------------
# Runtime Guard
# ---------------------------------------------------------------------------

_REQUIRED = (
    "tag",
    "execute",
    "fetch_rows",
    "last_insert_id",
    "rows_affected",
    "escape",
    "close",
)


def ensure_driver(driver: Any) -> DriverLike:
    """
    Validate that an object behaves like a pep_db driver.

    First, try an isinstance check against DriverLike.
    If that fails, fall back to manual attribute inspection so the
    error names what is missing.

    Raises:
        DriverMismatchError if required attributes are missing.
    """
    if not isinstance(driver, DriverLike):
        missing = [name for name in _REQUIRED if not hasattr(driver, name)]
        if not hasattr(driver, "last_error"):
            missing.append("last_error")

        if missing:
            raise DriverMismatchError(
                f"Invalid pep_db driver {driver!r}: missing attributes {missing}"
            )

    return driver  # type: ignore[return-value]


__all__ = [
    "DBDriver",
    "DriverLike",
    "ensure_driver",
]
