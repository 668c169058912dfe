"""
Driver capability selection and the connection wrapper for pep_db.

This file defines:
- DRIVERS: ordered table of driver tag -> driver class
- DBConnection: a wrapper around the one live driver of a model
- open_connection(): probe drivers in priority order and open the file

The probe runs once, when a connection is opened. Everything after that
talks to whichever driver was selected through DBConnection.driver.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Type

from .backend_base import DBDriver, DriverLike, ensure_driver
from .sqlalchemy_backend import SQLAlchemyDriver
from .sqlite_backend import SQLiteDriver
from ..config import DEFAULT_DRIVERS
from ..errors import (
    ConfigurationError,
    ConnectionClosedError,
    DriverMismatchError,
    UnconfiguredConnectionError,
)

logger = logging.getLogger(__name__)


DRIVERS: Dict[str, Type[DBDriver]] = {
    SQLAlchemyDriver.tag: SQLAlchemyDriver,
    SQLiteDriver.tag: SQLiteDriver,
}


class DBConnection:
    """
    Thin wrapper around the selected driver.

    Responsibilities:
        - Remember the driver tag chosen at construction
        - Refuse every operation when no driver could be opened
        - Refuse every operation after close()

    Notes:
        - The tag never changes once the connection is built
        - Safe to close() multiple times
    """

    def __init__(self, driver: Optional[DriverLike], error: Optional[str] = None):
        self._driver = ensure_driver(driver) if driver is not None else None
        self._tag = self._driver.tag if self._driver is not None else None
        self._closed = False
        self.error = error

    @property
    def tag(self) -> Optional[str]:
        """Driver tag, or None when unconfigured."""
        return self._tag

    @property
    def configured(self) -> bool:
        return self._tag is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def driver(self) -> DriverLike:
        """
        The live driver.

        Raises
        ------
        UnconfiguredConnectionError
            If no driver was opened.
        ConnectionClosedError
            If close() was already called.
        """
        if self._driver is None:
            raise UnconfiguredConnectionError(
                self.error or "no database connection is configured"
            )
        if self._closed:
            raise ConnectionClosedError(
                f"{self._tag} connection is closed"
            )
        return self._driver

    def close(self) -> None:
        """
        Close the underlying driver. Later calls are no-ops.
        """
        if self._closed:
            return
        self._closed = True
        if self._driver is not None:
            self._driver.close()
            logger.debug("Closed %s connection", self._tag)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<DBConnection tag={self._tag!r} {state}>"


# ----------------------------------------------------------------------
# Capability probe
# ----------------------------------------------------------------------

def open_connection(
    path: str,
    drivers: Iterable[str] = DEFAULT_DRIVERS,
) -> DBConnection:
    """
    Open *path* with the first available driver in *drivers*.

    Parameters
    ----------
    path:
        Database file path.
    drivers:
        Driver tags in priority order.

    Returns
    -------
    DBConnection
        Either bound to a driver, or unconfigured with an explanatory
        message when no driver is importable or the file cannot be
        opened. The failure is logged once here.

    Raises
    ------
    DriverMismatchError
        If a tag has no matching driver class.
    """
    tags = list(drivers)
    for tag in tags:
        driver_cls = DRIVERS.get(tag)
        if driver_cls is None:
            raise DriverMismatchError(
                f"unknown driver tag {tag!r}; expected one of {sorted(DRIVERS)}"
            )
        if not driver_cls.is_available():
            logger.debug("Driver %s is not available", tag)
            continue

        try:
            driver = driver_cls.open(path)
        except ConfigurationError as e:
            logger.error("Database configuration error: %s", e)
            return DBConnection(None, error=str(e))

        logger.info("Opened %s with %s driver", path, tag)
        return DBConnection(driver)

    message = f"none of the drivers {tags} is available"
    logger.error("Database configuration error: %s", message)
    return DBConnection(None, error=message)


__all__ = [
    "DRIVERS",
    "DBConnection",
    "open_connection",
]
