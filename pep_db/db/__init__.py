"""
pep_db.db

Driver abstraction layer for pep_db.

This package provides:

- The connection wrapper and capability probe:
      * DBConnection
      * open_connection
      * DRIVERS

- Concrete client drivers, probed in this order:
      * SQLAlchemyDriver  (SQLAlchemy Core)
      * SQLiteDriver      (standard-library sqlite3)

- Driver contracts:
      * DBDriver
      * DriverLike
      * ensure_driver
"""

from .connection import DBConnection, DRIVERS, open_connection
from .sqlalchemy_backend import SQLAlchemyDriver
from .sqlite_backend import SQLiteDriver
from .backend_base import DBDriver, DriverLike, ensure_driver

__all__ = [
    # Connection
    "DBConnection",
    "DRIVERS",
    "open_connection",

    # Drivers
    "SQLAlchemyDriver",
    "SQLiteDriver",
    "DBDriver",
    "DriverLike",
    "ensure_driver",
]
