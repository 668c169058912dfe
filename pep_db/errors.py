"""
Exception hierarchy for pep_db.

Expected conditions (no matching rows, zero affected rows) are plain
results. The classes below cover the conditions that must not pass
silently.
"""

from __future__ import annotations


class PepDBError(Exception):
    """Base class for all pep_db errors."""


class ConfigurationError(PepDBError):
    """No usable driver, or the database file could not be opened."""


class UnconfiguredConnectionError(ConfigurationError):
    """An operation was attempted on a model without a live connection."""


class ConnectionClosedError(PepDBError):
    """An operation was attempted after the connection was closed."""


class DriverMismatchError(PepDBError):
    """A driver tag or driver object has no matching implementation."""


class MalformedInputError(PepDBError, ValueError):
    """Statement builders were given empty columns or empty data."""


class StatementError(PepDBError, RuntimeError):
    """
    The database rejected a statement.

    The native driver exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, statement: str):
        super().__init__(message)
        self.message = message
        self.statement = statement

    def __str__(self) -> str:
        return f"{self.message} | Query: {self.statement!r}"


class ModelNotFoundError(PepDBError, LookupError):
    """No model is registered under the requested name."""


__all__ = [
    "PepDBError",
    "ConfigurationError",
    "UnconfiguredConnectionError",
    "ConnectionClosedError",
    "DriverMismatchError",
    "MalformedInputError",
    "StatementError",
    "ModelNotFoundError",
]
