"""
Global configuration settings for pep_db.

This module centralizes configuration for:

    - the database file path
    - driver probing order
    - feature flags (logging)

It provides:
    PepDBConfig   – structured config object
    load_config() – load from environment variables or defaults
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Tuple


DEFAULT_DRIVERS: Tuple[str, ...] = ("sqlalchemy", "sqlite3")


@dataclass
class PepDBConfig:
    """
    Canonical configuration for the pep_db subsystem.

    Attributes
    ----------
    db_path:
        Path to the SQLite database file shared by every model
        (e.g. "./pep.db").

    drivers:
        Driver tags in the order they are probed. The first driver
        whose client API is importable opens the database.

    enable_logging:
        Whether to enable internal logging at INFO level.
    """

    db_path: str = "pep.db"
    drivers: Tuple[str, ...] = DEFAULT_DRIVERS

    enable_logging: bool = False


def load_config() -> PepDBConfig:
    """
    Load PepDBConfig from environment variables, falling back to defaults.

    Recognized variables:
        PEP_DB_PATH          (path to the database file)
        PEP_DB_DRIVERS       (comma separated, e.g. "sqlite3,sqlalchemy")
        PEP_ENABLE_LOGGING   ("true" / "false" / "1" / "0")

    Returns
    -------
    PepDBConfig
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
        val = os.getenv(name)
        if val is None:
            return default
        items = tuple(x.strip().lower() for x in val.split(",") if x.strip())
        return items or default

    return PepDBConfig(
        db_path=os.getenv("PEP_DB_PATH", "pep.db"),
        drivers=_env_list("PEP_DB_DRIVERS", DEFAULT_DRIVERS),

        enable_logging=_env_flag(
            "PEP_ENABLE_LOGGING",
            default=False
        ),
    )
