"""
pep_db

Top-level package initializer for the pep data-access layer.

Submodules include:
    - db/          (driver probing, driver implementations)
    - registry/    (model registry / loader)
    - statements   (SQL statement builders)
    - model        (Model base class)
    - config       (configuration loader)
    - errors       (exception hierarchy)

This root package re-exports the names applications normally need.
"""

from .config import PepDBConfig, load_config
from .errors import (
    ConfigurationError,
    ConnectionClosedError,
    DriverMismatchError,
    MalformedInputError,
    ModelNotFoundError,
    PepDBError,
    StatementError,
    UnconfiguredConnectionError,
)
from .model import Model
from .registry import GLOBAL_MODEL_REGISTRY, ModelRegistry, load_model, register_model

__all__ = [
    "PepDBConfig",
    "load_config",
    "Model",
    "ModelRegistry",
    "GLOBAL_MODEL_REGISTRY",
    "register_model",
    "load_model",
    "PepDBError",
    "ConfigurationError",
    "UnconfiguredConnectionError",
    "ConnectionClosedError",
    "DriverMismatchError",
    "MalformedInputError",
    "StatementError",
    "ModelNotFoundError",
]
