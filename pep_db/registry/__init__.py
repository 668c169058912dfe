"""
pep_db - Registry package.

This package provides the explicit model registry used to load models
by name:
    - ModelSpec: one registered entry (name, factory, table override)
    - ModelRegistry: name -> factory table
    - GLOBAL_MODEL_REGISTRY with register_model / load_model helpers

Applications register their Model subclasses at import time and look
them up by name instead of importing them dynamically.
"""

from .model_registry import (
    GLOBAL_MODEL_REGISTRY,
    ModelRegistry,
    ModelSpec,
    load_model,
    register_model,
)

__all__ = [
    "ModelSpec",
    "ModelRegistry",
    "GLOBAL_MODEL_REGISTRY",
    "register_model",
    "load_model",
]
