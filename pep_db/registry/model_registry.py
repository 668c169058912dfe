# pep_db/registry/model_registry.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..config import PepDBConfig
from ..errors import ModelNotFoundError


@dataclass(frozen=True)
class ModelSpec:
    name: str
    factory: Callable[..., Any]
    table: Optional[str] = None


class ModelRegistry:
    """
    Explicit name -> factory table used to load models by name.

    Names are case-insensitive. A table given at registration overrides
    the model's own default table on every loaded instance.
    """

    def __init__(self) -> None:
        self._models: Dict[str, ModelSpec] = {}

    # ---------------- Registration ----------------

    def register(
        self,
        factory: Callable[..., Any],
        name: Optional[str] = None,
        table: Optional[str] = None,
    ) -> ModelSpec:
        if name is None:
            name = getattr(factory, "__name__", None)
            if not name:
                raise ValueError(f"Cannot derive a model name from {factory!r}")

        key = name.lower()
        if key in self._models:
            raise ValueError(f"Duplicate model name: {key}")

        spec = ModelSpec(name=key, factory=factory, table=table)
        self._models[key] = spec
        return spec

    def model(self, name: Optional[str] = None, table: Optional[str] = None) -> Callable:
        def wrapper(cls: Callable) -> Callable:
            self.register(cls, name=name, table=table)
            return cls
        return wrapper

    # ---------------- Accessors -------------------

    def get(self, name: str) -> ModelSpec:
        try:
            return self._models[name.lower()]
        except KeyError:
            raise ModelNotFoundError(f"The model {name} is not registered.") from None

    def load(self, name: str, config: Optional[PepDBConfig] = None) -> Any:
        spec = self.get(name)
        instance = spec.factory(config) if config is not None else spec.factory()
        if spec.table:
            instance.from_table(spec.table)
        return instance

    def names(self) -> List[str]:
        return sorted(self._models)

    def clear(self) -> None:
        self._models.clear()

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._models


GLOBAL_MODEL_REGISTRY = ModelRegistry()


def register_model(name: Optional[str] = None, table: Optional[str] = None) -> Callable:
    """Class decorator registering a model in GLOBAL_MODEL_REGISTRY."""
    return GLOBAL_MODEL_REGISTRY.model(name=name, table=table)


def load_model(name: str, config: Optional[PepDBConfig] = None) -> Any:
    """Instantiate the model registered under *name* in GLOBAL_MODEL_REGISTRY."""
    return GLOBAL_MODEL_REGISTRY.load(name, config)
