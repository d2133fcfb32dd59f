from __future__ import annotations

import importlib
from types import ModuleType
from typing import Callable, Iterable

from line_flush.adapters.contracts import AdapterMeta, get_adapter_meta

_DEFAULT_ADAPTER_MODULES = (
    "line_flush.adapters.sinks",
    "line_flush.observability.adapters.logging",
)


class AdapterRegistryError(ValueError):
    # Raised when adapter lookup/build fails.
    pass


class AdapterRegistry:
    # Registry of adapter factories keyed by role + name.
    def __init__(self) -> None:
        self._factories: dict[tuple[str, str], Callable[[dict[str, object]], object]] = {}

    def register(self, role: str, name: str, factory: Callable[[dict[str, object]], object]) -> None:
        key = (role, name)
        if key in self._factories:
            if self._factories[key] is factory:
                # Same callable re-exported through another module is not a conflict.
                return
            raise AdapterRegistryError(f"Duplicate adapter registration: {role}/{name}")
        self._factories[key] = factory

    def register_modules(self, modules: Iterable[ModuleType]) -> None:
        # Register every factory declared via @adapter in the given modules.
        for module in modules:
            for value in module.__dict__.values():
                meta = get_adapter_meta(value)
                if not isinstance(meta, AdapterMeta):
                    continue
                if not callable(value):
                    raise AdapterRegistryError(f"Adapter '{meta.role}/{meta.name}' target is not callable")
                self.register(meta.role, meta.name, value)

    def build(self, role: str, kind: str, settings: dict[str, object] | None = None) -> object:
        if settings is None:
            settings = {}
        if not isinstance(settings, dict):
            raise AdapterRegistryError("Adapter settings must be a mapping")
        key = (role, kind)
        if key not in self._factories:
            raise AdapterRegistryError(f"Unknown adapter kind for role {role}: {kind}")
        return self._factories[key](settings)

    def kinds(self, role: str) -> list[str]:
        return sorted(name for (key_role, name) in self._factories if key_role == role)


def build_default_registry() -> AdapterRegistry:
    # Framework-owned sink and log adapters; imported lazily to keep module import order flat.
    registry = AdapterRegistry()
    registry.register_modules(importlib.import_module(name) for name in _DEFAULT_ADAPTER_MODULES)
    return registry
