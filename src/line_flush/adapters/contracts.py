from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AdapterMeta:
    # Adapter-level contract used by registry lookup.
    name: str
    role: str


def adapter(*, name: str | None = None, role: str) -> Callable[[T], T]:
    # Decorator attaches the (role, name) lookup key to adapter factories.

    def _decorate(target: T) -> T:
        resolved_name = name
        if not isinstance(resolved_name, str) or not resolved_name:
            resolved_name = getattr(target, "__name__", "")
        setattr(target, "__adapter_meta__", AdapterMeta(name=resolved_name, role=role))
        return target

    return _decorate


def get_adapter_meta(target: object) -> AdapterMeta | None:
    # Read adapter contract metadata if present on callable/class target.
    meta = getattr(target, "__adapter_meta__", None)
    if isinstance(meta, AdapterMeta):
        return meta
    return None
