from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


# ExclusiveLock is supplied by the caller; threading.Lock and threading.RLock satisfy it.
@runtime_checkable
class ExclusiveLock(Protocol):
    def acquire(self, *args: Any, **kwargs: Any) -> bool: ...

    def release(self) -> None: ...

    def __enter__(self) -> Any: ...

    def __exit__(self, *exc: object) -> Any: ...
