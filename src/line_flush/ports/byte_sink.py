from __future__ import annotations

from typing import Protocol, runtime_checkable


# ByteSink port is the downstream destination that receives whole lines only.
@runtime_checkable
class ByteSink(Protocol):
    def write(self, data: bytes) -> int | None:
        """Accept bytes; return the count written (None means all of it)."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Finalize and release resources held by the sink."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")
