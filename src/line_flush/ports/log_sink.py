from __future__ import annotations

from typing import Protocol, runtime_checkable

from line_flush.observability.domain.logging import LogMessage


# LogSink consumes structured diagnostics emitted by writers and the merge runtime.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Consume one LogMessage."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
