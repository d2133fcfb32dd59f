from __future__ import annotations

from types import TracebackType

from line_flush.kernel.errors import ShortWriteError, WriterClosedError
from line_flush.observability.domain.logging import LogMessage
from line_flush.ports.byte_sink import ByteSink
from line_flush.ports.lock import ExclusiveLock
from line_flush.ports.log_sink import LogSink

DEFAULT_TERMINATOR = b"\n"


class LineFlushWriter:
    """Forward only complete, terminator-ended lines to ``sink``.

    ``lock`` belongs to the caller and may be shared by several writers that
    feed one sink. Every buffer mutation and every forwarded write happens while
    it is held, so lines coming from different writers never interleave.

    Bytes after the last terminator stay buffered until a later ``write``
    completes the line or ``close`` flushes them. The buffer has no size limit.
    """

    def __init__(
        self,
        sink: ByteSink,
        lock: ExclusiveLock,
        ensure_trailing_newline: bool = False,
        *,
        terminator: bytes = DEFAULT_TERMINATOR,
        log_sink: LogSink | None = None,
    ) -> None:
        if not isinstance(terminator, (bytes, bytearray)) or not terminator:
            raise ValueError("terminator must be a non-empty bytes value")
        self._sink = sink
        self._lock = lock
        self._ensure_trailing_newline = ensure_trailing_newline
        self._terminator = bytes(terminator)
        self._log_sink = log_sink
        self._buffer = bytearray()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def terminator(self) -> bytes:
        return self._terminator

    @property
    def ensure_trailing_newline(self) -> bool:
        return self._ensure_trailing_newline

    @property
    def pending(self) -> bytes:
        # Snapshot of the unterminated residual.
        with self._lock:
            return bytes(self._buffer)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Buffer ``data`` and forward every line it completes; return bytes accepted."""
        if self._closed:
            raise WriterClosedError("write to closed LineFlushWriter")
        with self._lock:
            before = len(self._buffer)
            self._buffer += data
            accepted = len(self._buffer) - before

        # One lock hold per line lets writers sharing the lock take turns between lines.
        while self._forward_next_line():
            pass
        return accepted

    def close(self) -> None:
        """Flush the residual (terminated if requested), then close the sink.

        The sink is closed only when the flush succeeded. A second call is a no-op.
        """
        if self._closed:
            return
        self._closed = True

        with self._lock:
            if (
                self._ensure_trailing_newline
                and self._buffer
                and not self._buffer.endswith(self._terminator)
            ):
                self._buffer += self._terminator
            residual = bytes(self._buffer)
            self._buffer.clear()
            # Empty residual: nothing to forward, but the sink is still closed.
            if residual:
                self._forward(residual)

        try:
            self._sink.close()
        except Exception as exc:
            self._log("error", "line_flush.sink_close_failed", error=repr(exc))
            raise
        self._log("debug", "line_flush.closed", flushed_bytes=len(residual))

    def __enter__(self) -> LineFlushWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _forward_next_line(self) -> bool:
        with self._lock:
            index = self._buffer.find(self._terminator)
            if index < 0:
                return False
            end = index + len(self._terminator)
            line = bytes(self._buffer[:end])
            # Extracted before the sink write; on failure the rest of the buffer stays put.
            del self._buffer[:end]
            self._forward(line)
        return True

    def _forward(self, payload: bytes) -> None:
        # Caller holds the lock.
        try:
            written = self._sink.write(payload)
        except Exception as exc:
            self._log("error", "line_flush.sink_write_failed", error=repr(exc), bytes=len(payload))
            raise
        if written is not None and written < len(payload):
            self._log("error", "line_flush.sink_write_failed", error="short write", bytes=len(payload))
            raise ShortWriteError(expected=len(payload), written=written)

    def _log(self, level: str, message: str, **fields: object) -> None:
        if self._log_sink is None:
            return
        self._log_sink.emit(LogMessage(level=level, message=message, fields=fields))
