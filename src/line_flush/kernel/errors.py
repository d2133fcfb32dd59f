from __future__ import annotations


class LineFlushError(Exception):
    # Base class for failures raised by the forwarder itself (sink errors propagate unwrapped).
    pass


class WriterClosedError(LineFlushError, ValueError):
    # Raised on write() after close(); closed is terminal.
    pass


class ShortWriteError(LineFlushError, OSError):
    # Raised when a sink reports fewer bytes written than it was given.
    def __init__(self, expected: int, written: int) -> None:
        super().__init__(f"short write: sink accepted {written} of {expected} bytes")
        self.expected = expected
        self.written = written
