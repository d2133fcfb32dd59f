from .errors import LineFlushError, ShortWriteError, WriterClosedError
from .writer import DEFAULT_TERMINATOR, LineFlushWriter

__all__ = [
    "DEFAULT_TERMINATOR",
    "LineFlushError",
    "LineFlushWriter",
    "ShortWriteError",
    "WriterClosedError",
]
