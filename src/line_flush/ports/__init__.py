from .byte_sink import ByteSink
from .lock import ExclusiveLock
from .log_sink import LogSink

# Public port exports keep wiring explicit at composition time.
__all__ = [
    "ByteSink",
    "ExclusiveLock",
    "LogSink",
]
