from .logging import (
    JsonlLogSink,
    MemoryLogSink,
    StreamLogSink,
    log_jsonl,
    log_memory,
    log_stderr,
    log_stdout,
)

__all__ = [
    "JsonlLogSink",
    "MemoryLogSink",
    "StreamLogSink",
    "log_jsonl",
    "log_memory",
    "log_stderr",
    "log_stdout",
]
