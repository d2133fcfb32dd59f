from __future__ import annotations

import json
import sys
import threading
from pathlib import Path
from typing import TextIO

from line_flush.adapters.contracts import adapter
from line_flush.observability.domain.logging import LogMessage


class StreamLogSink:
    # One compact JSON record per write call; emits from merge threads are serialized.
    def __init__(self, stream: TextIO | None = None, *, use_stdout: bool = False) -> None:
        self._stream = stream
        self._use_stdout = use_stdout
        self._lock = threading.Lock()

    def emit(self, message: LogMessage) -> None:
        record = _encode(message)
        stream = self._resolve_stream()
        with self._lock:
            stream.write(record)
            stream.flush()

    def _resolve_stream(self) -> TextIO:
        # Process streams are looked up per emit so redirection after construction is honored.
        if self._stream is not None:
            return self._stream
        return sys.stdout if self._use_stdout else sys.stderr


class JsonlLogSink:
    # Append-only JSONL file; the handle is opened eagerly so bad paths fail at build time.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    def emit(self, message: LogMessage) -> None:
        record = _encode(message)
        with self._lock:
            if self._file.closed:
                raise ValueError(f"emit to closed JsonlLogSink: {self._path}")
            self._file.write(record)
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            self._file.close()


class MemoryLogSink:
    # Collects messages in emit order; used when embedding and in tests.
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)

    def events(self) -> list[str]:
        return [message.message for message in self.messages]


@adapter(name="stderr", role="log")
def log_stderr(settings: dict[str, object]) -> StreamLogSink:
    _ = settings
    return StreamLogSink()


@adapter(name="stdout", role="log")
def log_stdout(settings: dict[str, object]) -> StreamLogSink:
    # Shares the process stdout; config validation keeps it away from a stdout output.
    _ = settings
    return StreamLogSink(use_stdout=True)


@adapter(name="jsonl", role="log")
def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log jsonl settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


@adapter(name="memory", role="log")
def log_memory(settings: dict[str, object]) -> MemoryLogSink:
    _ = settings
    return MemoryLogSink()


def _encode(message: LogMessage) -> str:
    # Record and newline are built together so a single write carries the whole line.
    timestamp = message.timestamp.isoformat().replace("+00:00", "Z")
    payload = {
        "level": message.level,
        "message": message.message,
        "timestamp": timestamp,
        "fields": message.fields,
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=repr) + "\n"
