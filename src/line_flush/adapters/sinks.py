from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from line_flush.adapters.contracts import adapter
from line_flush.ports.byte_sink import ByteSink


@dataclass
class StreamByteSink:
    # Wraps an already-open binary stream (e.g. sys.stdout.buffer); the stream is owned by the caller.
    stream: BinaryIO
    close_stream: bool = False
    _closed: bool = field(default=False, init=False, repr=False)

    def write(self, data: bytes) -> int | None:
        written = self.stream.write(data)
        # Each forwarded line is visible downstream immediately.
        self.stream.flush()
        return written

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.stream.flush()
        if self.close_stream:
            self.stream.close()


@dataclass
class FileByteSink:
    # File sink writing raw bytes, optionally via temp file + atomic rename on close.
    path: Path
    append: bool = False
    atomic_replace: bool = False
    _handle: BinaryIO | None = field(default=None, init=False, repr=False)
    _temp_path: Path | None = field(default=None, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.append and self.atomic_replace:
            raise ValueError("FileByteSink cannot combine append with atomic_replace")

    def write(self, data: bytes) -> int | None:
        if self._closed:
            raise ValueError(f"write to closed FileByteSink: {self.path}")
        # Open lazily so construction itself does not touch filesystem.
        if self._handle is None:
            self._open()
        assert self._handle is not None
        written = self._handle.write(data)
        self._handle.flush()
        return written

    def close(self) -> None:
        # Close is idempotent to simplify shutdown paths.
        if self._closed:
            return
        self._closed = True
        if self._handle is None:
            if self.append:
                return
            # No writes: the target still has to end up empty rather than keep stale content.
            self._open()
        assert self._handle is not None
        self._handle.flush()
        self._handle.close()
        self._handle = None

        if self.atomic_replace and self._temp_path is not None:
            self._temp_path.replace(self.path)
            self._temp_path = None

    def _open(self) -> None:
        if self.atomic_replace:
            self._temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            self._handle = self._temp_path.open("wb")
        else:
            self._handle = self.path.open("ab" if self.append else "wb")


@dataclass
class PrefixingSink:
    # Tags every forwarded write with a fixed prefix; the inner sink is usually shared.
    inner: ByteSink
    prefix: bytes = b""
    close_inner: bool = False

    def write(self, data: bytes) -> int | None:
        if not data:
            return 0
        written = self.inner.write(self.prefix + data)
        if written is None:
            return len(data)
        # Report payload bytes only so short writes remain detectable upstream.
        return max(0, written - len(self.prefix))

    def close(self) -> None:
        if self.close_inner:
            self.inner.close()


@dataclass
class MemoryByteSink:
    # Records every write in arrival order.
    chunks: list[bytes] = field(default_factory=list)
    closed: bool = False

    def write(self, data: bytes) -> int | None:
        if self.closed:
            raise ValueError("write to closed MemoryByteSink")
        self.chunks.append(bytes(data))
        return len(data)

    def close(self) -> None:
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.chunks)


@adapter(name="stdout", role="sink")
def sink_stdout(settings: dict[str, object]) -> StreamByteSink:
    # Process stdout is never closed by the sink.
    _ = settings
    return StreamByteSink(stream=sys.stdout.buffer)


@adapter(name="stderr", role="sink")
def sink_stderr(settings: dict[str, object]) -> StreamByteSink:
    _ = settings
    return StreamByteSink(stream=sys.stderr.buffer)


@adapter(name="file", role="sink")
def sink_file(settings: dict[str, object]) -> FileByteSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("sink file settings.path must be a non-empty string")
    append = settings.get("append", False)
    atomic_replace = settings.get("atomic_replace", False)
    if not isinstance(append, bool) or not isinstance(atomic_replace, bool):
        raise ValueError("sink file settings.append/atomic_replace must be booleans")
    return FileByteSink(path=Path(path), append=append, atomic_replace=atomic_replace)


@adapter(name="memory", role="sink")
def sink_memory(settings: dict[str, object]) -> MemoryByteSink:
    _ = settings
    return MemoryByteSink()
