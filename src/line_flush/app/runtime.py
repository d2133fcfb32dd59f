from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

from line_flush.adapters.registry import AdapterRegistry, build_default_registry
from line_flush.adapters.sinks import PrefixingSink
from line_flush.config.models import AppConfig, SourceConfig
from line_flush.kernel.writer import LineFlushWriter
from line_flush.observability.domain.logging import LogMessage
from line_flush.ports.byte_sink import ByteSink
from line_flush.ports.log_sink import LogSink


@dataclass(frozen=True, slots=True)
class SourceResult:
    path: str
    prefix: str
    bytes_read: int


@dataclass(frozen=True, slots=True)
class MergeReport:
    # Per-source byte counts in config order.
    sources: tuple[SourceResult, ...]

    @property
    def total_bytes(self) -> int:
        return sum(item.bytes_read for item in self.sources)


@dataclass
class _SourceJob:
    source: SourceConfig
    writer: LineFlushWriter
    bytes_read: int = 0
    error: BaseException | None = None


def run_merge(
    config: AppConfig,
    *,
    registry: AdapterRegistry | None = None,
    output: ByteSink | None = None,
    log_sink: LogSink | None = None,
) -> MergeReport:
    """Copy every source into one sink, one thread per source, without splitting lines.

    All writers share one lock, so each line reaches the sink whole. When
    ``output`` is given it stays owned by the caller and is not closed. The
    first source failure is re-raised after the output has been released; an
    output close failure is raised only when no source failed.
    """
    registry = registry or build_default_registry()
    owns_log_sink = log_sink is None and config.logging_enabled
    if owns_log_sink:
        assert config.logging is not None
        log_sink = registry.build("log", config.logging.kind, dict(config.logging.settings))  # type: ignore[assignment]
    try:
        return _merge(config, registry, output, log_sink)
    finally:
        if owns_log_sink:
            _close_log_sink(log_sink)


def _merge(
    config: AppConfig,
    registry: AdapterRegistry,
    output: ByteSink | None,
    log_sink: LogSink | None,
) -> MergeReport:
    owns_output = output is None
    if output is None:
        output = registry.build("sink", config.output.kind, dict(config.output.settings))  # type: ignore[assignment]
    assert output is not None

    lock = threading.Lock()
    jobs = [
        _SourceJob(
            source=source,
            writer=LineFlushWriter(
                PrefixingSink(inner=output, prefix=source.prefix.encode("utf-8")),
                lock,
                config.writer.ensure_trailing_newline,
                terminator=config.writer.terminator_bytes,
                log_sink=log_sink,
            ),
        )
        for source in config.sources
    ]
    close_error: Exception | None = None
    try:
        _run_jobs(jobs, config.writer.chunk_size, log_sink)
    finally:
        if owns_output:
            try:
                output.close()
            except Exception as exc:
                close_error = exc
                _emit(log_sink, "error", "merge.output_close_failed", error=repr(exc))

    report = MergeReport(
        sources=tuple(
            SourceResult(path=job.source.path, prefix=job.source.prefix, bytes_read=job.bytes_read)
            for job in jobs
        )
    )
    _emit(log_sink, "info", "merge.finished", sources=len(jobs), total_bytes=report.total_bytes)

    for job in jobs:
        if job.error is not None:
            raise job.error
    if close_error is not None:
        raise close_error
    return report


def _run_jobs(jobs: list[_SourceJob], chunk_size: int, log_sink: LogSink | None) -> None:
    threads = [
        threading.Thread(
            target=_pump,
            args=(job, chunk_size, log_sink),
            name=f"line-flush:{job.source.path}",
        )
        for job in jobs
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Writers are closed only after every producer is done with them.
    for job in jobs:
        try:
            job.writer.close()
        except Exception as exc:
            if job.error is None:
                job.error = exc


def _pump(job: _SourceJob, chunk_size: int, log_sink: LogSink | None) -> None:
    # Thread body: failures are recorded on the job and re-raised by run_merge.
    _emit(log_sink, "info", "merge.source_started", path=job.source.path)
    try:
        with Path(job.source.path).open("rb") as handle:
            while chunk := handle.read(chunk_size):
                job.bytes_read += job.writer.write(chunk)
    except Exception as exc:
        job.error = exc
        _emit(log_sink, "error", "merge.source_failed", path=job.source.path, error=repr(exc))
        return
    _emit(log_sink, "info", "merge.source_finished", path=job.source.path, bytes_read=job.bytes_read)


def _emit(log_sink: LogSink | None, level: str, message: str, **fields: object) -> None:
    if log_sink is not None:
        log_sink.emit(LogMessage(level=level, message=message, fields=fields))


def _close_log_sink(log_sink: LogSink | None) -> None:
    close = getattr(log_sink, "close", None)
    if callable(close):
        close()
