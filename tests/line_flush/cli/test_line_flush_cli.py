from __future__ import annotations

from pathlib import Path

import pytest

from line_flush.app.cli import build_config, parse_args, run
from line_flush.main import main


def test_parse_args_reads_flags() -> None:
    args = parse_args(
        ["a.log", "b.log", "--output", "out.log", "--prefix-sources", "--ensure-newline", "--terminator", ";"]
    )
    assert args.sources == ["a.log", "b.log"]
    assert args.output == "out.log"
    assert args.prefix_sources is True
    assert args.ensure_newline is True
    assert args.terminator == ";"
    assert args.config is None


def test_build_config_from_flags_only() -> None:
    cfg = build_config(parse_args(["dir/a.log", "--prefix-sources", "--output", "out.log"]))
    assert cfg.sources[0].path == "dir/a.log"
    assert cfg.sources[0].prefix == "[a.log] "
    assert cfg.output.kind == "file"
    assert cfg.output.settings == {"path": "out.log"}
    assert cfg.writer.ensure_trailing_newline is False


def test_cli_flags_override_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yml"
    config_path.write_text(
        "\n".join(
            [
                "version: 1",
                "writer:",
                "  ensure_trailing_newline: false",
                "sources:",
                "  - path: base.log",
                "    prefix: 'base: '",
            ]
        ),
        encoding="utf-8",
    )
    cfg = build_config(parse_args(["--config", str(config_path), "extra.log", "--ensure-newline"]))
    assert [source.path for source in cfg.sources] == ["base.log", "extra.log"]
    assert cfg.sources[0].prefix == "base: "
    assert cfg.writer.ensure_trailing_newline is True
    assert cfg.output.kind == "stdout"


def test_cli_run_merges_sources_into_output(tmp_path: Path) -> None:
    a = tmp_path / "a.log"
    b = tmp_path / "b.log"
    a.write_bytes(b"alpha\n")
    b.write_bytes(b"beta")
    out = tmp_path / "out.log"
    code = main([str(a), str(b), "--prefix-sources", "--ensure-newline", "--output", str(out)])
    assert code == 0
    lines = sorted(out.read_bytes().splitlines(keepends=True))
    assert lines == [b"[a.log] alpha\n", b"[b.log] beta\n"]


def test_cli_run_reports_config_errors(capsys: pytest.CaptureFixture[str]) -> None:
    # No sources at all is a configuration error.
    assert run([]) == 2
    assert "line-flush:" in capsys.readouterr().err


def test_cli_run_reports_missing_source(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = run([str(tmp_path / "missing.log"), "--output", str(tmp_path / "out.log")])
    assert code == 2
    assert "missing.log" in capsys.readouterr().err


def _config_file(tmp_path: Path, lines: list[str]) -> str:
    path = tmp_path / "config.yml"
    path.write_text("\n".join(lines), encoding="utf-8")
    return str(path)


def test_cli_run_reports_unknown_output_kind(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "a.log"
    source.write_bytes(b"a\n")
    config = _config_file(tmp_path, ["output:", "  kind: nope", "sources:", f"  - path: {source}"])
    assert run(["--config", config]) == 2
    assert "Unknown adapter kind" in capsys.readouterr().err


def test_cli_run_reports_unknown_logging_kind(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "a.log"
    source.write_bytes(b"a\n")
    config = _config_file(
        tmp_path,
        ["logging:", "  kind: syslog", "sources:", f"  - path: {source}", "output:", "  kind: memory"],
    )
    assert run(["--config", config]) == 2
    assert "Unknown adapter kind" in capsys.readouterr().err


def test_cli_run_reports_bad_adapter_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    # file output without a path fails in the adapter factory.
    source = tmp_path / "a.log"
    source.write_bytes(b"a\n")
    config = _config_file(tmp_path, ["output:", "  kind: file", "sources:", f"  - path: {source}"])
    assert run(["--config", config]) == 2
    assert "settings.path" in capsys.readouterr().err


def test_cli_run_with_empty_source_truncates_previous_output(tmp_path: Path) -> None:
    source = tmp_path / "empty.log"
    source.write_bytes(b"")
    out = tmp_path / "out.log"
    out.write_bytes(b"STALE\n")
    assert run([str(source), "--output", str(out)]) == 0
    assert out.read_bytes() == b""
