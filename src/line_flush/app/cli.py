from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from line_flush.app.runtime import run_merge
from line_flush.config.loader import load_config, validate_config
from line_flush.config.models import AppConfig, SourceConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="line-flush",
        description="Merge sources into one output without splitting lines",
    )
    parser.add_argument("sources", nargs="*", help="Input files (added to config sources)")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--output", help="Write to this file instead of the configured output")
    parser.add_argument(
        "--prefix-sources",
        action="store_true",
        help="Tag each line with '[<file name>] ' for CLI-provided sources",
    )
    parser.add_argument(
        "--ensure-newline",
        action="store_true",
        default=None,
        help="Terminate a trailing partial line at close",
    )
    parser.add_argument("--terminator", help="Line terminator (default: newline)")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    # Config file is the base; CLI flags take precedence over it.
    raw: dict[str, object] = {}
    if args.config:
        raw = load_config(Path(args.config)).model_dump()

    sources = list(raw.get("sources", []))  # type: ignore[call-overload]
    for path in args.sources:
        prefix = f"[{Path(path).name}] " if args.prefix_sources else ""
        sources.append(SourceConfig(path=path, prefix=prefix).model_dump())
    raw["sources"] = sources

    writer = dict(raw.get("writer", {}))  # type: ignore[call-overload]
    if args.ensure_newline is not None:
        writer["ensure_trailing_newline"] = args.ensure_newline
    if args.terminator is not None:
        writer["terminator"] = args.terminator
    raw["writer"] = writer

    if args.output is not None:
        raw["output"] = {"kind": "file", "settings": {"path": args.output}}
    return validate_config(raw)


def run(argv: Sequence[str] | None = None) -> int:
    # Thin orchestration wrapper; merging lives in app.runtime.
    args = parse_args(argv)
    try:
        config = build_config(args)
        run_merge(config)
    except (ValueError, OSError) as exc:
        # ConfigError, AdapterRegistryError and adapter settings errors are all ValueError.
        print(f"line-flush: {exc}", file=sys.stderr)
        return 2
    return 0
