from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Iterator, Sequence
from typing import Any, TextIO

from log_level_normalizer.core.config import resolve_field_config
from log_level_normalizer.core.errors import ConfigurationError, EventDecodeError
from log_level_normalizer.core.event_io import dump_record, normalize_file, parse_record
from log_level_normalizer.core.levels import describe_levels
from log_level_normalizer.core.pipeline import LevelFilter

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Normalize syslog/JUL/JCL log levels in JSON-lines events to a 100-999 scale."
    )
    p.add_argument("path", nargs="?", default="-", help="JSON-lines event file (.gz ok); '-' for stdin")
    p.add_argument("--syslog-field", default=None, help="Syslog severity code field (default: syslog_severity_code)")
    p.add_argument("--jul-field", default=None, help="java.util.logging level field (default: jul_log_level)")
    p.add_argument("--jcl-field", default=None, help="Commons Logging level field (default: jcl_log_level)")
    p.add_argument("--output-field", default=None, help="Normalized level field (default: log_level)")
    p.add_argument("--add-tag", action="append", default=[], help="Tag added to matched records (repeatable)")
    p.add_argument(
        "--remove-field", action="append", default=[], help="Field removed from matched records (repeatable)"
    )
    p.add_argument("--decode-pri", action="store_true", help="Derive the syslog severity code from syslog_pri first")
    p.add_argument("--pri-field", default="syslog_pri", help="Syslog PRI field used with --decode-pri")
    p.add_argument("--only-matched", action="store_true", help="Only print records whose level was normalized")
    p.add_argument("--skip-invalid", action="store_true", help="Skip lines that are not JSON objects")
    p.add_argument("--show-tables", action="store_true", help="Print the severity tables as JSON and exit")
    return p


def _options_from_args(args: argparse.Namespace) -> dict[str, Any]:
    fields = resolve_field_config().model_dump()
    overrides = {
        "syslog_severity_code_field": args.syslog_field,
        "jul_log_level_field": args.jul_field,
        "jcl_log_level_field": args.jcl_field,
        "log_level_field": args.output_field,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})

    options: dict[str, Any] = dict(fields)
    if args.add_tag:
        options["add_tag"] = args.add_tag
    if args.remove_field:
        options["remove_field"] = args.remove_field
    return options


def _iter_stdin(stream: TextIO, *, skip_invalid: bool) -> Iterator[tuple[int, dict[str, Any]]]:
    for line_no, line in enumerate(stream, start=1):
        s = line.strip()
        if not s:
            continue
        try:
            yield line_no, parse_record(line_no, s)
        except EventDecodeError as exc:
            if not skip_invalid:
                raise
            LOGGER.warning("Skipping stdin: %s", exc)


async def _run_file(path: str, stage: LevelFilter, *, only_matched: bool, skip_invalid: bool) -> None:
    async for _, record, matched in normalize_file(path, stage, skip_invalid=skip_invalid):
        if matched or not only_matched:
            print(dump_record(record))


def main(argv: Sequence[str] | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL_NORMALIZER_LOG_LEVEL", "WARNING").upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = _build_parser().parse_args(argv)

    if args.show_tables:
        print(json.dumps(describe_levels(), indent=2))
        return

    try:
        stage = LevelFilter.from_options(
            _options_from_args(args),
            decode_pri_field=args.pri_field if args.decode_pri else None,
        )
        if args.path == "-":
            for _, record in _iter_stdin(sys.stdin, skip_invalid=args.skip_invalid):
                if stage.filter(record) or not args.only_matched:
                    print(dump_record(record))
        else:
            asyncio.run(
                _run_file(args.path, stage, only_matched=args.only_matched, skip_invalid=args.skip_invalid)
            )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (ConfigurationError, EventDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    s = stage.stats
    print(f"\nNormalized {s.matched} of {s.seen} records ({s.unmatched} without a known level).", file=sys.stderr)


if __name__ == "__main__":
    main()
