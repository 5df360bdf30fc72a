"""JSON-lines event file reading and writing.

Each non-blank line of an event file is one JSON object (a record).
Plain and gzip-compressed files are supported.
"""

from __future__ import annotations

import gzip
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiofiles
from aiofiles.threadpool import wrap

from .errors import EventDecodeError
from .pipeline import LevelFilter

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open an event file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


def parse_record(line_no: int, line: str) -> dict[str, Any]:
    """Decode one JSON-lines record or raise EventDecodeError."""
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as exc:
        raise EventDecodeError(line_no, f"invalid JSON ({exc.msg})") from exc
    # Oversized integers raise ValueError, deep nesting RecursionError.
    except (ValueError, RecursionError) as exc:
        raise EventDecodeError(line_no, f"undecodable JSON ({exc})") from exc
    if not isinstance(obj, dict):
        raise EventDecodeError(line_no, f"expected a JSON object, got {type(obj).__name__}")
    return obj


async def iter_records(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
    skip_invalid: bool = False,
) -> AsyncIterator[tuple[int, dict[str, Any]]]:
    """Yield ``(line_no, record)`` for each JSON object in an event file."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Event file not found: {p}")

    line_no = 0
    async with _open_text(p, encoding=encoding, decode_errors=decode_errors) as f:
        async for line in f:
            line_no += 1
            s = line.strip()
            if not s:
                continue
            try:
                record = parse_record(line_no, s)
            except EventDecodeError as exc:
                if not skip_invalid:
                    raise
                LOGGER.warning("Skipping %s: %s", p, exc)
                continue
            yield line_no, record


async def normalize_file(
    path: str | Path,
    stage: LevelFilter | None = None,
    *,
    limit: int | None = None,
    **iter_kwargs: Any,
) -> AsyncIterator[tuple[int, dict[str, Any], bool]]:
    """Yield ``(line_no, record, matched)`` after running each record through the stage."""
    if limit is not None and limit <= 0:
        raise ValueError("limit must be > 0")
    stage = stage or LevelFilter()

    count = 0
    async for line_no, record in iter_records(path, **iter_kwargs):
        matched = stage.filter(record)
        yield line_no, record, matched
        count += 1
        if limit is not None and count >= limit:
            break


def dump_record(record: Any) -> str:
    """Serialize a record as a compact JSON line (no trailing newline)."""
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"), default=str)
