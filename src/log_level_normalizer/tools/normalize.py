"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from log_level_normalizer.core.event_io import normalize_file
from log_level_normalizer.core.pipeline import LevelFilter

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return min(limit, HARD_LIMIT)


def normalize_records_impl(
    *,
    records: Sequence[Mapping[str, Any]],
    options: Mapping[str, Any] | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Implementation for the `normalize_levels` MCP tool.

    Notes
    -----
    - Records are copied; the caller's objects are never modified.
    - dry_run reports the resolved level without applying match actions;
      the output field is still filled in on the returned copy.
    """
    if len(records) > HARD_LIMIT:
        raise ValueError(f"At most {HARD_LIMIT} records can be normalized per call.")

    stage = LevelFilter.from_options(options)
    out: list[dict[str, Any]] = []
    matched = 0
    for i, rec in enumerate(records):
        if not isinstance(rec, Mapping):
            raise ValueError(f"records[{i}] must be an object, got {type(rec).__name__}")
        record = copy.deepcopy(dict(rec))
        if dry_run:
            ok = stage.normalizer.normalize(record).matched
        else:
            ok = stage.filter(record)
        matched += ok
        out.append(record)

    return {"count": len(out), "matched": matched, "records": out}


async def normalize_file_impl(
    *,
    path: str,
    options: Mapping[str, Any] | None = None,
    limit: int | None = None,
    include_unmatched: bool = True,
    skip_invalid: bool = False,
) -> dict[str, Any]:
    """Implementation for the `normalize_log_file` MCP tool.

    Reads a JSON-lines event file and returns normalized records with
    their line numbers. `limit` caps the number of records read.
    """
    stage = LevelFilter.from_options(options)
    limit_eff = _resolve_limit(limit)

    entries: list[dict[str, Any]] = []
    async for line_no, record, ok in normalize_file(
        path, stage, limit=limit_eff, skip_invalid=skip_invalid
    ):
        if not ok and not include_unmatched:
            continue
        entries.append({"line_no": line_no, "matched": ok, "record": record})

    return {
        "count": len(entries),
        "matched": stage.stats.matched,
        "stats": stage.stats.as_dict(),
        "records": entries,
    }
