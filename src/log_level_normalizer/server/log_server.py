"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: normalize records or a JSON-lines event file
- Resources: severity tables, effective configuration and its schema

Run locally (stdio):
    python -m log_level_normalizer.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_level_normalizer.resources.registry import register_resources
from log_level_normalizer.tools.normalize import normalize_file_impl, normalize_records_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("LOG_LEVEL_NORMALIZER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-level-normalizer", json_response=True)

register_resources(mcp)


@mcp.tool()
def normalize_levels(
    records: list[dict[str, Any]],
    options: dict[str, Any] | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Normalize the log level fields of a batch of records.

    Parameters
    ----------
    records:
        JSON objects, e.g. [{"jul_log_level": "WARNING", "message": "..."}].
    options:
        Filter options: syslog_severity_code_field, jul_log_level_field,
        jcl_log_level_field, log_level_field, add_tag, remove_tag,
        add_field, remove_field. Unknown keys are rejected.
    dry_run:
        When true, only the level field is written; match actions are skipped.

    Returns
    -------
    dict:
        {"count": int, "matched": int, "records": list[dict]}
    """
    return normalize_records_impl(records=records, options=options, dry_run=dry_run)


@mcp.tool()
async def normalize_log_file(
    path: str,
    options: dict[str, Any] | None = None,
    limit: int | None = None,
    include_unmatched: bool = True,
    skip_invalid: bool = False,
) -> dict[str, Any]:
    """Normalize the records of a local JSON-lines event file (plain or .gz).

    Parameters
    ----------
    path:
        Path to the event file; one JSON object per line.
    options:
        Filter options, as for normalize_levels.
    limit:
        Maximum number of records read (hard-capped in the implementation).
    include_unmatched:
        When false, records without a recognized level are omitted.
    skip_invalid:
        When true, lines that are not JSON objects are skipped instead of failing.

    Returns
    -------
    dict:
        {"count": int, "matched": int, "stats": dict, "records": list[dict]}
    """
    return await normalize_file_impl(
        path=path,
        options=options,
        limit=limit,
        include_unmatched=include_unmatched,
        skip_invalid=skip_invalid,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
