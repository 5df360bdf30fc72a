"""Level sources and table lookups."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .tables import JCL_LEVELS, JUL_LEVELS, SYSLOG_LEVELS


class LevelSource(str, Enum):
    """Input level kinds, declared in the order they are checked."""

    SYSLOG = "syslog"
    JUL = "jul"
    JCL = "jcl"

    @property
    def table(self) -> Mapping[Any, int]:
        """Return the severity table for this source."""
        return _TABLES[self]


_TABLES: dict[LevelSource, Mapping[Any, int]] = {
    LevelSource.SYSLOG: SYSLOG_LEVELS,
    LevelSource.JUL: JUL_LEVELS,
    LevelSource.JCL: JCL_LEVELS,
}


def _syslog_code(value: Any) -> int | None:
    """Coerce a syslog severity code; text must be at most three decimal digits."""
    # bool is an int subclass; True must not read as code 1
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.isascii() and s.isdigit() and len(s) <= 3:
            return int(s)
    return None


def lookup(source: LevelSource, value: Any) -> int | None:
    """Return the normalized level for a raw field value, or None if unmapped.

    Syslog codes are accepted as ints or as digit text such as "4"; the
    pipeline filter this replaces matched integer codes only. JUL and JCL
    names must match exactly.
    """
    if source is LevelSource.SYSLOG:
        code = _syslog_code(value)
        if code is None:
            return None
        return SYSLOG_LEVELS.get(code)

    if not isinstance(value, str):
        return None
    return source.table.get(value)


def describe_levels() -> dict[str, dict[str, int]]:
    """Return the tables as JSON-friendly dicts (keys as strings)."""
    return {source.value: {str(k): v for k, v in source.table.items()} for source in LevelSource}
