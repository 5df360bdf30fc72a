"""Severity tables and the normalized ordinal scale.

Normalized levels range from 100 to 999; higher numbers mean higher severity.
"""

from __future__ import annotations

from .sources import LevelSource, describe_levels, lookup
from .syslog_pri import (
    SYSLOG_FACILITY_NAMES,
    SYSLOG_SEVERITY_NAMES,
    SyslogPriDecoder,
    SyslogPriority,
    decode_pri,
)
from .tables import (
    JCL_LEVELS,
    JUL_LEVELS,
    MAX_LEVEL,
    MIN_LEVEL,
    NORMALIZED_LEVELS,
    SYSLOG_LEVELS,
)

__all__ = [
    "JCL_LEVELS",
    "JUL_LEVELS",
    "LevelSource",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "NORMALIZED_LEVELS",
    "SYSLOG_FACILITY_NAMES",
    "SYSLOG_LEVELS",
    "SYSLOG_SEVERITY_NAMES",
    "SyslogPriDecoder",
    "SyslogPriority",
    "decode_pri",
    "describe_levels",
    "lookup",
]
