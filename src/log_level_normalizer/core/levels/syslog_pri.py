"""Syslog PRI decoding.

A syslog PRI value packs facility and severity: ``pri = facility * 8 + severity``.
Decoding it yields the severity code read by the level normalizer.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any

SYSLOG_SEVERITY_NAMES: tuple[str, ...] = (
    "emergency",
    "alert",
    "critical",
    "error",
    "warning",
    "notice",
    "informational",
    "debug",
)

SYSLOG_FACILITY_NAMES: tuple[str, ...] = (
    "kernel",
    "user-level",
    "mail",
    "daemon",
    "security/authorization",
    "syslogd",
    "line printer",
    "network news",
    "uucp",
    "clock",
    "security/authorization",
    "ftp",
    "ntp",
    "log audit",
    "log alert",
    "clock",
    "local0",
    "local1",
    "local2",
    "local3",
    "local4",
    "local5",
    "local6",
    "local7",
)

MAX_PRI = len(SYSLOG_FACILITY_NAMES) * 8 - 1  # 191


@dataclass(frozen=True, slots=True)
class SyslogPriority:
    """Facility and severity codes decoded from a PRI value."""

    facility: int
    severity: int

    @property
    def facility_name(self) -> str:
        return SYSLOG_FACILITY_NAMES[self.facility]

    @property
    def severity_name(self) -> str:
        return SYSLOG_SEVERITY_NAMES[self.severity]


def decode_pri(pri: int) -> SyslogPriority:
    """Split a PRI value into facility and severity codes."""
    if isinstance(pri, bool) or not isinstance(pri, int):
        raise ValueError(f"PRI must be an integer, got {pri!r}")
    if pri < 0 or pri > MAX_PRI:
        raise ValueError(f"PRI must be in 0..{MAX_PRI}, got {pri}")
    return SyslogPriority(facility=pri // 8, severity=pri % 8)


def _coerce_pri(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip().strip("<>")
        if s.isascii() and s.isdigit() and len(s) <= 3:
            return int(s)
    return None


@dataclass(frozen=True, slots=True)
class SyslogPriDecoder:
    """Write syslog severity/facility fields derived from a PRI field.

    Typically placed before the level normalizer so that the numeric
    severity code is available in ``severity_field``.
    """

    pri_field: str = "syslog_pri"
    severity_field: str = "syslog_severity_code"
    facility_field: str = "syslog_facility_code"
    include_names: bool = False
    severity_name_field: str = "syslog_severity"
    facility_name_field: str = "syslog_facility"

    def apply(self, record: MutableMapping[str, Any]) -> bool:
        """Decode the PRI field in place; return False when it is absent or invalid."""
        pri = _coerce_pri(record.get(self.pri_field))
        if pri is None or not 0 <= pri <= MAX_PRI:
            return False

        decoded = decode_pri(pri)
        record[self.severity_field] = decoded.severity
        record[self.facility_field] = decoded.facility
        if self.include_names:
            record[self.severity_name_field] = decoded.severity_name
            record[self.facility_name_field] = decoded.facility_name
        return True
