"""Severity tables for the supported logging frameworks.

References:
- syslog: RFC 5424 section 6.2.1
- java.util.logging: java.util.logging.Level
- Jakarta/Commons Logging: message priorities

    Level   JUL         syslog       JCL

     900    SEVERE      0-Emergency  FATAL
     850                1-Alert      ERROR
     800                2-Critical
     750                3-Error
     700    WARNING     4-Warning    WARN
     600                5-Notice
     500    INFO        6-Info       INFO
     400    CONFIG
     300    FINE        7-Debug      DEBUG
     200    FINER
     100    FINEST                   TRACE
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

MIN_LEVEL = 100
MAX_LEVEL = 999

SYSLOG_LEVELS: Mapping[int, int] = MappingProxyType(
    {
        0: 900,
        1: 850,
        2: 800,
        3: 750,
        4: 700,
        5: 600,
        6: 500,
        7: 300,
    }
)

JUL_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "SEVERE": 900,
        "WARNING": 700,
        "INFO": 500,
        "CONFIG": 400,
        "FINE": 300,
        "FINER": 200,
        "FINEST": 100,
    }
)

JCL_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "FATAL": 900,
        "ERROR": 850,
        "WARN": 700,
        "INFO": 500,
        "DEBUG": 300,
        "TRACE": 100,
    }
)

NORMALIZED_LEVELS: frozenset[int] = frozenset(
    (*SYSLOG_LEVELS.values(), *JUL_LEVELS.values(), *JCL_LEVELS.values())
)
