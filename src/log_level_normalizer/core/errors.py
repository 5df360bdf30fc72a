"""Exception types raised by the normalizer package."""

from __future__ import annotations


class LogLevelNormalizerError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(LogLevelNormalizerError, ValueError):
    """Raised when a normalizer or filter stage is constructed from bad options."""


class EventDecodeError(LogLevelNormalizerError, ValueError):
    """Raised when a JSON-lines event file contains a line that is not an object."""

    def __init__(self, line_no: int, reason: str) -> None:
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason
