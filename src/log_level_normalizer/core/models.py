"""Core data models for level normalization."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any

from .levels import LevelSource

# Records are owned by the caller; the normalizer mutates them in place.
Record = MutableMapping[str, Any]


@dataclass(frozen=True, slots=True)
class NormalizeOutcome:
    """Result of normalizing one record.

    ``level`` and ``source`` describe the final write to the output field,
    i.e. the last matching input in precedence order.
    """

    matched: bool
    level: int | None = None
    source: LevelSource | None = None

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = NormalizeOutcome(matched=False)
