"""Pipeline filter stage wrapping the level normalizer.

The stage adds what a host pipeline does around a filter: an optional
condition deciding whether the filter runs at all, and bookkeeping
(tags/fields) applied when normalization matched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .config import MatchActions, load_config
from .levels import SyslogPriDecoder
from .models import Record
from .normalizer import LevelNormalizer

TAGS_FIELD = "tags"

Condition = Callable[[Mapping[str, Any]], bool]


@dataclass(slots=True)
class FilterStats:
    """Counters for records seen by a filter stage."""

    seen: int = 0
    skipped: int = 0
    matched: int = 0
    unmatched: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "seen": self.seen,
            "skipped": self.skipped,
            "matched": self.matched,
            "unmatched": self.unmatched,
        }


def _tags(record: Record) -> list[Any]:
    """Return the record's tag list, creating or wrapping it as needed."""
    tags = record.get(TAGS_FIELD)
    if tags is None:
        tags = []
    elif not isinstance(tags, list):
        tags = [tags]
    record[TAGS_FIELD] = tags
    return tags


def apply_match_actions(record: Record, actions: MatchActions) -> None:
    """Apply on-match bookkeeping: add fields and tags, then remove tags and fields."""
    for key, value in actions.add_field.items():
        record.setdefault(key, value)

    if actions.add_tag:
        tags = _tags(record)
        for tag in actions.add_tag:
            if tag not in tags:
                tags.append(tag)

    if actions.remove_tag and TAGS_FIELD in record:
        tags = _tags(record)
        tags[:] = [t for t in tags if t not in actions.remove_tag]

    for key in actions.remove_field:
        record.pop(key, None)


class LevelFilter:
    """Filter stage: condition, normalization, and match bookkeeping."""

    def __init__(
        self,
        normalizer: LevelNormalizer | None = None,
        *,
        actions: MatchActions | None = None,
        condition: Condition | None = None,
        pri_decoder: SyslogPriDecoder | None = None,
    ) -> None:
        self.normalizer = normalizer or LevelNormalizer()
        self.actions = actions or MatchActions()
        self.condition = condition
        self.pri_decoder = pri_decoder
        self.stats = FilterStats()

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any] | None = None,
        *,
        strict: bool = True,
        condition: Condition | None = None,
        decode_pri_field: str | None = None,
    ) -> LevelFilter:
        """Build a stage from flat filter options (see ``load_config``).

        With ``decode_pri_field`` set, the syslog severity code is derived
        from that PRI field before normalizing.
        """
        cfg = load_config(options, strict=strict)
        decoder = None
        if decode_pri_field is not None:
            decoder = SyslogPriDecoder(
                pri_field=decode_pri_field,
                severity_field=cfg.fields.syslog_severity_code_field,
            )
        return cls(
            LevelNormalizer(cfg.fields),
            actions=cfg.on_match,
            condition=condition,
            pri_decoder=decoder,
        )

    def filter(self, record: Record) -> bool:
        """Normalize one record in place; return whether a level was mapped."""
        self.stats.seen += 1
        if self.condition is not None and not self.condition(record):
            self.stats.skipped += 1
            return False

        if self.pri_decoder is not None:
            self.pri_decoder.apply(record)
        outcome = self.normalizer.normalize(record)
        if not outcome.matched:
            self.stats.unmatched += 1
            return False

        self.stats.matched += 1
        if not self.actions.is_empty:
            apply_match_actions(record, self.actions)
        return True

    def process(self, records: Iterable[Record]) -> Iterator[Record]:
        """Filter records lazily, yielding each one after processing."""
        for record in records:
            self.filter(record)
            yield record
