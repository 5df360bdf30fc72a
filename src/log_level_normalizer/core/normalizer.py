"""Level normalizer.

Maps syslog severity codes, java.util.logging levels and Commons Logging
levels onto one ordinal scale (100-999, higher is more severe) so that
records from different sources can be filtered uniformly, e.g. keep only
``log_level > 700``.

If several input fields are set on one record, each matching field
overwrites the output in the order syslog, JUL, JCL, so the last match wins.
Apply the normalizer where only one kind of level field can be present.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import LevelFieldConfig, build_field_config
from .errors import ConfigurationError
from .levels import LevelSource, lookup
from .models import NO_MATCH, NormalizeOutcome, Record

LOGGER = logging.getLogger(__name__)


class LevelNormalizer:
    """Normalize the level fields of a record into a single output field."""

    __slots__ = ("_config", "_inputs")

    def __init__(
        self,
        config: LevelFieldConfig | Mapping[str, Any] | None = None,
        *,
        strict: bool = True,
    ) -> None:
        if config is None:
            config = LevelFieldConfig()
        elif isinstance(config, Mapping):
            config = build_field_config(config, strict=strict)
        elif not isinstance(config, LevelFieldConfig):
            raise ConfigurationError(
                f"config must be a LevelFieldConfig or mapping, got {type(config).__name__}"
            )

        self._config = config
        self._inputs: tuple[tuple[LevelSource, str], ...] = (
            (LevelSource.SYSLOG, config.syslog_severity_code_field),
            (LevelSource.JUL, config.jul_log_level_field),
            (LevelSource.JCL, config.jcl_log_level_field),
        )

    @property
    def config(self) -> LevelFieldConfig:
        return self._config

    @property
    def output_field(self) -> str:
        return self._config.log_level_field

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config!r})"

    def resolve(self, record: Mapping[str, Any]) -> NormalizeOutcome:
        """Compute the normalized level for a record without modifying it."""
        outcome = NO_MATCH
        for source, field in self._inputs:
            value = record.get(field)
            if value is None:
                continue

            level = lookup(source, value)
            if level is None:
                LOGGER.debug("Ignoring unmapped %s level %r in field %r", source.value, value, field)
                continue

            if outcome.matched:
                LOGGER.debug(
                    "Multiple level fields set; %s (%r) overrides %s",
                    source.value,
                    value,
                    outcome.source.value,
                )
            outcome = NormalizeOutcome(matched=True, level=level, source=source)
        return outcome

    def normalize(self, record: Record) -> NormalizeOutcome:
        """Write the normalized level into the record's output field.

        The output field is left untouched when no input field maps.
        Never raises for record content.
        """
        outcome = self.resolve(record)
        if outcome.matched:
            record[self.output_field] = outcome.level
        return outcome
