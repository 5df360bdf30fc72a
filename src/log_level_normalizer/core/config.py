"""Normalizer and filter-stage configuration.

Options use the same names as the pipeline filter they configure, e.g.::

    {
        "syslog_severity_code_field": "syslog_severity_code",
        "jul_log_level_field": "jul_log_level",
        "jcl_log_level_field": "jcl_log_level",
        "log_level_field": "log_level",
        "add_tag": ["level_normalized"],
        "remove_field": ["syslog_severity_code"],
    }
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "LOG_LEVEL_NORMALIZER_"


class LevelFieldConfig(BaseModel):
    """Names of the record fields read and written by the normalizer."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    syslog_severity_code_field: str = Field(
        default="syslog_severity_code",
        description="Field containing the numeric syslog severity code (0-7).",
    )
    jul_log_level_field: str = Field(
        default="jul_log_level",
        description="Field containing the textual java.util.logging level.",
    )
    jcl_log_level_field: str = Field(
        default="jcl_log_level",
        description="Field containing the textual Commons Logging level.",
    )
    log_level_field: str = Field(
        default="log_level",
        description="Field that receives the normalized level (100-999).",
    )

    @field_validator("*")
    @classmethod
    def _check_field_name(cls, value: str) -> str:
        if not value:
            raise ValueError("field name must not be empty")
        if value != value.strip():
            raise ValueError("field name must not have leading or trailing whitespace")
        return value


class MatchActions(BaseModel):
    """Bookkeeping applied to a record after a successful normalization."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    add_tag: tuple[str, ...] = ()
    remove_tag: tuple[str, ...] = ()
    add_field: dict[str, Any] = Field(default_factory=dict)
    remove_field: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.add_tag or self.remove_tag or self.add_field or self.remove_field)


class FilterConfig(BaseModel):
    """Complete filter-stage configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fields: LevelFieldConfig = Field(default_factory=LevelFieldConfig)
    on_match: MatchActions = Field(default_factory=MatchActions)


FIELD_OPTIONS: tuple[str, ...] = tuple(LevelFieldConfig.model_fields)
ACTION_OPTIONS: tuple[str, ...] = tuple(MatchActions.model_fields)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<config>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _split_unknown(
    options: Mapping[str, Any],
    *,
    strict: bool,
    known: tuple[str, ...] = FIELD_OPTIONS + ACTION_OPTIONS,
) -> dict[str, Any]:
    """Return only recognized options; reject or warn about the rest."""
    unknown = sorted(str(k) for k in options if k not in known)
    if unknown:
        if strict:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
        LOGGER.warning("Ignoring unknown option(s): %s", ", ".join(unknown))
    return {k: v for k, v in options.items() if k in known}


def build_field_config(
    options: Mapping[str, Any] | None = None, *, strict: bool = True
) -> LevelFieldConfig:
    """Validate field-name options into a LevelFieldConfig.

    Unknown keys raise ConfigurationError when ``strict`` is true and are
    logged and dropped otherwise.
    """
    opts = _split_unknown(options or {}, strict=strict, known=FIELD_OPTIONS)
    try:
        return LevelFieldConfig.model_validate(opts)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid field configuration: {_format_validation_error(exc)}"
        ) from exc


def load_config(options: Mapping[str, Any] | None = None, *, strict: bool = True) -> FilterConfig:
    """Build a FilterConfig from a flat option mapping.

    Unknown keys raise ConfigurationError when ``strict`` is true and are
    logged and dropped otherwise.
    """
    if options is None:
        return FilterConfig()
    if not isinstance(options, Mapping):
        raise ConfigurationError(f"Options must be a mapping, got {type(options).__name__}")

    opts = _split_unknown(options, strict=strict)
    fields = build_field_config({k: v for k, v in opts.items() if k in FIELD_OPTIONS})

    actions_raw = {k: v for k, v in opts.items() if k in ACTION_OPTIONS}
    # A single string is accepted for list options, as pipeline configs often do.
    for key in ("add_tag", "remove_tag", "remove_field"):
        if isinstance(actions_raw.get(key), str):
            actions_raw[key] = [actions_raw[key]]
    try:
        actions = MatchActions.model_validate(actions_raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid match actions: {_format_validation_error(exc)}"
        ) from exc

    return FilterConfig(fields=fields, on_match=actions)


def resolve_field_config(cfg: LevelFieldConfig | None = None) -> LevelFieldConfig:
    """Return config with optional env overrides applied.

    ``LOG_LEVEL_NORMALIZER_LOG_LEVEL_FIELD=severity`` overrides
    ``log_level_field``, and likewise for the other field options.
    """
    if cfg is None:
        cfg = LevelFieldConfig()

    overrides: dict[str, str] = {}
    for name in FIELD_OPTIONS:
        env = os.getenv(ENV_PREFIX + name.upper())
        if env is None or env == "":
            continue
        overrides[name] = env

    if not overrides:
        return cfg
    LOGGER.debug("Field overrides from environment: %s", overrides)
    return build_field_config({**cfg.model_dump(), **overrides})
