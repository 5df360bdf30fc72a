from __future__ import annotations

import logging
from collections import OrderedDict

import pytest

from log_level_normalizer.core.config import LevelFieldConfig
from log_level_normalizer.core.errors import ConfigurationError
from log_level_normalizer.core.levels import NORMALIZED_LEVELS, LevelSource
from log_level_normalizer.core.normalizer import LevelNormalizer


@pytest.fixture
def normalizer() -> LevelNormalizer:
    return LevelNormalizer()


def test_syslog_warning(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": 4}
    outcome = normalizer.normalize(record)
    assert record["log_level"] == 700
    assert outcome.matched
    assert outcome.source is LevelSource.SYSLOG


def test_jul_finest(normalizer: LevelNormalizer) -> None:
    record = {"jul_log_level": "FINEST"}
    assert normalizer.normalize(record)
    assert record["log_level"] == 100


def test_unknown_jcl_level_leaves_output_untouched(normalizer: LevelNormalizer) -> None:
    record = {"jcl_log_level": "BOGUS"}
    outcome = normalizer.normalize(record)
    assert not outcome
    assert outcome.level is None
    assert "log_level" not in record


def test_last_matching_field_wins(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": 2, "jcl_log_level": "DEBUG"}
    outcome = normalizer.normalize(record)
    assert record["log_level"] == 300
    assert outcome.source is LevelSource.JCL


def test_all_three_fields_jcl_wins(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": 0, "jul_log_level": "FINER", "jcl_log_level": "WARN"}
    normalizer.normalize(record)
    assert record["log_level"] == 700


def test_invalid_later_field_does_not_clear_earlier_match(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": 3, "jul_log_level": "NOPE"}
    outcome = normalizer.normalize(record)
    assert record["log_level"] == 750
    assert outcome.source is LevelSource.SYSLOG


def test_empty_record(normalizer: LevelNormalizer) -> None:
    record: dict[str, object] = {}
    assert normalizer.normalize(record).matched is False
    assert record == {}


def test_no_match_keeps_existing_output(normalizer: LevelNormalizer) -> None:
    record = {"log_level": 123, "syslog_severity_code": 9}
    assert not normalizer.normalize(record)
    assert record["log_level"] == 123


def test_match_overwrites_existing_output(normalizer: LevelNormalizer) -> None:
    record = {"log_level": "warn", "jul_log_level": "INFO"}
    normalizer.normalize(record)
    assert record["log_level"] == 500


def test_none_values_count_as_absent(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": None, "jul_log_level": None, "jcl_log_level": None}
    assert not normalizer.normalize(record)
    assert "log_level" not in record


@pytest.mark.parametrize("value", [-1, 8, "abc", True, 2.0, ["4"]])
def test_unexpected_syslog_values_are_ignored(normalizer: LevelNormalizer, value: object) -> None:
    record = {"syslog_severity_code": value}
    assert not normalizer.normalize(record)
    assert "log_level" not in record


def test_custom_output_field() -> None:
    normalizer = LevelNormalizer({"log_level_field": "severity"})
    record = {"jul_log_level": "SEVERE"}
    normalizer.normalize(record)
    assert record == {"jul_log_level": "SEVERE", "severity": 900}


def test_custom_input_fields() -> None:
    cfg = LevelFieldConfig(syslog_severity_code_field="sev", jcl_log_level_field="level")
    normalizer = LevelNormalizer(cfg)
    record = {"sev": 6, "syslog_severity_code": 0}
    normalizer.normalize(record)
    assert record["log_level"] == 500
    assert normalizer.config is cfg
    assert normalizer.output_field == "log_level"


def test_normalize_is_idempotent(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": 1, "jul_log_level": "CONFIG"}
    normalizer.normalize(record)
    first = dict(record)
    normalizer.normalize(record)
    assert record == first


def test_resolve_does_not_mutate(normalizer: LevelNormalizer) -> None:
    record = {"jcl_log_level": "FATAL"}
    outcome = normalizer.resolve(record)
    assert outcome.level == 900
    assert record == {"jcl_log_level": "FATAL"}


def test_output_values_stay_on_the_scale(normalizer: LevelNormalizer) -> None:
    values: list[object] = [*range(-2, 10), "SEVERE", "FINE", "ERROR", "TRACE", "x", None]
    for syslog in values:
        for text in values:
            record = {"syslog_severity_code": syslog, "jul_log_level": text, "jcl_log_level": text}
            if normalizer.normalize(record):
                assert record["log_level"] in NORMALIZED_LEVELS


def test_works_with_other_mutable_mappings(normalizer: LevelNormalizer) -> None:
    record = OrderedDict(jcl_log_level="INFO")
    normalizer.normalize(record)
    assert list(record) == ["jcl_log_level", "log_level"]


@pytest.mark.parametrize(
    "options",
    [
        {"log_level_field": 5},
        {"jul_log_level_field": ""},
        {"jcl_log_level_field": " level"},
        {"unknown_field": "x"},
    ],
)
def test_bad_configuration_raises(options: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        LevelNormalizer(options)


def test_non_config_object_raises() -> None:
    with pytest.raises(ConfigurationError):
        LevelNormalizer(["log_level"])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("field", "value", "expected"),
    [
        ("jul_log_level", "SEVERE", 900),
        ("jul_log_level", "WARNING", 700),
        ("jul_log_level", "INFO", 500),
        ("jul_log_level", "CONFIG", 400),
        ("jul_log_level", "FINE", 300),
        ("jul_log_level", "FINER", 200),
        ("jul_log_level", "FINEST", 100),
        ("jcl_log_level", "FATAL", 900),
        ("jcl_log_level", "ERROR", 850),
        ("jcl_log_level", "WARN", 700),
        ("jcl_log_level", "INFO", 500),
        ("jcl_log_level", "DEBUG", 300),
        ("jcl_log_level", "TRACE", 100),
    ],
)
def test_every_jul_and_jcl_level(
    normalizer: LevelNormalizer, field: str, value: str, expected: int
) -> None:
    record = {field: value}
    assert normalizer.normalize(record).matched
    assert record["log_level"] == expected


def test_huge_digit_text_is_ignored(normalizer: LevelNormalizer) -> None:
    record = {"syslog_severity_code": "9" * 5000, "jul_log_level": "INFO"}
    outcome = normalizer.normalize(record)
    assert outcome.source is LevelSource.JUL
    assert record["log_level"] == 500


def test_strict_constructor_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigurationError, match="bogus"):
        LevelNormalizer({"bogus": 1}, strict=True)


def test_permissive_constructor_drops_unknown_keys(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        normalizer = LevelNormalizer({"bogus": 1, "log_level_field": "lvl"}, strict=False)
    assert "bogus" in caplog.text
    record = {"jcl_log_level": "WARN"}
    normalizer.normalize(record)
    assert record == {"jcl_log_level": "WARN", "lvl": 700}


def test_permissive_constructor_still_validates_known_keys() -> None:
    with pytest.raises(ConfigurationError):
        LevelNormalizer({"bogus": 1, "log_level_field": 5}, strict=False)
