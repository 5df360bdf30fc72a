from __future__ import annotations

import gzip
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from log_level_normalizer.core.config import ENV_PREFIX, FIELD_OPTIONS


@pytest.fixture(autouse=True)
def _clear_field_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in FIELD_OPTIONS:
        monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)


@pytest.fixture
def mixed_events() -> list[dict[str, Any]]:
    return [
        {"type": "syslog", "syslog_severity_code": 4, "message": "disk almost full"},
        {"type": "jul", "jul_log_level": "FINEST", "message": "entering method"},
        {"type": "jcl", "jcl_log_level": "BOGUS", "message": "unknown level"},
        {"type": "plain", "message": "no level at all"},
        {"type": "jcl", "jcl_log_level": "ERROR", "message": "request failed"},
    ]


@pytest.fixture
def write_events() -> Callable[[Path, list[Any]], None]:
    def _write(path: Path, events: list[Any]) -> None:
        lines = [e if isinstance(e, str) else json.dumps(e) for e in events]
        data = "\n".join(lines) + "\n"
        if path.suffix == ".gz":
            with gzip.open(path, mode="wt", encoding="utf-8") as f:
                f.write(data)
        else:
            path.write_text(data, encoding="utf-8")

    return _write
