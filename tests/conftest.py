# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from poker_sanitizer.logging.init import reset_logging

HEADER = "entry,at,order"

SAMPLE_ROWS = [
    '"""alice @ a1b2"" calls 20",2024-01-01T00:00:00Z,1',
    '"""bob @ c3d4"" shows a 7h, 7c",2024-01-01T00:00:30Z,2',
    '"Your hand is 7h, 7c",2024-01-01T00:01:00Z,3',
    '"""carol @ e5f6"" folds",2024-01-01T00:01:30+02:00,4',
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SANITIZER_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_csv_text() -> str:
    return "\n".join([HEADER, *SAMPLE_ROWS]) + "\n"


@pytest.fixture()
def sample_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "data" / "hands.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f


@pytest.fixture()
def sample_config_yaml() -> str:
    return """personal_data_signatures:
  - Your hand
  - shows a
malformed_policy: skip
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sanitizer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
