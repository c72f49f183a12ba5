from __future__ import annotations

import json
import re
from pathlib import Path

from poker_sanitizer.logging.error_log import ErrorLogBuffer
from poker_sanitizer.models.error_record import ErrorRecord


def test_flush_empty_buffer_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("hands.csv", 3, "MALFORMED_RECORD", "bad timestamp"))
    buf.append(ErrorRecord.create("hands.csv", 7, "MALFORMED_RECORD", "missing column"))
    assert len(buf) == 2

    fp = buf.flush()
    assert fp is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", fp.name)
    lines = fp.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["row"] for line in lines] == [3, 7]
    assert len(buf) == 0


def test_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("a.csv", 1, "MALFORMED_RECORD", "x"))
    first = buf.flush()
    buf.append(ErrorRecord.create("a.csv", 2, "MALFORMED_RECORD", "y"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2
