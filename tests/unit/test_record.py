from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from poker_sanitizer.models.cell import Cell
from poker_sanitizer.models.record import MalformedRecordError, Record, parse_rfc3339
from poker_sanitizer.models.rule import PersonalDataRule


@pytest.mark.parametrize(
    "fields",
    [
        ["a@b \"bet\"", "2024-01-01T00:00:00Z", "Your hand: 77"],
        ["only one"],
        [],
        ["", "", "", ""],
        ['"quoted, with comma"', " padded ", "NA"],
    ],
)
def test_raw_round_trip_identity(fields: list[str]):
    record = Record.from_raw(fields)
    assert record.raw() == fields
    assert len(record) == len(fields)


def test_cells_keep_order_and_arity():
    record = Record.from_raw(["x", "y", "z"])
    assert record.cells == (Cell("x"), Cell("y"), Cell("z"))


def test_contains_personal_data_if_any_cell_does():
    clean = Record.from_raw(["c@d \"fold\"", "2024-01-01T00:01:00Z", "no data here"])
    dirty = Record.from_raw(["a@b \"bet\"", "2024-01-01T00:00:00Z", "Your hand: 77"])
    assert clean.contains_personal_data() is False
    assert dirty.contains_personal_data() is True


def test_contains_personal_data_with_injected_rule():
    rule = PersonalDataRule.from_signatures(["fold"])
    record = Record.from_raw(["c@d \"fold\"", "2024-01-01T00:01:00Z", "Your hand: 77"])
    assert record.contains_personal_data(rule) is True
    assert Record.from_raw(["x", "y"]).contains_personal_data(rule) is False


def test_empty_record_has_no_personal_data():
    assert Record.from_raw([]).contains_personal_data() is False


def test_actor_and_action():
    record = Record.from_raw(['  bob@example.com "raise"', "2024-01-01T00:00:00Z"])
    assert record.actor() == "bob"
    assert record.action() == "raise"


def test_actor_strips_quotes_then_spaces():
    record = Record.from_raw(['"alice @ a1b2" calls 20', "2024-01-01T00:00:00Z"])
    assert record.actor() == "alice"
    assert record.action() == " calls 20"


def test_actor_without_at_sign_is_whole_trimmed_text():
    record = Record.from_raw(['" dealer "', "2024-01-01T00:00:00Z"])
    assert record.actor() == "dealer"


def test_action_keeps_whitespace_only_segment():
    record = Record.from_raw(['x "y" ', "2024-01-01T00:00:00Z"])
    assert record.action() == " "


def test_action_without_quote_is_whole_text():
    record = Record.from_raw(["bob@example.com raises", "2024-01-01T00:00:00Z"])
    assert record.action() == "bob@example.com raises"


def test_timestamp_utc():
    record = Record.from_raw(["a@b \"bet\"", "2024-01-01T00:00:00Z"])
    assert record.timestamp() == datetime(2024, 1, 1, tzinfo=UTC)


def test_timestamp_with_offset_and_fraction():
    record = Record.from_raw(["a@b \"bet\"", "2024-03-05T10:20:30.123456+02:00"])
    ts = record.timestamp()
    assert ts.utcoffset() == timedelta(hours=2)
    assert ts == datetime(2024, 3, 5, 8, 20, 30, 123456, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not a date",
        "2024-01-01",
        "2024-01-01 00:00:00Z",
        "2024-01-01T00:00:00",  # offset is mandatory
        "2024-13-01T00:00:00Z",
        "1704067200",
    ],
)
def test_timestamp_rejects_non_rfc3339(value: str):
    record = Record.from_raw(["a@b \"bet\"", value])
    with pytest.raises(MalformedRecordError):
        record.timestamp()
    with pytest.raises(MalformedRecordError):
        parse_rfc3339(value)


@pytest.mark.parametrize("fields", [[], ["a@b \"bet\""]])
def test_short_record_derivations_fail_loudly(fields: list[str]):
    record = Record.from_raw(fields)
    with pytest.raises(MalformedRecordError):
        record.actor()
    with pytest.raises(MalformedRecordError):
        record.action()
    with pytest.raises(MalformedRecordError):
        record.timestamp()


def test_malformed_record_error_is_value_error():
    assert issubclass(MalformedRecordError, ValueError)


def test_validate():
    Record.from_raw(["a@b \"bet\"", "2024-01-01T00:00:00Z", "x"]).validate()
    with pytest.raises(MalformedRecordError):
        Record.from_raw(["a@b \"bet\""]).validate()
    with pytest.raises(MalformedRecordError):
        Record.from_raw(["a@b \"bet\"", "yesterday"]).validate()


def test_record_is_immutable():
    record = Record.from_raw(["x", "y"])
    with pytest.raises(AttributeError):
        record.cells = ()
