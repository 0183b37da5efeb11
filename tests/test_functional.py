from kindlog.domain import Record
from kindlog.functional import (
    Left, Nothing, Right, Some, ensure_list, lookup, parse_records
)


def test_lookup_found_and_missing():
    table = {"a": 1}

    assert lookup(table, "a") == Some(1)
    assert lookup(table, "b") == Nothing()
    assert lookup(table, "b").get_or_else(0) == 0
    assert lookup(table, "a").map(lambda x: x + 1).get_or_else(0) == 2


def test_lookup_unhashable_key():
    assert lookup({"a": 1}, ["a"]).is_none()


def test_either_bind_short_circuits_on_left():
    calls = []

    def step(x):
        calls.append(x)
        return Right(x)

    result = Left("boom").bind(step)
    assert result.is_left()
    assert result.get_error() == "boom"
    assert calls == []

    assert Right(3).bind(step).get_or_else(0) == 3
    assert calls == [3]


def test_ensure_list_rejects_error_object():
    result = ensure_list({"error": "x"})

    assert result.is_left()
    error = result.get_error()
    assert error["error"] == "not_a_list"
    assert "dict" in error["message"]


def test_parse_records_success():
    result = parse_records([
        {"Type": "deed", "Mood": "happy", "Timestamp": "2025-01-01"},
        {"Type": "help", "Mood": "sad", "Timestamp": "2025-01-02"},
    ])

    assert result.is_right()
    records = result.get_or_else(())
    assert len(records) == 2
    assert all(isinstance(r, Record) for r in records)
    assert records[1].type == "help"


def test_parse_records_empty_list():
    assert parse_records([]) == Right(())


def test_parse_records_rejects_non_object_items():
    result = parse_records([{"Type": "deed"}, "oops"])

    assert result.is_left()
    assert result.get_error()["error"] == "malformed_record"
    assert result.get_error()["index"] == 1


def test_parse_records_rejects_scalars():
    assert parse_records("nope").is_left()
    assert parse_records(None).is_left()
