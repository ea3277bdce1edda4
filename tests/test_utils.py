import pytest

from quizdesk.utils import format_countdown, json_dump, json_load, ndjson_dump, parse_iso_timestamp, validate_id


def test_json_round_trip() -> None:
    payload = {"message": "привет", "count": 2}
    dumped = json_dump(payload)
    assert "привет" in dumped
    assert json_load(dumped) == payload
    assert ndjson_dump(payload) == '{"message":"привет","count":2}'


def test_parse_iso_timestamp_accepts_zulu() -> None:
    parsed = parse_iso_timestamp("2030-01-01T09:00:00Z")
    assert parsed is not None
    assert parsed.utcoffset().total_seconds() == 0
    assert parse_iso_timestamp("not a date") is None
    assert parse_iso_timestamp(None) is None


@pytest.mark.parametrize(("seconds", "expected"), [(0, "0:00"), (59, "0:59"), (60, "1:00"), (605, "10:05"), (-3, "0:00")])
def test_format_countdown(seconds, expected) -> None:
    assert format_countdown(seconds) == expected


def test_validate_id() -> None:
    assert validate_id("quizId", " abc ") == "abc"
    with pytest.raises(ValueError):
        validate_id("quizId", "")
    with pytest.raises(ValueError):
        validate_id("quizId", "../etc")
