from datetime import UTC, date, datetime, timedelta, timezone

from sales_agent.app.core.time import day_key, ensure_utc, format_timestamp, later_than, parse_timestamp


def test_parse_timestamp_accepts_z_suffix():
    assert parse_timestamp("2024-01-15T14:00:00Z") == datetime(2024, 1, 15, 14, 0, tzinfo=UTC)


def test_parse_timestamp_converts_offsets_to_utc():
    parsed = parse_timestamp("2024-01-15T14:00:00+02:00")
    assert parsed == datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
    assert parsed.tzinfo == UTC


def test_parse_bare_date_is_midnight_utc():
    assert parse_timestamp("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)
    assert parse_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=UTC)


def test_ensure_utc_treats_naive_values_as_utc():
    assert ensure_utc(datetime(2024, 1, 1, 8, 30)) == datetime(2024, 1, 1, 8, 30, tzinfo=UTC)
    eastern = timezone(timedelta(hours=-5))
    assert ensure_utc(datetime(2024, 1, 1, 8, tzinfo=eastern)).hour == 13
    assert ensure_utc(None) is None


def test_format_timestamp_uses_milliseconds_and_z():
    value = datetime(2024, 1, 15, 14, 0, 0, 123456, tzinfo=UTC)
    assert format_timestamp(value) == "2024-01-15T14:00:00.123Z"


def test_day_key():
    assert day_key(datetime(2024, 3, 9, 23, 59, tzinfo=UTC)) == "2024-03-09"


def test_later_than_is_strictly_after_previous():
    now = datetime(2024, 1, 1, tzinfo=UTC)
    assert later_than(now - timedelta(seconds=1), now) == now
    assert later_than(now, now) > now
    assert later_than(now + timedelta(seconds=5), now) > now + timedelta(seconds=5)
    assert later_than(None, now) == now
