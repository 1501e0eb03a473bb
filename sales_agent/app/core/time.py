"""Time utilities for timezone-aware UTC datetimes."""

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and update hooks."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values (SQLite drops tzinfo) and normalise aware ones."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    A bare date means midnight UTC of that day.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" not in text and " " not in text:
        return datetime.combine(date.fromisoformat(text), time.min, tzinfo=UTC)
    return ensure_utc(datetime.fromisoformat(text))


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 with millisecond precision and a Z suffix."""
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def day_key(value: datetime) -> str:
    """Return the YYYY-MM-DD portion of a timestamp (UTC)."""
    return ensure_utc(value).date().isoformat()


def later_than(previous: datetime | None, now: datetime | None = None) -> datetime:
    """Return "now", nudged forward if needed so it is strictly after ``previous``."""
    now = now or utc_now()
    previous = ensure_utc(previous)
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
