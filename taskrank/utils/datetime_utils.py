"""Date and time utilities."""

from datetime import date, datetime, timezone
from typing import Optional, Union

SECONDS_PER_DAY = 24 * 3600


def start_of_day(day: Union[date, datetime]) -> datetime:
    """Return midnight of the given date."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, datetime.min.time())


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative when end is earlier)."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 string (or date) into a naive datetime.

    Values carrying an offset are converted to UTC before the offset is dropped,
    so two spellings of the same instant parse to the same datetime.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return start_of_day(value)
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Invalid datetime: {value!r}")
    return to_naive_utc(parsed)
