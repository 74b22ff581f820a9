"""Calendar arithmetic shared by the calculators."""

import math
from datetime import date, datetime, time
from typing import Tuple, Union

from montez.errors import ValidationError

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value: DateLike, field: str = "Date") -> Union[date, datetime]:
    """Accept a date, datetime, or ISO 8601 string.

    Strings with a time component parse to datetime, otherwise to date.
    A trailing "Z" is read as UTC.

    Raises:
        ValidationError: If value is not a date or a valid ISO 8601 string
    """
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a date or ISO 8601 string, got {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text)
        return date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"{field} is not a valid ISO 8601 date: {value!r}") from e


def to_date(value: DateLike, field: str = "Date") -> date:
    parsed = parse_date(value, field)
    return parsed.date() if isinstance(parsed, datetime) else parsed


def _as_datetime(value: Union[date, datetime], tzinfo=None) -> datetime:
    """Promote to datetime; naive values take tzinfo when one is given."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if tzinfo is not None and value.tzinfo is None:
        value = value.replace(tzinfo=tzinfo)
    return value


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from start to end, rounding partial days up.

    Negative when end is before start. When only one side carries a
    timezone, the other is read in that same timezone.
    """
    start, end = parse_date(start, "Start date"), parse_date(end, "End date")
    if isinstance(start, datetime) or isinstance(end, datetime):
        tzinfo = getattr(start, "tzinfo", None) or getattr(end, "tzinfo", None)
        delta = _as_datetime(end, tzinfo) - _as_datetime(start, tzinfo)
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
    return (end - start).days


def now_like(reference: Union[date, datetime]) -> Union[date, datetime]:
    """Current instant for datetime references, today's date for plain dates.

    Aware references get an aware now in their own timezone.
    """
    if isinstance(reference, datetime):
        return datetime.now(tz=reference.tzinfo)
    return date.today()


def months_between(start: DateLike, end: DateLike) -> int:
    """Calendar month difference (ignores the day of month)."""
    start, end = to_date(start), to_date(end)
    return (end.year - start.year) * 12 + (end.month - start.month)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset months."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_month(value: str) -> Tuple[int, int]:
    """Parse "YYYY-MM" into (year, month).

    Raises:
        ValueError: If value is not a valid month label
    """
    try:
        year_str, month_str = value.strip().split("-")[:2]
        year, month = int(year_str), int(month_str)
    except ValueError as e:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM") from e
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    return year, month
