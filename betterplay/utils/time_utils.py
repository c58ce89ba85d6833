"""Time-of-day and calendar-date helpers.

Venues enter operating hours in whatever shape their staff type them
("9:00 AM", "21:30"), while slots and bookings are always stored as
zero-padded 24-hour "HH:MM" strings so they sort lexicographically.
"""
import re
from collections import namedtuple
from datetime import date, datetime, timedelta

from betterplay.errors import ParseError, ValidationError

TimeOfDay = namedtuple('TimeOfDay', ['hour', 'minute'])

_TIME_OF_DAY_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*(AM|PM)?\s*$', re.IGNORECASE)
_STRICT_24H_RE = re.compile(r'^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$')
_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_time_of_day(value: str) -> TimeOfDay:
    """Parse "HH:MM" (24-hour) or "H:MM AM/PM" into a TimeOfDay.

    Raises ParseError for anything else, including out-of-range hours and
    12-hour values outside 1..12.
    """
    if not isinstance(value, str):
        raise ParseError(f"Invalid time of day: {value!r}")

    match = _TIME_OF_DAY_RE.match(value)
    if not match:
        raise ParseError(f"Invalid time of day: {value!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    period = match.group(3)

    if minute > 59:
        raise ParseError(f"Invalid minute in {value!r}")

    if period:
        if hour < 1 or hour > 12:
            raise ParseError(f"Invalid 12-hour time {value!r}")
        period = period.upper()
        if period == 'PM' and hour != 12:
            hour += 12
        elif period == 'AM' and hour == 12:
            hour = 0
    elif hour > 23:
        raise ParseError(f"Invalid hour in {value!r}")

    return TimeOfDay(hour, minute)


def to_minutes(value: str) -> int:
    parsed = parse_time_of_day(value)
    return parsed.hour * 60 + parsed.minute


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_24h_time(value) -> bool:
    return isinstance(value, str) and bool(_STRICT_24H_RE.match(value))


def normalize_24h_time(value, field='time') -> str:
    """Validate a strict 24-hour "H:MM"/"HH:MM" value and zero-pad it."""
    if not is_24h_time(value):
        raise ValidationError(f"Invalid {field} format. Use HH:MM (24-hour)")
    return format_minutes(to_minutes(value))


def parse_date(value, field='date') -> date:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}")


def date_range(start: date, end: date):
    """Every calendar date in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def weekday_name(day: date) -> str:
    return day.strftime('%A').lower()
