from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterator

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def time_to_minutes(value: str) -> int:
    """Convert an `HH:MM` (or `H:MM`) string to minutes since midnight."""
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to a zero-padded `HH:MM` string."""
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise ValueError(f"Minute offset {minutes} is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: str) -> str:
    return minutes_to_time(time_to_minutes(value))


def add_minutes(value: str, minutes: int) -> int:
    """Add a duration to an `HH:MM` time. Plain addition, no day rollover."""
    return time_to_minutes(value) + minutes


def parse_iso_date(value: str) -> date:
    value = value.strip()
    if not _DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def combine(day: date, hhmm: str, tzinfo=None) -> datetime:
    minutes = time_to_minutes(hhmm)
    return datetime.combine(day, datetime.min.time(), tzinfo=tzinfo) + timedelta(minutes=minutes)
