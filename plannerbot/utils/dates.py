"""Calendar-day helpers shared by the recurrence engine and the calendar view."""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta, tzinfo
from typing import Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]

# Python weekday indexes (monday=0 .. sunday=6)
WEEKDAYS: dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def to_day(value: DateLike, tz: tzinfo | None = None) -> date:
    """Reduce a date-like value to a calendar day.

    Aware datetimes are converted to ``tz`` first (when given) so the day
    matches what a user in that zone sees. Naive datetimes keep their
    wall-clock date.

    Raises:
        ValueError: If a string cannot be parsed as ISO 8601
        TypeError: If the value is not date-like
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            value = isoparse(text)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Unable to parse date: {text!r}") from e

    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def day_key(day: date | datetime) -> str:
    """Canonical ``YYYY-MM-DD`` key for a calendar day."""
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clip_day(year: int, month: int, day: int) -> date:
    """Build a date, clipping ``day`` to the last day of the month (Feb 30 -> Feb 28/29)."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def add_months(day: date, months: int) -> date:
    """Add calendar months, clipping to the end of shorter months."""
    return day + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def start_of_week(day: date, week_starts_on: int = WEEKDAYS["sunday"]) -> date:
    """First day of the week containing ``day``.

    Args:
        day: Any day in the week
        week_starts_on: Python weekday index of the first day of the week
    """
    return day - timedelta(days=(day.weekday() - week_starts_on) % 7)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
