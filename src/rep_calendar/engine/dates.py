"""Calendar arithmetic.

Weekday indices follow the settings convention: 0=Sunday .. 6=Saturday.
The business week starts on Saturday.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from rep_calendar.models.period import YearMonth

SATURDAY = 6
DAYS_PER_WEEK = 7


def as_date(value: date | datetime) -> date:
    """Local calendar day of a date or datetime.

    Aware datetimes keep their own wall-clock date; they are not shifted to UTC.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def wall_clock(value: datetime) -> datetime:
    """Naive wall-clock time of ``value``, dropping any tzinfo without shifting.

    Lets aware and naive timestamps be compared under the same local-day
    convention as :func:`as_date`.
    """
    return value.replace(tzinfo=None)


def to_date_key(value: date | datetime) -> str:
    """Canonical ``YYYY-MM-DD`` join key."""
    return as_date(value).isoformat()


def parse_date_key(key: str) -> date:
    return date.fromisoformat(key)


def weekday_index(value: date | datetime) -> int:
    """Weekday index with Sunday as 0."""
    return as_date(value).isoweekday() % DAYS_PER_WEEK


def week_start(reference: date | datetime) -> date:
    """Most recent Saturday on or before ``reference``."""
    day = as_date(reference)
    days_since_saturday = (weekday_index(day) - SATURDAY) % DAYS_PER_WEEK
    return day - timedelta(days=days_since_saturday)


def week_dates(reference: date | datetime) -> list[date]:
    """The seven dates Saturday..Friday of the business week containing ``reference``."""
    start = week_start(reference)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def month_bounds(year_month: YearMonth) -> tuple[date, date]:
    """First and last day of the month."""
    first = date(year_month.year, year_month.month, 1)
    last = date(year_month.year, year_month.month, year_month.num_days)
    return first, last


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def in_month(value: date | datetime, year_month: YearMonth) -> bool:
    day = as_date(value)
    return day.year == year_month.year and day.month == year_month.month
