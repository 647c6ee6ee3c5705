"""Tests for calendar arithmetic."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from rep_calendar.engine.dates import (
    iter_days,
    month_bounds,
    to_date_key,
    week_dates,
    wall_clock,
    week_start,
    weekday_index,
)
from rep_calendar.models.period import YearMonth


class TestToDateKey:
    def test_date(self):
        assert to_date_key(date(2026, 3, 5)) == "2026-03-05"

    def test_late_evening_stays_on_local_day(self):
        # 23:30 at UTC+3 is 20:30 UTC; the key must remain the local day
        dt = datetime(2026, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=3)))
        assert to_date_key(dt) == "2026-03-01"

    def test_early_morning_negative_offset(self):
        dt = datetime(2026, 3, 1, 0, 15, tzinfo=timezone(timedelta(hours=-5)))
        assert to_date_key(dt) == "2026-03-01"

    def test_wall_clock_keeps_local_time(self):
        dt = datetime(2026, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=3)))
        assert wall_clock(dt) == datetime(2026, 3, 1, 23, 30)
        assert wall_clock(datetime(2026, 3, 1, 8)) == datetime(2026, 3, 1, 8)


class TestWeekdayIndex:
    def test_sunday_is_zero(self):
        assert weekday_index(date(2026, 3, 1)) == 0

    def test_saturday_is_six(self):
        assert weekday_index(date(2026, 3, 7)) == 6


class TestWeekStart:
    @pytest.mark.parametrize(
        "reference,expected",
        [
            (date(2026, 3, 7), date(2026, 3, 7)),  # Saturday itself
            (date(2026, 3, 4), date(2026, 2, 28)),  # Wednesday
            (date(2026, 3, 6), date(2026, 2, 28)),  # Friday closes the week
            (date(2026, 3, 8), date(2026, 3, 7)),  # Sunday
        ],
    )
    def test_most_recent_saturday(self, reference, expected):
        assert week_start(reference) == expected

    def test_accepts_datetime(self):
        assert week_start(datetime(2026, 3, 4, 18, 0)) == date(2026, 2, 28)

    def test_week_dates_run_saturday_to_friday(self):
        dates = week_dates(date(2026, 3, 10))
        assert dates[0] == date(2026, 3, 7)
        assert dates[-1] == date(2026, 3, 13)
        assert [weekday_index(d) for d in dates] == [6, 0, 1, 2, 3, 4, 5]


class TestMonthBounds:
    def test_march(self, march):
        assert month_bounds(march) == (date(2026, 3, 1), date(2026, 3, 31))

    def test_leap_february(self):
        assert month_bounds(YearMonth(year=2028, month=2)) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_parse(self):
        ym = YearMonth.parse("2026-11")
        assert (ym.year, ym.month) == (2026, 11)
        assert str(ym) == "2026-11"

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            YearMonth.parse("March")


def test_iter_days_inclusive():
    days = list(iter_days(date(2026, 2, 27), date(2026, 3, 2)))
    assert days == [date(2026, 2, 27), date(2026, 2, 28), date(2026, 3, 1), date(2026, 3, 2)]
