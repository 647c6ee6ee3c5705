"""Read-only weekly calendar view of a plan."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from pydantic import BaseModel

from rep_calendar.engine.dates import as_date, to_date_key, week_dates, weekday_index
from rep_calendar.models.client import Client, ClientKind
from rep_calendar.models.plan import DayPlanEntry, PlanStatus, WeeklyPlan
from rep_calendar.models.settings import SystemSettings
from rep_calendar.models.visit import VisitEvent


class WeekDayView(BaseModel):
    """One date of the business week with its plan entry and calendar flags."""

    date_key: str
    day_index: int
    entry: DayPlanEntry | None = None
    is_weekend: bool = False
    is_holiday: bool = False
    is_today: bool = False

    @property
    def is_day_off(self) -> bool:
        return self.is_weekend or self.is_holiday


class WeekView(BaseModel):
    """Saturday..Friday view of a rep's plan."""

    rep_id: int
    status: PlanStatus
    week_start: str
    week_end: str
    days: list[WeekDayView]


def entry_for_day(plan: WeeklyPlan, day: date | datetime) -> DayPlanEntry | None:
    """Planned region and doctors for the weekday of ``day``."""
    return plan.days.get(weekday_index(day))


def pending_doctors_for_today(
    plan: WeeklyPlan,
    visits: Iterable[VisitEvent],
    doctors: Iterable[Client],
    today: date | datetime,
) -> list[Client]:
    """Doctors planned for ``today`` that the rep has not visited yet today.

    Returned in plan order. Planned ids missing from ``doctors`` are skipped.
    """
    entry = entry_for_day(plan, today)
    if entry is None or not entry.doctor_ids:
        return []

    day = as_date(today)
    visited = {
        v.client_id
        for v in visits
        if v.rep_id == plan.rep_id
        and v.client_kind == ClientKind.DOCTOR
        and v.visit_date == day
    }
    by_id = {d.id: d for d in doctors if d.kind == ClientKind.DOCTOR}
    return [
        by_id[doctor_id]
        for doctor_id in entry.doctor_ids
        if doctor_id not in visited and doctor_id in by_id
    ]


def build_week_view(
    plan: WeeklyPlan,
    reference: date | datetime,
    settings: SystemSettings | None = None,
    today: date | datetime | None = None,
) -> WeekView:
    """Lay the plan over the dates of the week containing ``reference``."""
    settings = settings or SystemSettings()
    today_key = to_date_key(today if today is not None else reference)
    dates = week_dates(reference)

    days = []
    for day in dates:
        index = weekday_index(day)
        key = to_date_key(day)
        days.append(
            WeekDayView(
                date_key=key,
                day_index=index,
                entry=plan.days.get(index),
                is_weekend=settings.is_weekend(index),
                is_holiday=settings.is_holiday(key),
                is_today=key == today_key,
            )
        )

    return WeekView(
        rep_id=plan.rep_id,
        status=plan.status,
        week_start=to_date_key(dates[0]),
        week_end=to_date_key(dates[-1]),
        days=days,
    )
