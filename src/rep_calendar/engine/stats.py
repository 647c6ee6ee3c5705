"""Visit activity statistics for dashboards."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from rep_calendar.engine.dates import month_bounds, to_date_key
from rep_calendar.errors import InvalidOperation
from rep_calendar.models.client import ClientKind
from rep_calendar.models.period import YearMonth
from rep_calendar.models.reports import VisitStats
from rep_calendar.models.visit import VisitEvent

DEFAULT_DAILY_TARGET = 12


def visit_stats(rep_id: int, visits: Iterable[VisitEvent], start: date, end: date) -> VisitStats:
    """Visit counts for a rep between ``start`` and ``end`` inclusive.

    ``visits_per_active_day`` divides by the number of distinct days with at
    least one visit, not by calendar working days.
    """
    doctor_visits = 0
    pharmacy_visits = 0
    active: set[str] = set()

    for visit in visits:
        if visit.rep_id != rep_id or not start <= visit.visit_date <= end:
            continue
        active.add(to_date_key(visit.visit_date))
        if visit.client_kind == ClientKind.DOCTOR:
            doctor_visits += 1
        else:
            pharmacy_visits += 1

    total = doctor_visits + pharmacy_visits
    return VisitStats(
        doctor_visits=doctor_visits,
        pharmacy_visits=pharmacy_visits,
        total_visits=total,
        active_days=len(active),
        visits_per_active_day=total / len(active) if active else 0.0,
    )


def monthly_visit_stats(
    rep_id: int, visits: Iterable[VisitEvent], year_month: YearMonth, today: date
) -> VisitStats:
    """Month-to-date stats (first of the month through ``today``)."""
    first, last = month_bounds(year_month)
    return visit_stats(rep_id, visits, first, min(last, today))


def daily_visit_stats(
    rep_id: int,
    visits: Iterable[VisitEvent],
    day: date,
    target: int = DEFAULT_DAILY_TARGET,
) -> VisitStats:
    """Stats for one day, with progress toward the daily visit target."""
    if target < 1:
        raise InvalidOperation(f"Daily target must be positive, got {target}", target=target)
    stats = visit_stats(rep_id, visits, day, day)
    progress = min(stats.total_visits / target, 1.0)
    return stats.model_copy(update={"daily_target": target, "target_progress": progress})
