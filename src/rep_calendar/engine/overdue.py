"""Overdue visit detection."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from rep_calendar.engine.dates import wall_clock
from rep_calendar.models.client import Client
from rep_calendar.models.reports import ClientAlert
from rep_calendar.models.visit import VisitEvent

DEFAULT_THRESHOLD_DAYS = 10
ONE_DAY = timedelta(days=1)


def last_visits(visits: Iterable[VisitEvent]) -> dict[str, datetime]:
    """Latest visit timestamp per client key, across all time."""
    latest: dict[str, datetime] = {}
    for visit in visits:
        current = latest.get(visit.client_key)
        if current is None or wall_clock(visit.occurred_at) > wall_clock(current):
            latest[visit.client_key] = visit.occurred_at
    return latest


def days_since(last: datetime | None, now: datetime) -> int | None:
    """Whole days elapsed since ``last`` (floored), or None if never visited.

    Both timestamps are compared on their wall-clock time, so aware and naive
    values can be mixed.
    """
    if last is None:
        return None
    return (wall_clock(now) - wall_clock(last)) // ONE_DAY


def is_overdue(days: int | None, threshold_days: int = DEFAULT_THRESHOLD_DAYS) -> bool:
    return days is None or days > threshold_days


def detect_overdue(
    clients: Iterable[Client],
    visits: Iterable[VisitEvent],
    now: datetime,
    threshold_days: int = DEFAULT_THRESHOLD_DAYS,
) -> list[ClientAlert]:
    """Flag clients never visited or not visited for more than ``threshold_days``.

    Alerts are ordered never-visited first, then by days since last visit
    descending, then by name.
    """
    latest = last_visits(visits)
    alerts: list[ClientAlert] = []
    for client in clients:
        last = latest.get(client.key)
        days = days_since(last, now)
        if not is_overdue(days, threshold_days):
            continue
        alerts.append(
            ClientAlert(
                client_key=client.key,
                client_id=client.id,
                name=client.name,
                kind=client.kind,
                rep_id=client.rep_id,
                region_id=client.region_id,
                days_since_last_visit=days,
                last_visit_at=last,
            )
        )

    alerts.sort(
        key=lambda a: (
            a.days_since_last_visit is not None,
            -(a.days_since_last_visit or 0),
            a.name,
        )
    )
    return alerts
