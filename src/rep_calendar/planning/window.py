"""Planning window: when reps may lay out next week's plan."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum

from rep_calendar.engine.dates import DAYS_PER_WEEK, as_date, week_start
from rep_calendar.models.plan import PlanStatus, WeeklyPlan

DEFAULT_WINDOW_DAYS = 2


class PlanView(str, Enum):
    """Which screen a rep lands on when opening their plan."""

    EDITOR = "editor"
    WEEKLY = "weekly"


def days_until_next_week(now: date | datetime) -> int:
    """Days from ``now`` to the next week start (1..7)."""
    today = as_date(now)
    return (week_start(today) + timedelta(days=DAYS_PER_WEEK) - today).days


def is_planning_window(now: date | datetime, window_days: int = DEFAULT_WINDOW_DAYS) -> bool:
    """True on the last ``window_days`` days of the business week (Thursday and Friday)."""
    return days_until_next_week(now) <= window_days


def plan_week_start(now: date | datetime, window_days: int = DEFAULT_WINDOW_DAYS) -> date:
    """Start of the week a plan made at ``now`` applies to.

    Inside the planning window that is the coming Saturday; otherwise the
    current week.
    """
    today = as_date(now)
    if is_planning_window(today, window_days):
        return today + timedelta(days=days_until_next_week(today))
    return week_start(today)


def can_edit_plan(
    plan: WeeklyPlan | None, now: date | datetime, window_days: int = DEFAULT_WINDOW_DAYS
) -> bool:
    """Non-approved plans are always editable; approved ones only inside the window."""
    if plan is None or plan.status != PlanStatus.APPROVED:
        return True
    return is_planning_window(now, window_days)


def resolve_plan_view(
    plan: WeeklyPlan | None, now: date | datetime, window_days: int = DEFAULT_WINDOW_DAYS
) -> PlanView:
    if can_edit_plan(plan, now, window_days):
        return PlanView.EDITOR
    return PlanView.WEEKLY
