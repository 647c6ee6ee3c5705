"""Edit operations on a weekly plan.

Every operation returns a new WeeklyPlan and leaves its input untouched.
Edits that would break the plan's invariants are silent no-ops.
"""

from __future__ import annotations

import logging
from typing import Mapping

from rep_calendar.errors import InvalidOperation
from rep_calendar.models.client import Client
from rep_calendar.models.plan import WEEKDAY_INDICES, DayPlanEntry, WeeklyPlan

log = logging.getLogger(__name__)


def _check_day(day_index: int) -> None:
    if day_index not in WEEKDAY_INDICES:
        raise InvalidOperation(
            f"Day index must be within 0..6, got {day_index}", day_index=day_index
        )


def _with_day(plan: WeeklyPlan, day_index: int, entry: DayPlanEntry | None) -> WeeklyPlan:
    days = {i: (e.model_copy(deep=True) if e is not None else None) for i, e in plan.days.items()}
    days[day_index] = entry
    return WeeklyPlan(rep_id=plan.rep_id, days=days, status=plan.status)


def set_day_region(plan: WeeklyPlan, day_index: int, region_id: int | None) -> WeeklyPlan:
    """Choose the region for a day.

    ``None`` turns the day into a rest day. Switching to a different region
    clears the day's doctors; reselecting the same region keeps them.
    """
    _check_day(day_index)
    current = plan.days[day_index]

    if region_id is None:
        return _with_day(plan, day_index, None)
    if current is not None and current.region_id == region_id:
        return _with_day(plan, day_index, current.model_copy(deep=True))
    return _with_day(plan, day_index, DayPlanEntry(region_id=region_id))


def add_doctor_to_day(
    plan: WeeklyPlan,
    day_index: int,
    doctor_id: int,
    doctors: Mapping[int, Client] | None = None,
) -> WeeklyPlan:
    """Book a doctor on a day.

    No-op when the doctor is already booked on any day of the plan. When the
    day has no region yet, the region is taken from the doctor's home region
    in ``doctors``; an unknown doctor then leaves the plan unchanged.
    """
    _check_day(day_index)

    booked_on = plan.day_of_doctor(doctor_id)
    if booked_on is not None:
        log.debug("Doctor %s already booked on day %s; ignoring", doctor_id, booked_on)
        return plan.model_copy(deep=True)

    current = plan.days[day_index]
    if current is None:
        doctor = (doctors or {}).get(doctor_id)
        if doctor is None:
            log.debug("Cannot infer region for unknown doctor %s; ignoring", doctor_id)
            return plan.model_copy(deep=True)
        entry = DayPlanEntry(region_id=doctor.region_id, doctor_ids=[doctor_id])
        return _with_day(plan, day_index, entry)

    entry = DayPlanEntry(region_id=current.region_id, doctor_ids=[*current.doctor_ids, doctor_id])
    return _with_day(plan, day_index, entry)


def remove_doctor_from_day(plan: WeeklyPlan, day_index: int, doctor_id: int) -> WeeklyPlan:
    """Unbook a doctor; the day keeps its region even if no doctors remain."""
    _check_day(day_index)
    current = plan.days[day_index]
    if current is None or doctor_id not in current.doctor_ids:
        return plan.model_copy(deep=True)
    entry = DayPlanEntry(
        region_id=current.region_id,
        doctor_ids=[d for d in current.doctor_ids if d != doctor_id],
    )
    return _with_day(plan, day_index, entry)


def clear_plan(plan: WeeklyPlan) -> WeeklyPlan:
    """Reset every day to a rest day; status is kept."""
    return WeeklyPlan(rep_id=plan.rep_id, status=plan.status)
