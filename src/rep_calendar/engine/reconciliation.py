"""Attendance reconciliation.

Classifies each elapsed day of a month for one rep as skipped, worked or
absent. Precedence per day:

1. an approved absence (counted absent even on weekends and holidays)
2. a configured weekend weekday or holiday (skipped)
3. a working day: worked when any visit exists, otherwise auto-absent
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

import numpy as np

from rep_calendar.engine.dates import iter_days, month_bounds, to_date_key, weekday_index
from rep_calendar.models.absence import Absence
from rep_calendar.models.period import YearMonth
from rep_calendar.models.reports import (
    AUTO_ABSENCE_REASON,
    AbsenceDetail,
    DayStatus,
    ReconciliationResult,
)
from rep_calendar.models.settings import SystemSettings
from rep_calendar.models.visit import VisitEvent

log = logging.getLogger(__name__)

# Day codes used while walking the month
SKIPPED = 0
WORKED = 1
AUTO_ABSENT = 2
APPROVED_ABSENT = 3

_CODE_TO_STATUS = {
    SKIPPED: DayStatus.SKIPPED,
    WORKED: DayStatus.WORKED,
    AUTO_ABSENT: DayStatus.ABSENT,
    APPROVED_ABSENT: DayStatus.ABSENT,
}


def _approved_absences_by_day(
    rep_id: int, absences: Iterable[Absence], first: date, last: date
) -> dict[str, Absence]:
    by_day: dict[str, Absence] = {}
    for absence in sorted(absences, key=lambda a: a.id):
        if absence.rep_id != rep_id or not absence.is_approved:
            continue
        if not first <= absence.date <= last:
            continue
        key = to_date_key(absence.date)
        if key in by_day:
            log.warning(
                "Rep %s has more than one approved absence on %s (ids %s, %s); using %s",
                rep_id, key, by_day[key].id, absence.id, by_day[key].id,
            )
            continue
        by_day[key] = absence
    return by_day


def _visit_days(rep_id: int, visits: Iterable[VisitEvent], first: date, last: date) -> set[str]:
    return {
        to_date_key(v.visit_date)
        for v in visits
        if v.rep_id == rep_id and first <= v.visit_date <= last
    }


def reconcile(
    rep_id: int,
    year_month: YearMonth,
    visits: Iterable[VisitEvent],
    absences: Iterable[Absence],
    settings: SystemSettings | None,
    today: date,
) -> ReconciliationResult:
    """Reconcile one rep's attendance for a month up to ``today``.

    Args:
        rep_id: Rep to reconcile.
        year_month: Month to walk.
        visits: Visit feed; other reps' visits are ignored.
        absences: Absence feed; only this rep's APPROVED absences count.
        settings: Weekend and holiday settings. ``None`` means no days off.
        today: Last day that may be classified.

    Returns:
        ReconciliationResult. Approved-absence days count toward
        ``absent_days`` only, never toward ``working_days_elapsed``.
    """
    settings = settings or SystemSettings()
    first, last = month_bounds(year_month)
    end = min(last, today)

    if end < first:
        return ReconciliationResult(rep_id=rep_id, period=year_month)

    approved = _approved_absences_by_day(rep_id, absences, first, end)
    evidence = _visit_days(rep_id, visits, first, end)

    days = list(iter_days(first, end))
    codes = np.full(len(days), SKIPPED, dtype=np.int8)
    details: list[AbsenceDetail] = []

    for i, day in enumerate(days):
        key = to_date_key(day)
        absence = approved.get(key)
        if absence is not None:
            codes[i] = APPROVED_ABSENT
            details.append(
                AbsenceDetail(
                    date=key,
                    reason=absence.reason,
                    is_manual=True,
                    source_absence_id=absence.id,
                )
            )
        elif settings.is_weekend(weekday_index(day)) or settings.is_holiday(key):
            codes[i] = SKIPPED
        elif key in evidence:
            codes[i] = WORKED
        else:
            codes[i] = AUTO_ABSENT
            details.append(AbsenceDetail(date=key, reason=AUTO_ABSENCE_REASON, is_manual=False))

    worked = int(np.count_nonzero(codes == WORKED))
    auto_absent = int(np.count_nonzero(codes == AUTO_ABSENT))

    result = ReconciliationResult(
        rep_id=rep_id,
        period=year_month,
        working_days_elapsed=worked + auto_absent,
        days_worked=worked,
        absent_days=len(details),
        absence_detail=details,
        day_statuses={
            to_date_key(day): _CODE_TO_STATUS[int(code)] for day, code in zip(days, codes)
        },
    )
    log.debug(
        "Reconciled rep %s for %s: elapsed=%d worked=%d absent=%d",
        rep_id, year_month, result.working_days_elapsed, result.days_worked, result.absent_days,
    )
    return result
