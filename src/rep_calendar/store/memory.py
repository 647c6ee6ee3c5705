"""In-memory stores, for tests and embedding.

Not thread-safe; callers that share a store across threads must serialize
access themselves.
"""

from __future__ import annotations

import itertools
from datetime import date

from rep_calendar.errors import InvalidOperation, NotFound
from rep_calendar.models.absence import Absence, AbsenceStatus
from rep_calendar.models.plan import PlanStatus, WeeklyPlan


class InMemoryPlanStore:
    """One plan row per rep."""

    def __init__(self, plans: list[WeeklyPlan] | None = None) -> None:
        self._plans: dict[int, WeeklyPlan] = {}
        for plan in plans or []:
            self.upsert(plan)

    def get(self, rep_id: int) -> WeeklyPlan | None:
        plan = self._plans.get(rep_id)
        return plan.model_copy(deep=True) if plan is not None else None

    def get_or_default(self, rep_id: int) -> WeeklyPlan:
        return self.get(rep_id) or WeeklyPlan.empty(rep_id)

    def upsert(self, plan: WeeklyPlan) -> WeeklyPlan:
        self._plans[plan.rep_id] = plan.model_copy(deep=True)
        return plan

    def list_all(self, status: PlanStatus | None = None) -> list[WeeklyPlan]:
        return [
            p.model_copy(deep=True)
            for _, p in sorted(self._plans.items())
            if status is None or p.status == status
        ]


class InMemoryAbsenceStore:
    """Absence rows keyed by id.

    Enforces at most one APPROVED absence per (rep, date).
    """

    def __init__(self, absences: list[Absence] | None = None) -> None:
        self._absences: dict[int, Absence] = {}
        self._ids = itertools.count(1)
        for absence in absences or []:
            self.add(absence)

    def next_id(self) -> int:
        while True:
            candidate = next(self._ids)
            if candidate not in self._absences:
                return candidate

    def _check_unique_approved(self, absence: Absence) -> None:
        if not absence.is_approved:
            return
        for other in self._absences.values():
            if (
                other.id != absence.id
                and other.is_approved
                and other.rep_id == absence.rep_id
                and other.date == absence.date
            ):
                raise InvalidOperation(
                    f"Rep {absence.rep_id} already has an approved absence on {absence.date}",
                    rep_id=absence.rep_id,
                    date=absence.date.isoformat(),
                    existing_id=other.id,
                )

    def add(self, absence: Absence) -> Absence:
        if absence.id in self._absences:
            raise InvalidOperation(f"Absence {absence.id} already exists", absence_id=absence.id)
        self._check_unique_approved(absence)
        self._absences[absence.id] = absence.model_copy()
        return absence

    def get(self, absence_id: int) -> Absence | None:
        absence = self._absences.get(absence_id)
        return absence.model_copy() if absence is not None else None

    def update(self, absence: Absence) -> Absence:
        if absence.id not in self._absences:
            raise NotFound(f"Absence {absence.id} not found", absence_id=absence.id)
        self._check_unique_approved(absence)
        self._absences[absence.id] = absence.model_copy()
        return absence

    def delete(self, absence_id: int) -> None:
        if self._absences.pop(absence_id, None) is None:
            raise NotFound(f"Absence {absence_id} not found", absence_id=absence_id)

    def query(
        self,
        rep_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
        status: AbsenceStatus | None = None,
    ) -> list[Absence]:
        rows = [
            a.model_copy()
            for a in self._absences.values()
            if (rep_id is None or a.rep_id == rep_id)
            and (start is None or a.date >= start)
            and (end is None or a.date <= end)
            and (status is None or a.status == status)
        ]
        return sorted(rows, key=lambda a: (a.date, a.id))
