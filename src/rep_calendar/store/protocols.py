"""Storage boundary the agents depend on.

Persistence is owned by the surrounding application; these protocols only
name the operations the core needs.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from rep_calendar.models.absence import Absence, AbsenceStatus
from rep_calendar.models.plan import PlanStatus, WeeklyPlan


class PlanStore(Protocol):
    def get(self, rep_id: int) -> WeeklyPlan | None:
        """Stored plan, or None if the rep never saved one."""

    def get_or_default(self, rep_id: int) -> WeeklyPlan:
        """Stored plan, or an empty draft for reps without one."""

    def upsert(self, plan: WeeklyPlan) -> WeeklyPlan: ...

    def list_all(self, status: PlanStatus | None = None) -> list[WeeklyPlan]: ...


class AbsenceStore(Protocol):
    def next_id(self) -> int: ...

    def add(self, absence: Absence) -> Absence: ...

    def get(self, absence_id: int) -> Absence | None: ...

    def update(self, absence: Absence) -> Absence: ...

    def delete(self, absence_id: int) -> None: ...

    def query(
        self,
        rep_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
        status: AbsenceStatus | None = None,
    ) -> list[Absence]: ...
