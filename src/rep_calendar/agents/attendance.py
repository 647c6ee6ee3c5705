"""AttendanceAgent - absence workflow and monthly reconciliation."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from rep_calendar.agents.base import BaseAgent
from rep_calendar.engine.dates import month_bounds
from rep_calendar.engine.reconciliation import reconcile
from rep_calendar.errors import InvalidOperation, NotFound
from rep_calendar.models.absence import Absence, AbsenceStatus
from rep_calendar.models.period import YearMonth
from rep_calendar.models.reports import ReconciliationResult
from rep_calendar.models.rep import ActorRole
from rep_calendar.models.settings import SystemSettings
from rep_calendar.models.visit import VisitEvent
from rep_calendar.store.protocols import AbsenceStore

log = logging.getLogger(__name__)

# Roles allowed to enter, review and delete absences
REVIEWER_ROLES = {ActorRole.MANAGER, ActorRole.SUPERVISOR}


class AttendanceAgent(BaseAgent):
    """Owns the absence lifecycle and feeds approved absences to reconciliation."""

    def __init__(self, store: AbsenceStore) -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "attendance"

    def _require(self, absence_id: int) -> Absence:
        absence = self._store.get(absence_id)
        if absence is None:
            raise NotFound(f"Absence {absence_id} not found", absence_id=absence_id)
        return absence

    def request_leave(self, rep_id: int, day: date, reason: str) -> Absence:
        """A rep's own leave request; waits for review."""
        absence = Absence(
            id=self._store.next_id(),
            rep_id=rep_id,
            date=day,
            reason=reason,
            status=AbsenceStatus.PENDING,
        )
        return self._store.add(absence)

    def record_absence(
        self, rep_id: int, day: date, reason: str, role: ActorRole | str
    ) -> Absence:
        """Absence entered directly by a manager; approved immediately."""
        self.require_role(role, REVIEWER_ROLES, "record absences")
        absence = Absence(
            id=self._store.next_id(),
            rep_id=rep_id,
            date=day,
            reason=reason,
            status=AbsenceStatus.APPROVED,
            is_manual_entry=True,
        )
        log.info("Recorded approved absence for rep %s on %s", rep_id, day)
        return self._store.add(absence)

    def review_absence(self, absence_id: int, approve: bool, role: ActorRole | str) -> Absence:
        """Approve or reject a pending leave request."""
        role = self.require_role(role, REVIEWER_ROLES, "review absences")
        absence = self._require(absence_id)
        if absence.status != AbsenceStatus.PENDING:
            raise InvalidOperation(
                f"Absence {absence_id} is already {absence.status.value}",
                absence_id=absence_id,
                status=absence.status.value,
            )
        status = AbsenceStatus.APPROVED if approve else AbsenceStatus.REJECTED
        updated = self._store.update(absence.model_copy(update={"status": status}))
        log.info("Absence %s %s by %s", absence_id, status.value, role.value)
        return updated

    def delete_absence(self, absence_id: int, role: ActorRole | str) -> None:
        self.require_role(role, REVIEWER_ROLES, "delete absences")
        self._store.delete(absence_id)

    def absences_for_month(
        self, rep_id: int, year_month: YearMonth, status: AbsenceStatus | None = None
    ) -> list[Absence]:
        first, last = month_bounds(year_month)
        return self._store.query(rep_id=rep_id, start=first, end=last, status=status)

    def reconcile_month(
        self,
        rep_id: int,
        year_month: YearMonth,
        visits: Iterable[VisitEvent],
        settings: SystemSettings | None,
        today: date,
    ) -> ReconciliationResult:
        approved = self.absences_for_month(rep_id, year_month, AbsenceStatus.APPROVED)
        return reconcile(rep_id, year_month, visits, approved, settings, today)

    def _handle_request_leave(self, payload: dict[str, Any]) -> dict[str, Any]:
        absence = self.request_leave(payload["rep_id"], payload["date"], payload.get("reason", ""))
        return {"absence": absence}

    def _handle_record_absence(self, payload: dict[str, Any]) -> dict[str, Any]:
        absence = self.record_absence(
            payload["rep_id"], payload["date"], payload.get("reason", ""), payload["role"]
        )
        return {"absence": absence}

    def _handle_review_absence(self, payload: dict[str, Any]) -> dict[str, Any]:
        absence = self.review_absence(payload["absence_id"], payload["approve"], payload["role"])
        return {"absence": absence}

    def _handle_reconcile(self, payload: dict[str, Any]) -> dict[str, Any]:
        settings = payload.get("settings")
        if isinstance(settings, dict):
            settings = SystemSettings.model_validate(settings)
        year_month = payload["year_month"]
        if isinstance(year_month, str):
            year_month = YearMonth.parse(year_month)
        result = self.reconcile_month(
            rep_id=payload["rep_id"],
            year_month=year_month,
            visits=payload.get("visits", []),
            settings=settings,
            today=payload["today"],
        )
        return {"reconciliation": result}
