"""ConductorAgent - assembles the manager's monthly team overview."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from rep_calendar.agents.attendance import AttendanceAgent
from rep_calendar.agents.base import BaseAgent
from rep_calendar.agents.coverage import CoverageAgent
from rep_calendar.agents.planner import PlanAgent
from rep_calendar.models.client import Client
from rep_calendar.models.period import YearMonth
from rep_calendar.models.rep import Rep
from rep_calendar.models.reports import RepMonthlySummary
from rep_calendar.models.settings import EngineConfig, SystemSettings
from rep_calendar.models.visit import VisitEvent
from rep_calendar.store.protocols import AbsenceStore, PlanStore

log = logging.getLogger(__name__)


class ConductorAgent(BaseAgent):
    """Runs planning, attendance and coverage agents for a set of reps.

    Inputs are snapshots fetched by the caller; each rep is computed
    independently of the others.
    """

    def __init__(
        self,
        plan_store: PlanStore,
        absence_store: AbsenceStore,
        config: EngineConfig | None = None,
    ) -> None:
        config = config or EngineConfig()
        self._planner = PlanAgent(plan_store, config)
        self._attendance = AttendanceAgent(absence_store)
        self._coverage = CoverageAgent(config)

    @property
    def name(self) -> str:
        return "conductor"

    def rep_summary(
        self,
        rep: Rep,
        clients: list[Client],
        visits: list[VisitEvent],
        settings: SystemSettings | None,
        year_month: YearMonth,
        now: datetime,
    ) -> RepMonthlySummary:
        today = now.date()
        return RepMonthlySummary(
            rep_id=rep.id,
            rep_name=rep.name,
            plan_status=self._planner.get_plan(rep.id).status.value,
            reconciliation=self._attendance.reconcile_month(
                rep.id, year_month, visits, settings, today
            ),
            frequency=self._coverage.frequency(rep.id, clients, visits, year_month, today),
            overdue_clients=len(self._coverage.alerts_for_rep(rep.id, clients, visits, now)),
            stats=self._coverage.monthly_stats(rep.id, visits, year_month, today),
        )

    def team_summary(
        self,
        reps: list[Rep],
        clients: list[Client],
        visits: list[VisitEvent],
        settings: SystemSettings | None,
        year_month: YearMonth,
        now: datetime,
    ) -> list[RepMonthlySummary]:
        """One summary per rep, in the order given."""
        summaries = [
            self.rep_summary(rep, clients, visits, settings, year_month, now) for rep in reps
        ]
        log.info("Built team summary for %d rep(s), %s", len(summaries), year_month)
        return summaries

    def _handle_team_summary(self, payload: dict[str, Any]) -> dict[str, Any]:
        year_month = payload["year_month"]
        if isinstance(year_month, str):
            year_month = YearMonth.parse(year_month)
        summaries = self.team_summary(
            reps=payload["reps"],
            clients=payload.get("clients", []),
            visits=payload.get("visits", []),
            settings=payload.get("settings"),
            year_month=year_month,
            now=payload["now"],
        )
        return {"summaries": summaries}
