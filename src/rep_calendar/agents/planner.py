"""PlanAgent - weekly plan storage, submission and review."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable

from rep_calendar.agents.base import BaseAgent
from rep_calendar.errors import InvalidOperation, NotFound
from rep_calendar.models.client import Client
from rep_calendar.models.plan import PlanAction, PlanStatus, WeeklyPlan
from rep_calendar.models.rep import ActorRole
from rep_calendar.models.settings import EngineConfig, SystemSettings
from rep_calendar.models.visit import VisitEvent
from rep_calendar.planning.lifecycle import is_read_only_for_rep, submit_plan, transition
from rep_calendar.planning.weekly_view import (
    WeekView,
    build_week_view,
    pending_doctors_for_today,
)
from rep_calendar.planning.window import PlanView, plan_week_start, resolve_plan_view
from rep_calendar.store.protocols import PlanStore

log = logging.getLogger(__name__)

_REVIEW_ACTIONS = {PlanAction.APPROVE, PlanAction.REJECT}


class PlanAgent(BaseAgent):
    """Reads and writes plans through a PlanStore, routing status changes
    through the lifecycle state machine."""

    def __init__(self, store: PlanStore, config: EngineConfig | None = None) -> None:
        self._store = store
        self._config = config or EngineConfig()

    @property
    def name(self) -> str:
        return "planner"

    def get_plan(self, rep_id: int) -> WeeklyPlan:
        return self._store.get_or_default(rep_id)

    def _require_plan(self, rep_id: int) -> WeeklyPlan:
        plan = self._store.get(rep_id)
        if plan is None:
            raise NotFound(f"No plan stored for rep {rep_id}", rep_id=rep_id)
        return plan

    def submit(
        self,
        rep_id: int | None,
        days: dict[Any, Any] | None,
        role: ActorRole | str = ActorRole.REP,
        now: date | datetime | None = None,
    ) -> WeeklyPlan:
        """Store the rep's plan content and mark it pending (last write wins).

        When ``now`` is given, an approved plan outside the planning window
        is read-only and the submission is refused.
        """
        if rep_id is None:
            raise InvalidOperation("Cannot submit a plan without a rep id")
        current = self.get_plan(rep_id)
        if now is not None and is_read_only_for_rep(
            current, now, self._config.planning_window_days
        ):
            raise InvalidOperation(
                "Approved plans can only be changed during the planning window",
                rep_id=rep_id,
            )
        plan = submit_plan(current, days, role)
        planned = sum(entry is not None for entry in plan.days.values())
        log.info("Rep %s submitted a plan covering %d day(s)", rep_id, planned)
        return self._store.upsert(plan)

    def review(self, rep_id: int, decision: PlanAction | str, role: ActorRole | str) -> WeeklyPlan:
        """Approve or reject a pending plan."""
        try:
            decision = PlanAction(decision)
        except ValueError as exc:
            raise InvalidOperation(f"Unknown review decision: {decision}") from exc
        if decision not in _REVIEW_ACTIONS:
            raise InvalidOperation(
                f"Review decision must be approve or reject, got {decision.value}"
            )
        plan = transition(self._require_plan(rep_id), decision, role)
        return self._store.upsert(plan)

    def revoke(self, rep_id: int, role: ActorRole | str) -> WeeklyPlan:
        """Send an approved plan back to draft."""
        plan = transition(self._require_plan(rep_id), PlanAction.REVOKE, role)
        return self._store.upsert(plan)

    def pending_plans(self) -> list[WeeklyPlan]:
        """Review queue for managers."""
        return self._store.list_all(PlanStatus.PENDING)

    def plan_view(self, rep_id: int, now: date | datetime) -> PlanView:
        return resolve_plan_view(self.get_plan(rep_id), now, self._config.planning_window_days)

    def plan_week_start(self, now: date | datetime) -> date:
        return plan_week_start(now, self._config.planning_window_days)

    def week_view(
        self,
        rep_id: int,
        reference: date | datetime,
        settings: SystemSettings | None = None,
        today: date | datetime | None = None,
    ) -> WeekView:
        return build_week_view(self.get_plan(rep_id), reference, settings, today)

    def pending_doctors(
        self,
        rep_id: int,
        clients: Iterable[Client],
        visits: Iterable[VisitEvent],
        today: date | datetime,
    ) -> list[Client]:
        """Today's planned doctors still waiting for a visit."""
        return pending_doctors_for_today(self.get_plan(rep_id), visits, clients, today)

    def _handle_get_plan(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"plan": self.get_plan(payload["rep_id"])}

    def _handle_submit(self, payload: dict[str, Any]) -> dict[str, Any]:
        plan = self.submit(
            payload.get("rep_id"),
            payload.get("days"),
            payload.get("role", ActorRole.REP),
            payload.get("now"),
        )
        return {"plan": plan}

    def _handle_review(self, payload: dict[str, Any]) -> dict[str, Any]:
        plan = self.review(payload["rep_id"], payload["decision"], payload["role"])
        return {"plan": plan}

    def _handle_revoke(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"plan": self.revoke(payload["rep_id"], payload["role"])}

    def _handle_pending_plans(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"plans": self.pending_plans()}

    def _handle_pending_doctors(self, payload: dict[str, Any]) -> dict[str, Any]:
        doctors = self.pending_doctors(
            payload["rep_id"], payload["clients"], payload["visits"], payload["today"]
        )
        return {"doctors": doctors}
