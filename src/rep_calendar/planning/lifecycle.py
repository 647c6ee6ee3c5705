"""Plan lifecycle state machine.

All status changes and their authorization checks go through
:func:`transition`.

    draft/pending/approved/rejected --submit (rep)--> pending
    pending --approve (manager)--> approved
    pending --reject (manager)--> rejected
    approved --revoke (manager)--> draft
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from rep_calendar.errors import InvalidOperation, PermissionDenied
from rep_calendar.models.plan import PlanAction, PlanStatus, WeeklyPlan, normalize_days
from rep_calendar.models.rep import ActorRole
from rep_calendar.planning.window import DEFAULT_WINDOW_DAYS, can_edit_plan

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """One allowed edge of the state machine."""

    sources: frozenset[PlanStatus]
    target: PlanStatus
    roles: frozenset[ActorRole]


_ALL_STATUSES = frozenset(PlanStatus)

TRANSITIONS: dict[PlanAction, Transition] = {
    PlanAction.SUBMIT: Transition(_ALL_STATUSES, PlanStatus.PENDING, frozenset({ActorRole.REP})),
    PlanAction.APPROVE: Transition(
        frozenset({PlanStatus.PENDING}), PlanStatus.APPROVED, frozenset({ActorRole.MANAGER})
    ),
    PlanAction.REJECT: Transition(
        frozenset({PlanStatus.PENDING}), PlanStatus.REJECTED, frozenset({ActorRole.MANAGER})
    ),
    PlanAction.REVOKE: Transition(
        frozenset({PlanStatus.APPROVED}), PlanStatus.DRAFT, frozenset({ActorRole.MANAGER})
    ),
}


def allowed_actions(status: PlanStatus, role: ActorRole) -> list[PlanAction]:
    """Actions ``role`` may take on a plan in ``status``."""
    return [
        action
        for action, edge in TRANSITIONS.items()
        if status in edge.sources and role in edge.roles
    ]


def transition(plan: WeeklyPlan, action: PlanAction | str, role: ActorRole | str) -> WeeklyPlan:
    """Apply ``action`` on behalf of ``role`` and return the updated plan.

    Raises:
        PermissionDenied: ``role`` may not perform ``action``.
        InvalidOperation: ``action`` is unknown or not allowed from the
            plan's current status.
    """
    try:
        action = PlanAction(action)
    except ValueError as exc:
        raise InvalidOperation(f"Unknown plan action: {action}", action=str(action)) from exc
    try:
        role = ActorRole(role)
    except ValueError as exc:
        raise PermissionDenied(f"Unknown role: {role}", role=str(role)) from exc
    edge = TRANSITIONS[action]

    if role not in edge.roles:
        raise PermissionDenied(
            f"Role '{role.value}' may not {action.value} a plan",
            action=action.value,
            role=role.value,
        )
    if plan.status not in edge.sources:
        raise InvalidOperation(
            f"Cannot {action.value} a plan in status '{plan.status.value}'",
            action=action.value,
            status=plan.status.value,
        )

    log.info(
        "Plan of rep %s: %s -> %s (%s by %s)",
        plan.rep_id, plan.status.value, edge.target.value, action.value, role.value,
    )
    return plan.model_copy(update={"status": edge.target}, deep=True)


def submit_plan(
    plan: WeeklyPlan, days: dict[Any, Any] | None, role: ActorRole | str = ActorRole.REP
) -> WeeklyPlan:
    """Replace the plan's content and move it to pending.

    Resubmission overwrites whatever was stored; any review in progress is
    superseded. Malformed content raises InvalidOperation and the plan is
    left untouched.
    """
    try:
        replaced = WeeklyPlan(rep_id=plan.rep_id, days=normalize_days(days), status=plan.status)
    except ValidationError as exc:
        reason = "; ".join(err["msg"] for err in exc.errors())
        raise InvalidOperation(f"Invalid plan content: {reason}", rep_id=plan.rep_id) from exc
    except ValueError as exc:
        raise InvalidOperation(f"Invalid plan content: {exc}", rep_id=plan.rep_id) from exc
    return transition(replaced, PlanAction.SUBMIT, role)


def is_read_only_for_rep(
    plan: WeeklyPlan, now: date | datetime, window_days: int = DEFAULT_WINDOW_DAYS
) -> bool:
    """Approved plans are frozen for the rep outside the planning window."""
    return not can_edit_plan(plan, now, window_days)
