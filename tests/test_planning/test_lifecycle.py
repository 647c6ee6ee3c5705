"""Tests for the plan lifecycle state machine."""

from __future__ import annotations

from datetime import date

import pytest

from rep_calendar.errors import ErrorKind, InvalidOperation, PermissionDenied
from rep_calendar.models.plan import DayPlanEntry, PlanAction, PlanStatus, WeeklyPlan
from rep_calendar.models.rep import ActorRole
from rep_calendar.planning.lifecycle import (
    allowed_actions,
    is_read_only_for_rep,
    submit_plan,
    transition,
)

WEDNESDAY = date(2026, 3, 4)
THURSDAY = date(2026, 3, 5)


def _plan(status: PlanStatus) -> WeeklyPlan:
    return WeeklyPlan(rep_id=1, days={6: DayPlanEntry(region_id=10, doctor_ids=[1])}, status=status)


class TestTransitions:
    @pytest.mark.parametrize("status", list(PlanStatus))
    def test_submit_from_any_status(self, status):
        plan = transition(_plan(status), PlanAction.SUBMIT, ActorRole.REP)
        assert plan.status == PlanStatus.PENDING

    def test_manager_approves_pending(self):
        plan = transition(_plan(PlanStatus.PENDING), PlanAction.APPROVE, ActorRole.MANAGER)
        assert plan.status == PlanStatus.APPROVED

    def test_manager_rejects_pending(self):
        plan = transition(_plan(PlanStatus.PENDING), "reject", "manager")
        assert plan.status == PlanStatus.REJECTED

    def test_manager_revokes_approved(self):
        plan = transition(_plan(PlanStatus.APPROVED), PlanAction.REVOKE, ActorRole.MANAGER)
        assert plan.status == PlanStatus.DRAFT
        assert plan.days[6].doctor_ids == [1]

    @pytest.mark.parametrize("role", [ActorRole.REP, ActorRole.SUPERVISOR])
    def test_only_manager_may_revoke(self, role):
        plan = _plan(PlanStatus.APPROVED)
        with pytest.raises(PermissionDenied) as exc_info:
            transition(plan, PlanAction.REVOKE, role)
        assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED
        assert plan.status == PlanStatus.APPROVED

    @pytest.mark.parametrize("action", [PlanAction.APPROVE, PlanAction.REJECT])
    def test_rep_cannot_review(self, action):
        with pytest.raises(PermissionDenied):
            transition(_plan(PlanStatus.PENDING), action, ActorRole.REP)

    def test_manager_cannot_submit_for_rep(self):
        with pytest.raises(PermissionDenied):
            transition(_plan(PlanStatus.DRAFT), PlanAction.SUBMIT, ActorRole.MANAGER)

    @pytest.mark.parametrize(
        "status,action",
        [
            (PlanStatus.DRAFT, PlanAction.APPROVE),
            (PlanStatus.REJECTED, PlanAction.REJECT),
            (PlanStatus.APPROVED, PlanAction.APPROVE),
            (PlanStatus.PENDING, PlanAction.REVOKE),
        ],
    )
    def test_wrong_source_state(self, status, action):
        with pytest.raises(InvalidOperation) as exc_info:
            transition(_plan(status), action, ActorRole.MANAGER)
        assert exc_info.value.to_dict()["context"]["status"] == status.value

    def test_unknown_action(self):
        with pytest.raises(InvalidOperation):
            transition(_plan(PlanStatus.DRAFT), "archive", ActorRole.MANAGER)

    def test_unknown_role(self):
        with pytest.raises(PermissionDenied):
            transition(_plan(PlanStatus.PENDING), PlanAction.APPROVE, "admin")

    def test_input_plan_unchanged(self):
        plan = _plan(PlanStatus.PENDING)
        transition(plan, PlanAction.APPROVE, ActorRole.MANAGER)
        assert plan.status == PlanStatus.PENDING


class TestAllowedActions:
    def test_manager_on_pending(self):
        assert allowed_actions(PlanStatus.PENDING, ActorRole.MANAGER) == [
            PlanAction.APPROVE,
            PlanAction.REJECT,
        ]

    def test_supervisor_on_approved(self):
        assert allowed_actions(PlanStatus.APPROVED, ActorRole.SUPERVISOR) == []

    def test_rep_on_rejected(self):
        assert allowed_actions(PlanStatus.REJECTED, ActorRole.REP) == [PlanAction.SUBMIT]


class TestSubmitPlan:
    def test_overwrites_content_and_resets_review(self):
        plan = submit_plan(_plan(PlanStatus.REJECTED), {0: {"region_id": 20, "doctor_ids": [4]}})
        assert plan.status == PlanStatus.PENDING
        assert plan.days[6] is None
        assert plan.days[0] == DayPlanEntry(region_id=20, doctor_ids=[4])

    def test_empty_submission(self):
        plan = submit_plan(_plan(PlanStatus.DRAFT), None)
        assert all(entry is None for entry in plan.days.values())

    @pytest.mark.parametrize(
        "days",
        [
            {1: {"region_id": 10, "doctor_ids": [2]}, 2: {"region_id": 20, "doctor_ids": [2]}},
            {7: {"region_id": 10}},
            {"monday": {"region_id": 10}},
            {0: {"doctor_ids": [1]}},
        ],
    )
    def test_malformed_content_is_invalid_operation(self, days):
        with pytest.raises(InvalidOperation) as info:
            submit_plan(_plan(PlanStatus.DRAFT), days)
        assert info.value.kind == ErrorKind.INVALID_OPERATION
        assert info.value.context == {"rep_id": 1}


class TestReadOnly:
    def test_approved_outside_window_is_read_only(self):
        assert is_read_only_for_rep(_plan(PlanStatus.APPROVED), WEDNESDAY)

    def test_approved_inside_window_is_editable(self):
        assert not is_read_only_for_rep(_plan(PlanStatus.APPROVED), THURSDAY)

    @pytest.mark.parametrize("status", [PlanStatus.DRAFT, PlanStatus.PENDING, PlanStatus.REJECTED])
    def test_non_approved_always_editable(self, status):
        assert not is_read_only_for_rep(_plan(status), WEDNESDAY)
