"""Tests for ConductorAgent (team overview)."""

from __future__ import annotations

from datetime import date, datetime

from rep_calendar.agents.attendance import AttendanceAgent
from rep_calendar.agents.conductor import ConductorAgent
from rep_calendar.agents.planner import PlanAgent
from rep_calendar.models.rep import ActorRole

NOW = datetime(2026, 3, 10, 18, 0)


class TestConductorAgent:
    def test_team_summary(
        self, plan_store, absence_store, reps, roster, fri_sat_weekend, march, make_visit
    ):
        PlanAgent(plan_store).submit(1, {6: {"region_id": 10, "doctor_ids": [1]}})
        visits = [
            make_visit(date(2026, 3, 2), client_id=1),
            make_visit(date(2026, 3, 3), client_id=2),
            make_visit(date(2026, 3, 3), rep_id=2, client_id=6, region_id=30),
        ]
        conductor = ConductorAgent(plan_store, absence_store)
        summaries = conductor.team_summary(reps, roster, visits, fri_sat_weekend, march, NOW)

        assert [s.rep_id for s in summaries] == [1, 2]
        sara, omar = summaries
        assert sara.plan_status == "pending"
        assert omar.plan_status == "draft"
        # Mar 1-5 and 8-10 are working days with a Fri/Sat weekend
        assert sara.reconciliation.working_days_elapsed == 8
        assert sara.reconciliation.days_worked == 2
        assert sara.frequency.total == 5
        assert sara.stats.total_visits == 2
        assert omar.frequency.f1 == 1
        assert omar.overdue_clients == 0
        # Doctors 3-5 and the pharmacy were never visited; the others are recent
        assert sara.overdue_clients == 4

    def test_absences_flow_into_summary(self, plan_store, absence_store, reps, roster, march):
        attendance = AttendanceAgent(absence_store)
        attendance.record_absence(2, date(2026, 3, 1), "conference", ActorRole.MANAGER)
        conductor = ConductorAgent(plan_store, absence_store)
        result = conductor.process(
            "team_summary",
            {"reps": reps[1:], "clients": roster, "year_month": "2026-03", "now": NOW},
        )
        summary = result["summaries"][0]
        assert summary.reconciliation.absence_detail[0].is_manual
        assert summary.reconciliation.absent_days == 10
