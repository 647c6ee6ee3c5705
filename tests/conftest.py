"""Common test fixtures."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

import pytest

from rep_calendar.models.client import Client, ClientKind, Specialization
from rep_calendar.models.period import YearMonth
from rep_calendar.models.rep import Rep
from rep_calendar.models.settings import SystemSettings
from rep_calendar.models.visit import VisitEvent
from rep_calendar.store.memory import InMemoryAbsenceStore, InMemoryPlanStore

# March 2026 starts on a Sunday: Fridays are 6/13/20/27, Saturdays 7/14/21/28.
MARCH_2026 = YearMonth(year=2026, month=3)

VisitFactory = Callable[..., VisitEvent]


@pytest.fixture
def march() -> YearMonth:
    return MARCH_2026


@pytest.fixture
def friday_weekend() -> SystemSettings:
    return SystemSettings(weekends={5})


@pytest.fixture
def fri_sat_weekend() -> SystemSettings:
    return SystemSettings(weekends={5, 6})


@pytest.fixture
def reps() -> list[Rep]:
    return [
        Rep(id=1, name="Sara", region_ids=[10, 20]),
        Rep(id=2, name="Omar", region_ids=[30]),
    ]


@pytest.fixture
def roster() -> list[Client]:
    """Five doctors and one pharmacy for rep 1, one doctor for rep 2."""
    return [
        Client(id=1, name="Dr. Adel", kind=ClientKind.DOCTOR, region_id=10, rep_id=1,
               specialization=Specialization.PEDIATRICS),
        Client(id=2, name="Dr. Basma", kind=ClientKind.DOCTOR, region_id=10, rep_id=1,
               specialization=Specialization.PULMONOLOGY),
        Client(id=3, name="Dr. Camal", kind=ClientKind.DOCTOR, region_id=20, rep_id=1,
               specialization=Specialization.PEDIATRICS),
        Client(id=4, name="Dr. Dina", kind=ClientKind.DOCTOR, region_id=20, rep_id=1,
               specialization=Specialization.PEDIATRICS),
        Client(id=5, name="Dr. Ehab", kind=ClientKind.DOCTOR, region_id=10, rep_id=1,
               specialization=Specialization.PULMONOLOGY),
        Client(id=1, name="Nile Pharmacy", kind=ClientKind.PHARMACY, region_id=10, rep_id=1,
               specialization=Specialization.PHARMACY),
        Client(id=6, name="Dr. Fady", kind=ClientKind.DOCTOR, region_id=30, rep_id=2,
               specialization=Specialization.PULMONOLOGY),
    ]


@pytest.fixture
def doctors_by_id(roster) -> dict[int, Client]:
    return {c.id: c for c in roster if c.kind == ClientKind.DOCTOR}


@pytest.fixture
def make_visit() -> VisitFactory:
    """Build a visit on a given day; defaults to a doctor visit by rep 1 at 10:00."""

    def _make(
        day: date,
        rep_id: int = 1,
        client_id: int = 1,
        kind: ClientKind = ClientKind.DOCTOR,
        hour: int = 10,
        region_id: int = 10,
    ) -> VisitEvent:
        return VisitEvent(
            rep_id=rep_id,
            client_id=client_id,
            client_kind=kind,
            occurred_at=datetime(day.year, day.month, day.day, hour, 0),
            region_id=region_id,
        )

    return _make


@pytest.fixture
def plan_store() -> InMemoryPlanStore:
    return InMemoryPlanStore()


@pytest.fixture
def absence_store() -> InMemoryAbsenceStore:
    return InMemoryAbsenceStore()
