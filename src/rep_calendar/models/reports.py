"""Derived report records returned by the engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from rep_calendar.models.client import ClientKind, Specialization
from rep_calendar.models.period import YearMonth

AUTO_ABSENCE_REASON = "auto-inferred"


class DayStatus(str, Enum):
    """Classification of a single calendar day in a reconciliation."""

    SKIPPED = "skipped"
    WORKED = "worked"
    ABSENT = "absent"


class AbsenceDetail(BaseModel):
    """One absent day, either from an approved absence or inferred."""

    date: str = Field(description="YYYY-MM-DD")
    reason: str
    is_manual: bool
    source_absence_id: int | None = None


class ReconciliationResult(BaseModel):
    """Attendance reconciliation for one rep and one month."""

    rep_id: int
    period: YearMonth
    working_days_elapsed: int = 0
    days_worked: int = 0
    absent_days: int = 0
    absence_detail: list[AbsenceDetail] = Field(default_factory=list)
    day_statuses: dict[str, DayStatus] = Field(
        default_factory=dict, description="Every classified day mapped to exactly one status"
    )

    @property
    def skipped_days(self) -> int:
        return sum(1 for s in self.day_statuses.values() if s == DayStatus.SKIPPED)


class FrequencyBuckets(BaseModel):
    """Doctors of a rep grouped by monthly visit count (0, 1, 2, 3+)."""

    f0: int = 0
    f1: int = 0
    f2: int = 0
    f3: int = 0

    @property
    def total(self) -> int:
        return self.f0 + self.f1 + self.f2 + self.f3


class DoctorFrequency(BaseModel):
    """A doctor's visit count in the month, for bucket drill-down."""

    doctor_id: int
    name: str
    region_id: int
    specialization: Specialization | None = None
    visits: int


class ClientAlert(BaseModel):
    """Overdue-visit alert for a client."""

    client_key: str
    client_id: int
    name: str
    kind: ClientKind
    rep_id: int
    region_id: int
    days_since_last_visit: int | None = Field(description="None if never visited")
    last_visit_at: datetime | None = None


class VisitStats(BaseModel):
    """Visit counts over a period."""

    doctor_visits: int = 0
    pharmacy_visits: int = 0
    total_visits: int = 0
    active_days: int = 0
    visits_per_active_day: float = 0.0
    daily_target: int | None = None
    target_progress: float | None = Field(
        default=None, description="Share of the daily target reached, capped at 1.0"
    )


class RepMonthlySummary(BaseModel):
    """Per-rep row of the manager's monthly overview."""

    rep_id: int
    rep_name: str
    plan_status: str
    reconciliation: ReconciliationResult
    frequency: FrequencyBuckets
    overdue_clients: int = 0
    stats: VisitStats = Field(default_factory=VisitStats)
