"""CoverageAgent - visit frequency, overdue alerts and activity stats."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from rep_calendar.agents.base import BaseAgent
from rep_calendar.engine.frequency import classify, frequency_detail, specialization_counts
from rep_calendar.engine.overdue import detect_overdue
from rep_calendar.engine.stats import daily_visit_stats, monthly_visit_stats
from rep_calendar.models.client import Client, Specialization
from rep_calendar.models.period import YearMonth
from rep_calendar.models.reports import (
    ClientAlert,
    DoctorFrequency,
    FrequencyBuckets,
    VisitStats,
)
from rep_calendar.models.settings import EngineConfig
from rep_calendar.models.visit import VisitEvent


class CoverageAgent(BaseAgent):
    """Read-only coverage analytics over a client roster and visit feed."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def name(self) -> str:
        return "coverage"

    def frequency(
        self,
        rep_id: int,
        clients: Iterable[Client],
        visits: Iterable[VisitEvent],
        year_month: YearMonth,
        today: date | None = None,
    ) -> FrequencyBuckets:
        return classify(rep_id, clients, visits, year_month, today)

    def frequency_detail(
        self,
        rep_id: int,
        clients: Iterable[Client],
        visits: Iterable[VisitEvent],
        year_month: YearMonth,
        today: date | None = None,
    ) -> dict[str, list[DoctorFrequency]]:
        return frequency_detail(rep_id, clients, visits, year_month, today)

    def roster_breakdown(self, rep_id: int, clients: Iterable[Client]) -> dict[Specialization, int]:
        return specialization_counts(c for c in clients if c.rep_id == rep_id)

    def overdue_alerts(
        self, clients: Iterable[Client], visits: Iterable[VisitEvent], now: datetime
    ) -> list[ClientAlert]:
        return detect_overdue(clients, visits, now, self._config.overdue_threshold_days)

    def alerts_for_rep(
        self,
        rep_id: int,
        clients: Iterable[Client],
        visits: Iterable[VisitEvent],
        now: datetime,
    ) -> list[ClientAlert]:
        own = [c for c in clients if c.rep_id == rep_id]
        return self.overdue_alerts(own, visits, now)

    def monthly_stats(
        self, rep_id: int, visits: Iterable[VisitEvent], year_month: YearMonth, today: date
    ) -> VisitStats:
        return monthly_visit_stats(rep_id, visits, year_month, today)

    def daily_stats(self, rep_id: int, visits: Iterable[VisitEvent], day: date) -> VisitStats:
        return daily_visit_stats(rep_id, visits, day, self._config.daily_visit_target)

    def _handle_frequency(self, payload: dict[str, Any]) -> dict[str, Any]:
        year_month = payload["year_month"]
        if isinstance(year_month, str):
            year_month = YearMonth.parse(year_month)
        buckets = self.frequency(
            payload["rep_id"],
            payload["clients"],
            payload["visits"],
            year_month,
            payload.get("today"),
        )
        return {"frequency": buckets}

    def _handle_overdue(self, payload: dict[str, Any]) -> dict[str, Any]:
        rep_id = payload.get("rep_id")
        if rep_id is None:
            alerts = self.overdue_alerts(payload["clients"], payload["visits"], payload["now"])
        else:
            alerts = self.alerts_for_rep(
                rep_id, payload["clients"], payload["visits"], payload["now"]
            )
        return {"alerts": alerts}
