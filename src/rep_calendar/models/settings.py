"""System settings and engine configuration."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class SystemSettings(BaseModel):
    """Manager-controlled calendar settings.

    Passed explicitly into every computation that needs it; an empty
    instance means every day is a working day.
    """

    weekends: set[int] = Field(
        default_factory=set, description="Weekday indices (0=Sun..6=Sat) that are days off"
    )
    holidays: set[str] = Field(default_factory=set, description="Holiday dates as YYYY-MM-DD")

    @field_validator("weekends")
    @classmethod
    def _check_weekends(cls, value: set[int]) -> set[int]:
        bad = sorted(v for v in value if not 0 <= v <= 6)
        if bad:
            raise ValueError(f"Weekend indices must be within 0..6, got {bad}")
        return value

    @field_validator("holidays", mode="before")
    @classmethod
    def _normalize_holidays(cls, value: Any) -> Any:
        if value is None:
            return set()
        normalized = set()
        for item in value:
            if isinstance(item, datetime):
                item = item.date()
            if isinstance(item, date):
                normalized.add(item.isoformat())
                continue
            # Round-trip through fromisoformat to reject malformed keys
            normalized.add(date.fromisoformat(str(item)).isoformat())
        return normalized

    def is_weekend(self, weekday_index: int) -> bool:
        return weekday_index in self.weekends

    def is_holiday(self, date_key: str) -> bool:
        return date_key in self.holidays


class EngineConfig(BaseModel):
    """Tunable parameters of the engine."""

    overdue_threshold_days: int = Field(default=10, ge=0)
    planning_window_days: int = Field(
        default=2, ge=1, le=6, description="Days before the week start when planning is open"
    )
    daily_visit_target: int = Field(
        default=12, ge=1, description="Visits per day shown as full progress on the dashboard"
    )
