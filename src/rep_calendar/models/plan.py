"""Weekly plan models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Weekday indices, 0=Sunday..6=Saturday
WEEKDAY_INDICES: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)


class PlanStatus(str, Enum):
    """Lifecycle status of a weekly plan."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PlanAction(str, Enum):
    """Actions accepted by the plan state machine."""

    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    REVOKE = "revoke"


class DayPlanEntry(BaseModel):
    """Region and doctors planned for one weekday."""

    region_id: int
    doctor_ids: list[int] = Field(default_factory=list)


def normalize_days(days: dict[Any, Any] | None) -> dict[int, DayPlanEntry | None]:
    """Return a day mapping with all seven weekday slots present.

    Slots without a plan are explicitly ``None``. Keys may arrive as strings
    (JSON objects) and are coerced to ints.
    """
    normalized: dict[int, DayPlanEntry | None] = {i: None for i in WEEKDAY_INDICES}
    for raw_key, raw_entry in (days or {}).items():
        key = int(raw_key)
        if key not in normalized:
            raise ValueError(f"Day index must be within 0..6, got {raw_key!r}")
        if raw_entry is None:
            continue
        entry = (
            raw_entry
            if isinstance(raw_entry, DayPlanEntry)
            else DayPlanEntry.model_validate(raw_entry)
        )
        normalized[key] = entry
    return normalized


class WeeklyPlan(BaseModel):
    """A rep's region/doctor schedule for the seven days of a business week."""

    rep_id: int
    days: dict[int, DayPlanEntry | None] = Field(default_factory=dict, validate_default=True)
    status: PlanStatus = PlanStatus.DRAFT

    @field_validator("days", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> dict[int, DayPlanEntry | None]:
        return normalize_days(value)

    @field_validator("days")
    @classmethod
    def _check_double_booking(
        cls, value: dict[int, DayPlanEntry | None]
    ) -> dict[int, DayPlanEntry | None]:
        seen: dict[int, int] = {}
        for day_index, entry in value.items():
            if entry is None:
                continue
            for doctor_id in entry.doctor_ids:
                if doctor_id in seen:
                    raise ValueError(
                        f"Doctor {doctor_id} is booked on day {seen[doctor_id]} and day {day_index}"
                    )
                seen[doctor_id] = day_index
        return value

    @classmethod
    def empty(cls, rep_id: int) -> WeeklyPlan:
        """Default plan for a rep with no stored row."""
        return cls(rep_id=rep_id)

    @property
    def assigned_doctor_ids(self) -> set[int]:
        return {
            doctor_id
            for entry in self.days.values()
            if entry is not None
            for doctor_id in entry.doctor_ids
        }

    def day_of_doctor(self, doctor_id: int) -> int | None:
        for day_index, entry in self.days.items():
            if entry is not None and doctor_id in entry.doctor_ids:
                return day_index
        return None

    def to_record(self) -> dict[str, Any]:
        """Serializable form with all seven day keys present."""
        return self.model_dump(mode="json")
