"""Absence records."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel


class AbsenceStatus(str, Enum):
    """Review status of an absence."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Absence(BaseModel):
    """A rep's non-attendance on a specific date.

    Leave requests start PENDING; absences entered directly by a manager
    are APPROVED and flagged as manual entries.
    """

    id: int
    rep_id: int
    date: dt.date
    reason: str = ""
    status: AbsenceStatus = AbsenceStatus.PENDING
    is_manual_entry: bool = False

    @property
    def is_approved(self) -> bool:
        return self.status == AbsenceStatus.APPROVED
