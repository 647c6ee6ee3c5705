"""Visit event model."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from rep_calendar.models.client import ClientKind, client_key


class VisitEvent(BaseModel):
    """Immutable record of a completed visit.

    The only evidence that a rep worked on a given day.
    """

    model_config = ConfigDict(frozen=True)

    rep_id: int
    client_id: int
    client_kind: ClientKind
    occurred_at: datetime
    region_id: int

    @property
    def visit_date(self) -> date:
        """Local calendar day of the visit (wall-clock date, never UTC-shifted)."""
        return self.occurred_at.date()

    @property
    def client_key(self) -> str:
        return client_key(self.client_kind, self.client_id)
