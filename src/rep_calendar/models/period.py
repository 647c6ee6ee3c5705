"""Calendar month model."""

from __future__ import annotations

import calendar
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class YearMonth(BaseModel):
    """A calendar month."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)

    @classmethod
    def parse(cls, value: str) -> YearMonth:
        """Parse ``YYYY-MM``."""
        try:
            year_str, month_str = value.split("-")
            return cls(year=int(year_str), month=int(month_str))
        except ValueError as exc:
            raise ValueError(f"Expected YYYY-MM, got {value!r}") from exc

    @classmethod
    def of(cls, day: date) -> YearMonth:
        return cls(year=day.year, month=day.month)

    @property
    def num_days(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
