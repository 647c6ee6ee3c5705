"""Client roster models (doctors and pharmacies)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class ClientKind(str, Enum):
    """Kind of client a rep visits."""

    DOCTOR = "doctor"
    PHARMACY = "pharmacy"


class Specialization(str, Enum):
    """Client specialization tag."""

    PEDIATRICS = "pediatrics"
    PULMONOLOGY = "pulmonology"
    PHARMACY = "pharmacy"


class Region(BaseModel):
    """Sales region."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Client(BaseModel):
    """A doctor or pharmacy owned by exactly one rep."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    kind: ClientKind
    region_id: int
    rep_id: int
    specialization: Specialization | None = None

    @model_validator(mode="after")
    def _check_specialization(self) -> Client:
        if self.kind == ClientKind.PHARMACY and self.specialization not in (
            None,
            Specialization.PHARMACY,
        ):
            raise ValueError("Pharmacies can only carry the pharmacy specialization")
        if self.kind == ClientKind.DOCTOR and self.specialization == Specialization.PHARMACY:
            raise ValueError("Doctors cannot carry the pharmacy specialization")
        return self

    @property
    def key(self) -> str:
        """Join key; doctor and pharmacy ids live in separate id spaces."""
        return client_key(self.kind, self.id)

    @property
    def is_doctor(self) -> bool:
        return self.kind == ClientKind.DOCTOR


def client_key(kind: ClientKind, client_id: int) -> str:
    return f"{kind.value}-{client_id}"
