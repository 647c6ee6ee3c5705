"""Representative and actor-role models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActorRole(str, Enum):
    """Role of the user performing an action."""

    MANAGER = "manager"
    SUPERVISOR = "supervisor"
    REP = "rep"


class Rep(BaseModel):
    """Field sales representative."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    region_ids: list[int] = Field(default_factory=list, description="Assigned region ids")
