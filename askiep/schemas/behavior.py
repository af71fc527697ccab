"""Pydantic schemas for ABC behavior logs."""

import datetime as dt
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class BehaviorLogCreate(BaseModel):
    child_id: UUID
    date: dt.date
    time: dt.time | None = None
    antecedent: str | None = Field(None, max_length=2000)
    behavior: str = Field(..., min_length=1, max_length=2000)
    consequence: str | None = Field(None, max_length=2000)
    intensity: int = Field(1, ge=1, le=5)
    duration_minutes: int | None = Field(None, ge=0, le=24 * 60)
    notes: str | None = Field(None, max_length=5000)


class BehaviorLogRead(BaseModel):
    id: UUID
    child_id: UUID
    date: dt.date
    time: dt.time | None
    antecedent: str | None
    behavior: str
    consequence: str | None
    intensity: int
    duration_minutes: int | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
