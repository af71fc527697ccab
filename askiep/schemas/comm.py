"""Pydantic schemas for communication log entries."""

import datetime as dt
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from askiep.db.enums import CommMethod


class CommLogCreate(BaseModel):
    child_id: UUID
    date: dt.date
    contact_name: str = Field(..., min_length=1, max_length=255)
    method: CommMethod
    summary: str | None = Field(None, max_length=5000)
    follow_up_needed: bool = False


class CommLogRead(BaseModel):
    id: UUID
    child_id: UUID
    date: dt.date
    contact_name: str
    method: CommMethod
    summary: str | None
    follow_up_needed: bool
    created_at: datetime

    model_config = {"from_attributes": True}
