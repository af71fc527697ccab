"""Pydantic schemas for service-delivery compliance logs."""

import datetime as dt
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from askiep.db.enums import ComplianceStatus


class ComplianceLogCreate(BaseModel):
    child_id: UUID
    date: dt.date
    service_type: str = Field(..., min_length=1, max_length=100)
    status: ComplianceStatus
    notes: str | None = Field(None, max_length=5000)

    @field_validator("date")
    @classmethod
    def _not_in_future(cls, value: dt.date) -> dt.date:
        if value > dt.date.today():
            raise ValueError("Service date cannot be in the future")
        return value

    @field_validator("service_type")
    @classmethod
    def _strip_service_type(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Service type is required")
        return value


class ComplianceLogRead(BaseModel):
    id: UUID
    child_id: UUID
    date: dt.date
    service_type: str
    status: ComplianceStatus
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
