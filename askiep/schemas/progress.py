"""Pydantic schemas for goal progress entries."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from askiep.db.enums import GoalStatus


class GoalProgressCreate(BaseModel):
    child_id: UUID
    goal_name: str = Field(..., min_length=1, max_length=255)
    current_value: str | None = Field(None, max_length=100)
    target_value: str | None = Field(None, max_length=100)
    status: GoalStatus = GoalStatus.EMERGING


class GoalProgressRead(BaseModel):
    id: UUID
    child_id: UUID
    goal_name: str
    current_value: str | None
    target_value: str | None
    status: GoalStatus
    last_updated: datetime

    model_config = {"from_attributes": True}
