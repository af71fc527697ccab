"""Pydantic schemas for derived dashboard aggregates."""

from uuid import UUID

from pydantic import BaseModel

from askiep.db.enums import GoalStatus


class ServiceRate(BaseModel):
    service_type: str
    total: int
    rate: int


class GoalCompletion(BaseModel):
    """Latest measurement of one goal against its target."""
    goal_name: str
    status: GoalStatus
    percent: int


class DashboardStats(BaseModel):
    child_id: UUID
    compliance_rate: int
    mastery_index: int
    total_logs: int
    total_goals: int
    services: list[ServiceRate]
    goal_status_counts: dict[str, int]
    goal_completion: list[GoalCompletion]
