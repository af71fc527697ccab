"""Pydantic schemas for child profiles."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from askiep.db.enums import AdvocacyLevel


class ProfileSave(BaseModel):
    """Create a profile, or update it in place when ``id`` is present."""
    id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=255)
    age: int | None = Field(None, ge=0, le=30)
    grade: str | None = Field(None, max_length=50)
    disabilities: list[str] = Field(default_factory=list)
    focus_tags: list[str] = Field(default_factory=list)
    advocacy_level: AdvocacyLevel | None = None
    primary_goal: str | None = Field(None, max_length=2000)
    state_context: str | None = Field(None, max_length=100)
    last_iep_date: date | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Student name is required")
        return value

    @field_validator("disabilities", "focus_tags")
    @classmethod
    def _clean_tags(cls, value: list[str]) -> list[str]:
        # Drop blanks and duplicates, keep first-seen order
        seen: list[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class ProfileRead(BaseModel):
    id: UUID
    name: str
    age: int | None
    grade: str | None
    disabilities: list[str]
    focus_tags: list[str]
    advocacy_level: AdvocacyLevel | None
    primary_goal: str | None
    state_context: str | None
    last_iep_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
