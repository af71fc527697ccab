"""Pydantic schemas for letter drafts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class LetterSave(BaseModel):
    """Append a draft, or re-save an existing one when ``id`` is present."""
    id: UUID | None = None
    child_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    letter_type: str | None = Field(None, max_length=100)


class LetterRead(BaseModel):
    id: UUID
    child_id: UUID
    title: str
    content: str
    letter_type: str | None
    last_edited: datetime

    model_config = {"from_attributes": True}
