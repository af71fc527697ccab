"""Pydantic schemas for IEP analyses and source documents."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from askiep.services.ai_prompt_schemas import IepAnalysisOutput, ServiceGridRow


class AnalyzeRequest(BaseModel):
    """Run (or record) an analysis of IEP text for a child.

    ``analysis`` carries a result the client already obtained from the model;
    when present the server validates and stores it instead of calling the
    model again.
    """
    child_id: UUID
    text: str = Field(..., min_length=1)
    filename: str | None = Field(None, max_length=255)
    analysis: IepAnalysisOutput | None = None


class AnalysisRead(BaseModel):
    id: UUID
    child_id: UUID
    summary: str
    goals: list[str]
    accommodations: list[str]
    red_flags: list[str]
    legal_lens: str
    service_grid: list[ServiceGridRow] | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class DocumentRead(BaseModel):
    """Document list item. Content is omitted from list views."""
    id: UUID
    child_id: UUID
    filename: str
    analysis_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
