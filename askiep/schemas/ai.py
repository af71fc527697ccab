"""Request/response schemas for the AI proxy endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class CompareRequest(BaseModel):
    old_text: str = Field(..., min_length=1)
    new_text: str = Field(..., min_length=1)


class LetterDraftRequest(BaseModel):
    letter_type: str = Field(..., min_length=1, max_length=100)
    context: str = Field(..., min_length=1)


class LetterReviseRequest(BaseModel):
    current_letter: str = Field(..., min_length=1)
    # shorter / longer / formal / softer, or free-form wording
    instruction: str = Field(..., min_length=1, max_length=500)


class MeetingTurnRequest(BaseModel):
    message: str = Field(..., min_length=1)
    child_context: str = ""


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class LegalChatRequest(BaseModel):
    query: str = Field(..., min_length=1)
    history: list[ChatTurn] = Field(default_factory=list)


class TextResponse(BaseModel):
    text: str
