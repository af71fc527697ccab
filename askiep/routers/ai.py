"""AI proxy router - stateless calls through the AI gateway."""

from fastapi import APIRouter, Depends

from askiep.core.async_utils import run_async
from askiep.core.deps import require_ai_gateway
from askiep.schemas.ai import (
    CompareRequest,
    LegalChatRequest,
    LetterDraftRequest,
    LetterReviseRequest,
    MeetingTurnRequest,
    TextResponse,
)
from askiep.services.ai_gateway import AIGateway
from askiep.services.ai_prompt_schemas import IepComparisonOutput
from askiep.services.ai_provider import ChatMessage

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/compare", response_model=IepComparisonOutput)
def compare_ieps(
    body: CompareRequest,
    gateway: AIGateway = Depends(require_ai_gateway),
):
    """Explain what changed between two IEP texts."""
    return run_async(gateway.compare_ieps(body.old_text, body.new_text))


@router.post("/letters/draft", response_model=TextResponse)
def draft_letter(
    body: LetterDraftRequest,
    gateway: AIGateway = Depends(require_ai_gateway),
):
    text = run_async(gateway.draft_letter(body.context, body.letter_type))
    return TextResponse(text=text)


@router.post("/letters/revise", response_model=TextResponse)
def revise_letter(
    body: LetterReviseRequest,
    gateway: AIGateway = Depends(require_ai_gateway),
):
    text = run_async(gateway.revise_letter(body.current_letter, body.instruction))
    return TextResponse(text=text)


@router.post("/meeting", response_model=TextResponse)
def simulate_meeting(
    body: MeetingTurnRequest,
    gateway: AIGateway = Depends(require_ai_gateway),
):
    """One turn of the IEP meeting role-play."""
    text = run_async(gateway.simulate_meeting(body.message, body.child_context))
    return TextResponse(text=text)


@router.post("/legal", response_model=TextResponse)
def legal_chat(
    body: LegalChatRequest,
    gateway: AIGateway = Depends(require_ai_gateway),
):
    history = [ChatMessage(role=turn.role, content=turn.content) for turn in body.history]
    text = run_async(gateway.legal_chat(body.query, history))
    return TextResponse(text=text)
