"""Gateway between the application and the generative model.

Each operation is one round trip with a bounded timeout. There is no retry,
caching or streaming here: transport problems become InfrastructureError,
undecodable output becomes MalformedAIResponse.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from askiep.core.config import settings
from askiep.core.errors import InfrastructureError, MalformedAIResponse
from askiep.services.ai_prompt_registry import get_prompt
from askiep.services.ai_prompt_schemas import (
    IEP_ANALYSIS_RESPONSE_SCHEMA,
    IEP_COMPARISON_RESPONSE_SCHEMA,
    IepAnalysisOutput,
    IepComparisonOutput,
)
from askiep.services.ai_provider import AIProvider, ChatMessage, get_provider
from askiep.services.ai_response_validation import decode_model, require_text

logger = logging.getLogger(__name__)

MEETING_APOLOGY = "I'm sorry, I'm having trouble connecting right now."

REVISION_INSTRUCTIONS = {
    "shorter": "shorter and more concise",
    "longer": "more detailed and comprehensive",
    "formal": "more formal and legally precise",
    "softer": "softer and more collaborative in tone",
}


class AIGateway:
    """Typed operations over an AIProvider."""

    def __init__(self, provider: AIProvider, *, model: str | None = None):
        self.provider = provider
        self.model = model

    async def _call(
        self,
        operation: str,
        messages: list[ChatMessage],
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        response_schema: dict[str, Any] | None = None,
    ) -> str:
        try:
            response = await self.provider.chat(
                messages,
                model=self.model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_schema=response_schema,
            )
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "AI %s failed with status %s", operation, exc.response.status_code
            )
            raise InfrastructureError(
                "AI service request failed",
                details=f"status {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("AI %s transport error: %s", operation, type(exc).__name__)
            raise InfrastructureError(
                "AI service is unreachable", details=type(exc).__name__
            ) from exc
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            # Provider envelope did not have the expected shape
            raise MalformedAIResponse(details=str(exc)) from exc

        logger.info(
            "AI %s completed model=%s tokens=%s",
            operation,
            response.model,
            response.total_tokens,
        )
        return response.content

    async def analyze_iep(self, text: str) -> IepAnalysisOutput:
        prompt = get_prompt("iep_analysis")
        raw = await self._call(
            "analyze_iep",
            [
                ChatMessage(role="system", content=prompt.system),
                ChatMessage(role="user", content=prompt.render_user(text=text)),
            ],
            temperature=0.2,
            max_tokens=4000,
            response_schema=IEP_ANALYSIS_RESPONSE_SCHEMA,
        )
        return decode_model(IepAnalysisOutput, raw)

    async def compare_ieps(self, old_text: str, new_text: str) -> IepComparisonOutput:
        prompt = get_prompt("iep_comparison")
        raw = await self._call(
            "compare_ieps",
            [
                ChatMessage(role="system", content=prompt.system),
                ChatMessage(
                    role="user",
                    content=prompt.render_user(old_text=old_text, new_text=new_text),
                ),
            ],
            temperature=0.2,
            max_tokens=4000,
            response_schema=IEP_COMPARISON_RESPONSE_SCHEMA,
        )
        return decode_model(IepComparisonOutput, raw)

    async def draft_letter(self, context: str, letter_type: str) -> str:
        prompt = get_prompt("letter_draft")
        raw = await self._call(
            "draft_letter",
            [
                ChatMessage(role="system", content=prompt.system),
                ChatMessage(
                    role="user",
                    content=prompt.render_user(letter_type=letter_type, context=context),
                ),
            ],
        )
        return require_text(raw)

    async def revise_letter(self, current_letter: str, instruction: str) -> str:
        prompt = get_prompt("letter_revision")
        wording = REVISION_INSTRUCTIONS.get(instruction.strip().lower(), instruction)
        raw = await self._call(
            "revise_letter",
            [
                ChatMessage(role="system", content=prompt.system),
                ChatMessage(
                    role="user",
                    content=prompt.render_user(
                        current_letter=current_letter, instruction=wording
                    ),
                ),
            ],
        )
        return require_text(raw)

    async def simulate_meeting(self, message: str, child_context: str = "") -> str:
        prompt = get_prompt("meeting_simulation")
        raw = await self._call(
            "simulate_meeting",
            [
                ChatMessage(role="system", content=prompt.system),
                ChatMessage(
                    role="user",
                    content=prompt.render_user(
                        child_context=child_context or "Not provided", message=message
                    ),
                ),
            ],
        )
        return require_text(raw)

    async def legal_chat(
        self, query: str, history: Sequence[ChatMessage] | None = None
    ) -> str:
        prompt = get_prompt("legal_support")
        messages = [ChatMessage(role="system", content=prompt.system)]
        messages.extend(history or [])
        messages.append(ChatMessage(role="user", content=query))
        raw = await self._call("legal_chat", messages)
        return require_text(raw)


def build_ai_gateway() -> AIGateway:
    """Build a gateway from server settings."""
    if not settings.AI_API_KEY:
        raise InfrastructureError("AI service is not configured")
    provider = get_provider(
        settings.AI_PROVIDER,
        settings.AI_API_KEY,
        settings.AI_MODEL or None,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
    return AIGateway(provider)
