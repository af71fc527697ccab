import json

import httpx
import pytest

from askiep.core.errors import InfrastructureError, MalformedAIResponse
from askiep.services.ai_gateway import AIGateway
from askiep.services.ai_prompt_schemas import IEP_ANALYSIS_RESPONSE_SCHEMA
from askiep.services.ai_provider import ChatMessage, GeminiProvider, OpenAIProvider, get_provider

ANALYSIS = {
    "summary": "s",
    "goals": [],
    "accommodations": [],
    "redFlags": [],
    "legalLens": "l",
}


def _gemini_reply(text: str) -> dict:
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}}],
        "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 4},
    }


@pytest.mark.asyncio
async def test_gemini_sends_schema_and_system_instruction():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_reply(json.dumps(ANALYSIS)))

    provider = GeminiProvider("key", transport=httpx.MockTransport(handler))
    response = await provider.chat(
        [ChatMessage("system", "be helpful"), ChatMessage("user", "hi")],
        response_schema=IEP_ANALYSIS_RESPONSE_SCHEMA,
    )

    assert ":generateContent" in seen["url"]
    assert seen["body"]["systemInstruction"]["parts"][0]["text"] == "be helpful"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"
    assert seen["body"]["generationConfig"]["responseSchema"] == IEP_ANALYSIS_RESPONSE_SCHEMA
    assert response.total_tokens == 7


@pytest.mark.asyncio
async def test_openai_requests_json_object_mode():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"content": "{}"}}],
                "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
            },
        )

    provider = OpenAIProvider("key", transport=httpx.MockTransport(handler))
    await provider.chat([ChatMessage("user", "hi")], response_schema={"type": "OBJECT"})

    assert seen["body"]["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_gateway_decodes_gemini_analysis():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json=_gemini_reply(json.dumps(ANALYSIS)))
    )
    gateway = AIGateway(get_provider("gemini", "key", transport=transport))

    result = await gateway.analyze_iep("IEP text")

    assert result.summary == "s"
    assert result.red_flags == []


@pytest.mark.asyncio
async def test_gateway_blocked_candidate_is_malformed():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"candidates": []})
    )
    gateway = AIGateway(get_provider("gemini", "key", transport=transport))

    with pytest.raises(MalformedAIResponse):
        await gateway.analyze_iep("IEP text")


@pytest.mark.asyncio
async def test_gateway_maps_http_errors_to_infrastructure():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={}))
    gateway = AIGateway(get_provider("openai", "key", transport=transport))

    with pytest.raises(InfrastructureError) as exc_info:
        await gateway.draft_letter("details", "Records Request")
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_gateway_does_not_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_gemini_reply("not json"))

    gateway = AIGateway(get_provider("gemini", "key", transport=httpx.MockTransport(handler)))

    with pytest.raises(MalformedAIResponse):
        await gateway.analyze_iep("IEP text")
    assert len(calls) == 1


def test_unknown_provider():
    with pytest.raises(ValueError):
        get_provider("mystery", "key")
