import json

import pytest


@pytest.mark.asyncio
async def test_compare_returns_structured_diff(client, stub_ai):
    stub_ai(
        json.dumps(
            {
                "summary": "Speech minutes were cut.",
                "added": [],
                "removed": ["Weekly check-ins"],
                "changed": ["Speech: 60 -> 30 min/week"],
                "concerns": ["Reduction in services without data"],
            }
        )
    )

    response = await client.post(
        "/api/ai/compare", json={"old_text": "old IEP", "new_text": "new IEP"}
    )

    assert response.status_code == 200
    assert response.json()["removed"] == ["Weekly check-ins"]


@pytest.mark.asyncio
async def test_revise_letter_expands_preset_instruction(client, stub_ai):
    provider = stub_ai("Shorter letter.")

    response = await client.post(
        "/api/ai/letters/revise",
        json={"current_letter": "A long letter.", "instruction": "shorter"},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Shorter letter."}
    prompt = provider.calls[0]["messages"][-1].content
    assert "shorter and more concise" in prompt


@pytest.mark.asyncio
async def test_draft_letter_empty_reply_is_malformed(client, stub_ai):
    stub_ai("   ")

    response = await client.post(
        "/api/ai/letters/draft",
        json={"letter_type": "Records Request", "context": "Need all evaluations"},
    )

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_legal_chat_passes_history(client, stub_ai):
    provider = stub_ai("You can request an IEE.")

    response = await client.post(
        "/api/ai/legal",
        json={
            "query": "What if I disagree with the evaluation?",
            "history": [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello, how can I help?"},
            ],
        },
    )

    assert response.status_code == 200
    roles = [m.role for m in provider.calls[0]["messages"]]
    assert roles == ["system", "user", "assistant", "user"]


@pytest.mark.asyncio
async def test_meeting_turn(client, stub_ai):
    stub_ai("Coordinator: We can look into that. Coach Note: cite FAPE.")

    response = await client.post(
        "/api/ai/meeting", json={"message": "I want more speech minutes."}
    )

    assert response.status_code == 200
    assert "Coach Note" in response.json()["text"]


@pytest.mark.asyncio
async def test_ai_endpoints_unavailable_without_key(client):
    response = await client.post(
        "/api/ai/meeting", json={"message": "Hello"}
    )
    assert response.status_code == 503
