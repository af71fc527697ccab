import pytest

from askiep.services.ai_prompt_registry import PROMPTS, get_prompt


def test_registry_has_every_gateway_prompt():
    assert {
        "iep_analysis",
        "iep_comparison",
        "letter_draft",
        "letter_revision",
        "meeting_simulation",
        "legal_support",
    } <= set(PROMPTS)


def test_render_user_fills_placeholders():
    prompt = get_prompt("iep_comparison")
    rendered = prompt.render_user(old_text="OLD", new_text="NEW")
    assert "OLD" in rendered and "NEW" in rendered


def test_prompt_without_user_template_refuses_render():
    with pytest.raises(ValueError):
        get_prompt("legal_support").render_user(query="x")


def test_unknown_prompt():
    with pytest.raises(KeyError):
        get_prompt("nope")
