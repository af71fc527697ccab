import pytest

from askiep.core.errors import MalformedAIResponse
from askiep.services.ai_prompt_schemas import IepAnalysisOutput, IepComparisonOutput
from askiep.services.ai_response_validation import (
    decode_model,
    parse_json_object,
    require_text,
    validate_model,
)

VALID = (
    '{"summary":"s","goals":["g"],"accommodations":[],"redFlags":["r"],'
    '"legalLens":"l"}'
)


def test_parse_json_object_handles_code_fence():
    payload = parse_json_object('```json\n{"summary":"Hello"}\n```')
    assert payload == {"summary": "Hello"}


def test_parse_json_object_rejects_prose_and_arrays():
    assert parse_json_object("Sure! Here it is.") is None
    assert parse_json_object("[1, 2]") is None
    assert parse_json_object("") is None


def test_validate_model_returns_none_on_missing_field():
    assert validate_model(IepComparisonOutput, {"summary": "only"}) is None


def test_decode_model_maps_camel_case_keys():
    model = decode_model(IepAnalysisOutput, VALID)
    assert model.red_flags == ["r"]
    assert model.legal_lens == "l"
    assert model.service_grid is None


def test_decode_model_raises_for_prose():
    with pytest.raises(MalformedAIResponse):
        decode_model(IepAnalysisOutput, "The IEP looks great.")


def test_decode_model_raises_for_missing_required_field():
    with pytest.raises(MalformedAIResponse) as exc_info:
        decode_model(IepAnalysisOutput, '{"summary": "s"}')
    assert exc_info.value.status_code == 502


def test_decode_model_rejects_wrong_types():
    with pytest.raises(MalformedAIResponse):
        decode_model(
            IepAnalysisOutput,
            '{"summary":"s","goals":"not a list","accommodations":[],"redFlags":[],"legalLens":"l"}',
        )


def test_require_text():
    assert require_text("  hello ") == "hello"
    with pytest.raises(MalformedAIResponse):
        require_text("")
