"""Helpers for parsing and validating AI JSON responses.

Decoding fails closed: anything that is not the expected structure raises
MalformedAIResponse instead of being patched up with defaults.
"""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from askiep.core.errors import MalformedAIResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _strip_code_fences(text: str) -> str:
    content = text.strip()
    if content.startswith("```"):
        lines = content.splitlines()
        if lines:
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines).strip()
    return content


def parse_json_object(text: str | None) -> dict | None:
    """Parse a JSON object, tolerating a surrounding code fence only."""
    if not text or not text.strip():
        return None
    content = _strip_code_fences(text)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse JSON object: %s", exc)
        return None
    return data if isinstance(data, dict) else None


def validate_model(model_cls: type[ModelT], data: dict | None) -> ModelT | None:
    if data is None:
        return None
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        logger.warning("Model validation failed: %s", exc)
        return None


def decode_model(model_cls: type[ModelT], text: str | None) -> ModelT:
    """Decode raw model output into ``model_cls`` or raise MalformedAIResponse."""
    data = parse_json_object(text)
    if data is None:
        raise MalformedAIResponse(details="Response was not a JSON object")
    model = validate_model(model_cls, data)
    if model is None:
        raise MalformedAIResponse(details=f"Response did not match {model_cls.__name__}")
    return model


def require_text(text: str | None) -> str:
    """Free-text replies must be non-empty."""
    if text is None or not text.strip():
        raise MalformedAIResponse("AI returned an empty response.")
    return text.strip()
