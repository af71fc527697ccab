"""Pydantic schemas for AI responses, plus the JSON schemas sent to the model.

Fields without defaults are required: a response missing any of them is
rejected rather than filled in.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceGridRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    service: str
    frequency: str
    setting: str


class IepAnalysisOutput(BaseModel):
    # The model answers in camelCase; the API speaks snake_case
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    summary: str
    goals: list[str]
    accommodations: list[str]
    red_flags: list[str] = Field(alias="redFlags")
    legal_lens: str = Field(alias="legalLens")
    service_grid: list[ServiceGridRow] | None = Field(default=None, alias="serviceGrid")


class IepComparisonOutput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    summary: str
    added: list[str]
    removed: list[str]
    changed: list[str]
    concerns: list[str]


_STRING = {"type": "STRING"}
_STRING_LIST = {"type": "ARRAY", "items": _STRING}

IEP_ANALYSIS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "summary": _STRING,
        "goals": _STRING_LIST,
        "accommodations": _STRING_LIST,
        "redFlags": _STRING_LIST,
        "legalLens": _STRING,
        "serviceGrid": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "service": _STRING,
                    "frequency": _STRING,
                    "setting": _STRING,
                },
                "required": ["service", "frequency", "setting"],
            },
        },
    },
    "required": ["summary", "goals", "accommodations", "redFlags", "legalLens"],
}

IEP_COMPARISON_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "summary": _STRING,
        "added": _STRING_LIST,
        "removed": _STRING_LIST,
        "changed": _STRING_LIST,
        "concerns": _STRING_LIST,
    },
    "required": ["summary", "added", "removed", "changed", "concerns"],
}
