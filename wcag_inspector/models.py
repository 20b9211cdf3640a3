from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Level = Literal["A", "AA", "AAA"]
Principle = Literal["Perceivable", "Operable", "Understandable", "Robust"]


class _WireModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalyzeRequest(BaseModel):
    url: str


class ElementFinding(_WireModel):
    element: str
    is_passed: bool
    issue: str | None = None


class CriterionResult(_WireModel):
    criterion_id: str
    name: str
    level: Level
    description: str
    wcag_version: str | None = None
    principle: Principle | None = None
    passed: bool
    findings: str
    elements: list[ElementFinding] = Field(..., min_length=1)
    how_to_fix: str | None = None


class Tag(_WireModel):
    name: str
    is_passed: bool


class AnalyzeResponse(_WireModel):
    url: str
    timestamp: str
    overall_score: int = Field(..., ge=0, le=100)
    passed_criteria: int
    total_criteria: int
    results: list[CriterionResult]
    summary: str
    tags: list[Tag]


class ErrorBody(BaseModel):
    code: Literal["INVALID_URL", "FETCH_TIMEOUT", "FETCH_FAILURE", "UNKNOWN_ERROR"]
    message: str
