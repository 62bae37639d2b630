from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Confidence = Literal["high", "medium", "low"]
Priority = Literal["high", "medium", "low"]
Severity = Literal["low", "medium", "high"]
ProjectType = Literal["strategic", "operational"]
ProjectStage = Literal["shaping", "draft", "ready"]

SECTION_NOT_FOUND_CONTENT = "Sección no encontrada en el documento"


class CharterModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionStatus(CharterModel):
    name: str
    found: bool
    confidence: Confidence
    matched_keywords: list[str] = Field(default_factory=list)


class ValidationResult(CharterModel):
    completeness: int = Field(ge=0, le=100)
    sections: list[SectionStatus]
    missing_sections: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ExtractedSpan(CharterModel):
    content: str = ""
    start_index: int = -1
    end_index: int = -1
    is_complete: bool = False


class SectionVerdict(CharterModel):
    name: str
    found: bool = False
    confidence: Confidence = "low"
    completeness: float | None = Field(default=None, ge=0.0, le=100.0)


class Recommendation(CharterModel):
    priority: Priority
    section: str
    issue: str
    suggestion: str

    @field_validator("section", "issue", "suggestion")
    @classmethod
    def _validate_not_empty(cls, value: str) -> str:
        if value == "":
            raise ValueError("must not be empty")
        return value


class SectionRecommendation(CharterModel):
    priority: Priority
    issue: str
    suggestion: str


class MappedSection(CharterModel):
    section_name: str
    content: str = SECTION_NOT_FOUND_CONTENT
    start_index: int = -1
    end_index: int = -1
    is_complete: bool = False
    confidence: Confidence = "low"
    severity: Severity = "high"
    has_recommendations: bool = False
    recommendations: list[SectionRecommendation] = Field(default_factory=list)
    max_priority: Priority | None = None
    has_real_content: bool = False
    is_missing: bool = True


class CharterAnalysis(CharterModel):
    overall_score: float = Field(ge=0.0, le=100.0, strict=True)
    overall_completeness: float = Field(ge=0.0, le=100.0, strict=True)
    sections: list[SectionVerdict]
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[Recommendation]
    red_flags: list[str]
    project_type: ProjectType | None = None
    project_stage: ProjectStage | None = None
