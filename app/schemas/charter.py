from __future__ import annotations

from typing import Any

from pydantic import Field

from app.charter.models import CharterModel, MappedSection, ProjectStage, ProjectType, ValidationResult


class ValidateCharterRequest(CharterModel):
    text: str = ""


class MapSectionsRequest(CharterModel):
    text: str = ""
    analysis: dict[str, Any] | str | None = None
    project_type: ProjectType | None = None
    project_stage: ProjectStage | None = None


class MapSectionsResponse(CharterModel):
    sections: list[MappedSection] = Field(default_factory=list)
    local_validation: ValidationResult
