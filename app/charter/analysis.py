from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from pydantic import ValidationError

from app.charter.models import CharterAnalysis, ProjectStage, ProjectType
from app.charter.profile import CANONICAL_SECTIONS

logger = logging.getLogger(__name__)

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_END_RE = re.compile(r"\n?```\s*$")
_CONFIDENCE_VALUES = {"high", "medium", "low"}


class AnalysisPayloadError(ValueError):
    def __init__(self, message: str, *, code: str = "invalid_schema"):
        super().__init__(message)
        self.code = code


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_START_RE.sub("", cleaned, count=1)
    if cleaned.endswith("```"):
        cleaned = _FENCE_END_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _decode(text: str) -> Any:
    cleaned = _strip_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        tail = cleaned.rstrip()
        if not tail.endswith("}") and not tail.endswith("]"):
            raise AnalysisPayloadError(
                "Analysis response looks truncated (output token limit reached).",
                code="truncated",
            ) from exc

        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start == -1 or end <= start:
            raise AnalysisPayloadError("No JSON object found in analysis response.", code="invalid_json") from exc
        try:
            return json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError as fallback_exc:
            raise AnalysisPayloadError(
                f"Could not parse analysis JSON: {fallback_exc}",
                code="invalid_json",
            ) from fallback_exc


def _section_completeness(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if 0 <= value <= 100 else None


def _normalize_sections(raw_sections: Any) -> list[dict[str, Any]]:
    if not isinstance(raw_sections, list):
        raise AnalysisPayloadError("'sections' must be a list.")

    by_name: dict[str, Mapping[str, Any]] = {}
    for entry in raw_sections:
        if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
            by_name.setdefault(entry["name"], entry)

    normalized: list[dict[str, Any]] = []
    for name in CANONICAL_SECTIONS:
        entry = by_name.get(name)
        if entry is None:
            normalized.append({"name": name, "found": False, "confidence": "low"})
            continue
        confidence = entry.get("confidence")
        completeness = entry.get("completeness")
        normalized.append(
            {
                "name": name,
                "found": entry.get("found") is True,
                "confidence": confidence if confidence in _CONFIDENCE_VALUES else "low",
                "completeness": _section_completeness(completeness),
            }
        )
    return normalized


def parse_charter_analysis(
    raw: str | Mapping[str, Any],
    *,
    project_type: ProjectType | None = None,
    project_stage: ProjectStage | None = None,
) -> CharterAnalysis:
    """Validate the model's charter analysis into a ``CharterAnalysis``.

    Accepts either the raw text answer (optionally wrapped in markdown code
    fences) or an already decoded mapping. Sections are normalized to the
    eight canonical names in canonical order; names outside that list are
    discarded.
    """
    payload = _decode(raw) if isinstance(raw, str) else raw
    if not isinstance(payload, Mapping):
        raise AnalysisPayloadError("Analysis response must be a JSON object.")

    data = dict(payload)
    data["sections"] = _normalize_sections(data.get("sections"))
    if project_type is not None:
        data["projectType"] = project_type
    if project_stage is not None:
        data["projectStage"] = project_stage

    try:
        analysis = CharterAnalysis.model_validate(data)
    except ValidationError as exc:
        logger.warning("charter_analysis_invalid errors=%s", exc.error_count())
        raise AnalysisPayloadError(f"Invalid analysis structure: {exc}") from exc

    logger.info(
        "charter_analysis_parsed score=%s recommendations=%s",
        analysis.overall_score,
        len(analysis.recommendations),
    )
    return analysis
