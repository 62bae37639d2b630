from __future__ import annotations

import logging
from typing import Iterable, Mapping

from app.charter.models import (
    SECTION_NOT_FOUND_CONTENT,
    Confidence,
    ExtractedSpan,
    MappedSection,
    SectionStatus,
    SectionVerdict,
    Severity,
)
from app.charter.profile import CANONICAL_SECTIONS

logger = logging.getLogger(__name__)


def infer_severity(found: bool, confidence: Confidence) -> Severity:
    if not found:
        return "high"
    if confidence == "low":
        return "high"
    if confidence == "medium":
        return "medium"
    return "low"


def _index_verdicts(verdicts: Iterable[SectionVerdict]) -> dict[str, SectionVerdict]:
    indexed: dict[str, SectionVerdict] = {}
    for verdict in verdicts:
        if verdict.name not in CANONICAL_SECTIONS:
            logger.info("charter_verdict_ignored section=%r reason=unknown_section", verdict.name)
            continue
        indexed.setdefault(verdict.name, verdict)
    return indexed


def reconcile_sections(
    verdicts: Iterable[SectionVerdict] | None,
    spans: Mapping[str, ExtractedSpan],
    local_statuses: Iterable[SectionStatus] | None = None,
) -> list[MappedSection]:
    """Build the eight per-section records from external verdicts and local spans.

    Found/confidence come from the external verdict when it names the section,
    else from the local keyword status. Content and offsets always come from
    the local span; the two signals are kept apart and combined only in
    ``is_missing``.
    """
    external = _index_verdicts(verdicts or [])
    local = {status.name: status for status in local_statuses or []}

    mapped: list[MappedSection] = []
    for name in CANONICAL_SECTIONS:
        verdict = external.get(name)
        status = local.get(name)
        if verdict is not None:
            found, confidence = verdict.found, verdict.confidence
        elif status is not None:
            found, confidence = status.found, status.confidence
        else:
            found, confidence = False, "low"

        span = spans.get(name) or ExtractedSpan()
        has_real_content = bool(span.content)
        if found and not has_real_content:
            logger.debug("charter_section_found_without_span section=%s", name)

        mapped.append(
            MappedSection(
                section_name=name,
                content=span.content if has_real_content else SECTION_NOT_FOUND_CONTENT,
                start_index=span.start_index,
                end_index=span.end_index,
                is_complete=found,
                confidence=confidence,
                severity=infer_severity(found, confidence),
                has_recommendations=False,
                recommendations=[],
                max_priority=None,
                has_real_content=has_real_content,
                is_missing=not found or not has_real_content,
            )
        )
    return mapped
