from __future__ import annotations

import logging

from app.charter.detector import detect_sections
from app.charter.extractor import extract_sections
from app.charter.linker import link_recommendations
from app.charter.models import CharterAnalysis, ExtractedSpan, MappedSection
from app.charter.profile import CharterProfile, get_charter_profile
from app.charter.reconciler import reconcile_sections

logger = logging.getLogger(__name__)


def map_charter_to_sections(
    text: str,
    analysis: CharterAnalysis | None = None,
    profile: CharterProfile | None = None,
) -> list[MappedSection]:
    """Per-section view of a charter: local spans, verdicts and linked recommendations.

    With an ``analysis`` its section verdicts are authoritative for
    found/confidence; without one the local keyword detector fills in.
    """
    profile = profile or get_charter_profile()
    if text and text.strip():
        spans = extract_sections(text, profile)
    else:
        spans = {name: ExtractedSpan() for name in profile.sections}

    local_statuses = detect_sections(text, profile)
    verdicts = analysis.sections if analysis is not None else None
    mapped = reconcile_sections(verdicts, spans, local_statuses)

    if analysis is not None:
        logger.info(
            "charter_mapping project_type=%s project_stage=%s recommendations=%s",
            analysis.project_type,
            analysis.project_stage,
            len(analysis.recommendations),
        )
        link_recommendations(analysis.recommendations, mapped, profile)

    for section in mapped:
        logger.debug(
            "charter_section_state section=%s complete=%s confidence=%s severity=%s "
            "recommendations=%s max_priority=%s chars=%s",
            section.section_name,
            section.is_complete,
            section.confidence,
            section.severity,
            len(section.recommendations),
            section.max_priority,
            len(section.content) if section.has_real_content else 0,
        )
    return mapped
