from __future__ import annotations

from app.charter.models import Confidence, SectionStatus
from app.charter.profile import CharterProfile, get_charter_profile

HIGH_CONFIDENCE_MIN_MATCHES = 3

_FOUND_TALLY: dict[Confidence, float] = {"high": 1.0, "medium": 0.5, "low": 0.0}


def _matched_keywords(normalized_text: str, keywords: tuple[str, ...]) -> list[str]:
    return [keyword for keyword in keywords if keyword.lower() in normalized_text]


def _confidence_for(match_count: int) -> Confidence:
    if match_count >= HIGH_CONFIDENCE_MIN_MATCHES:
        return "high"
    if match_count >= 1:
        return "medium"
    return "low"


def section_tally(status: SectionStatus) -> float:
    """Contribution of a section to the completeness score: 1.0 full, 0.5 partial, 0 missing."""
    if not status.found:
        return 0.0
    return _FOUND_TALLY[status.confidence]


def detect_sections(text: str, profile: CharterProfile | None = None) -> list[SectionStatus]:
    """Keyword presence per canonical section, in canonical order.

    Keywords match as plain substrings of the lowercased text, so "team"
    also hits "teamwork". Blank text yields every section as missing.
    """
    profile = profile or get_charter_profile()
    normalized = (text or "").lower()
    blank = not normalized.strip()

    statuses: list[SectionStatus] = []
    for name in profile.sections:
        matched = [] if blank else _matched_keywords(normalized, profile.keywords.get(name, ()))
        confidence = _confidence_for(len(matched))
        statuses.append(
            SectionStatus(
                name=name,
                found=confidence != "low",
                confidence=confidence,
                matched_keywords=matched,
            )
        )
    return statuses
