from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Sequence

from app.charter.models import MappedSection, Priority, Recommendation, SectionRecommendation
from app.charter.profile import CharterProfile, get_charter_profile

logger = logging.getLogger(__name__)

MatchStrategy = Literal["exact", "explicit", "fuzzy"]

_PRIORITY_RANK: dict[Priority, int] = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class SectionMatch:
    section: str
    strategy: MatchStrategy


def _match_exact(label: str, sections: Sequence[str], profile: CharterProfile) -> str | None:
    for name in sections:
        if name.lower() == label:
            return name
    return None


def _match_explicit(label: str, sections: Sequence[str], profile: CharterProfile) -> str | None:
    for phrase, target in profile.recommendation_mappings:
        if phrase in label and target in sections:
            return target
    return None


def _match_fuzzy(label: str, sections: Sequence[str], profile: CharterProfile) -> str | None:
    for name in sections:
        lowered = name.lower()
        if label in lowered or lowered in label:
            return name
    return None


_MATCHERS: tuple[tuple[MatchStrategy, Callable[[str, Sequence[str], CharterProfile], str | None]], ...] = (
    ("exact", _match_exact),
    ("explicit", _match_explicit),
    ("fuzzy", _match_fuzzy),
)


def resolve_section(
    label: str,
    sections: Sequence[str] | None = None,
    profile: CharterProfile | None = None,
) -> SectionMatch | None:
    """Resolve a free-text section label: exact name, then phrase table, then substring."""
    profile = profile or get_charter_profile()
    candidates = tuple(sections) if sections is not None else profile.sections
    normalized = (label or "").strip().lower()
    if not normalized:
        return None

    for strategy, matcher in _MATCHERS:
        section = matcher(normalized, candidates, profile)
        if section is not None:
            return SectionMatch(section=section, strategy=strategy)
    return None


def find_matching_section(
    label: str,
    mapped_sections: Sequence[MappedSection],
    profile: CharterProfile | None = None,
) -> MappedSection | None:
    by_name = {section.section_name: section for section in mapped_sections}
    match = resolve_section(label, [section.section_name for section in mapped_sections], profile)
    if match is None:
        return None
    return by_name[match.section]


def max_priority(recommendations: Iterable[SectionRecommendation]) -> Priority | None:
    best: Priority | None = None
    for recommendation in recommendations:
        if best is None or _PRIORITY_RANK[recommendation.priority] > _PRIORITY_RANK[best]:
            best = recommendation.priority
    return best


def link_recommendations(
    recommendations: Iterable[Recommendation],
    mapped_sections: Sequence[MappedSection],
    profile: CharterProfile | None = None,
) -> list[MappedSection]:
    """Attach each recommendation to at most one section and set max priorities.

    Mutates ``mapped_sections`` in place and returns it. Recommendations whose
    label resolves to no section are logged and dropped.
    """
    profile = profile or get_charter_profile()
    by_name = {section.section_name: section for section in mapped_sections}
    names = [section.section_name for section in mapped_sections]

    unmatched = 0
    for recommendation in recommendations:
        match = resolve_section(recommendation.section, names, profile)
        if match is None:
            unmatched += 1
            logger.info("charter_recommendation_unmatched section=%r", recommendation.section)
            continue

        target = by_name[match.section]
        target.recommendations.append(
            SectionRecommendation(
                priority=recommendation.priority,
                issue=recommendation.issue,
                suggestion=recommendation.suggestion,
            )
        )
        target.has_recommendations = True
        logger.debug(
            "charter_recommendation_linked label=%r section=%s strategy=%s",
            recommendation.section,
            match.section,
            match.strategy,
        )

    for section in mapped_sections:
        section.max_priority = max_priority(section.recommendations)

    if unmatched:
        logger.info("charter_recommendations_dropped count=%s", unmatched)
    return list(mapped_sections)
