from .analysis import AnalysisPayloadError, parse_charter_analysis
from .detector import detect_sections, section_tally
from .extractor import extract_section, extract_sections
from .linker import SectionMatch, find_matching_section, link_recommendations, max_priority, resolve_section
from .models import (
    SECTION_NOT_FOUND_CONTENT,
    CharterAnalysis,
    ExtractedSpan,
    MappedSection,
    Recommendation,
    SectionRecommendation,
    SectionStatus,
    SectionVerdict,
    ValidationResult,
)
from .pipeline import map_charter_to_sections
from .profile import CANONICAL_SECTIONS, CRITICAL_SECTIONS, CharterProfile, get_charter_profile
from .reconciler import infer_severity, reconcile_sections
from .scoring import score_completeness, validate_charter_structure

__all__ = [
    "AnalysisPayloadError",
    "parse_charter_analysis",
    "detect_sections",
    "section_tally",
    "extract_section",
    "extract_sections",
    "SectionMatch",
    "find_matching_section",
    "link_recommendations",
    "max_priority",
    "resolve_section",
    "SECTION_NOT_FOUND_CONTENT",
    "CharterAnalysis",
    "ExtractedSpan",
    "MappedSection",
    "Recommendation",
    "SectionRecommendation",
    "SectionStatus",
    "SectionVerdict",
    "ValidationResult",
    "map_charter_to_sections",
    "CANONICAL_SECTIONS",
    "CRITICAL_SECTIONS",
    "CharterProfile",
    "get_charter_profile",
    "infer_severity",
    "reconcile_sections",
    "score_completeness",
    "validate_charter_structure",
]
