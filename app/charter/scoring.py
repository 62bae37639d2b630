from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from app.charter.detector import detect_sections, section_tally
from app.charter.models import SectionStatus, ValidationResult
from app.charter.profile import CRITICAL_SECTIONS, CharterProfile

logger = logging.getLogger(__name__)

INCOMPLETE_THRESHOLD = 50
SOLID_THRESHOLD = 70

EMPTY_DOCUMENT_SUGGESTION = "El documento está vacío o no contiene texto válido"
INCOMPLETE_SUGGESTION = (
    "El charter parece estar incompleto. Considera agregar más secciones según el estándar PMI."
)
SOLID_SUGGESTION = (
    "El charter tiene una estructura sólida. Puedes mejorar agregando detalles "
    "en las secciones identificadas como parciales."
)


def _round_percent(value: float) -> int:
    # Half-up: 12.5 -> 13, 37.5 -> 38.
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_completeness(statuses: list[SectionStatus]) -> ValidationResult:
    total = len(statuses)
    found_tally = sum(section_tally(status) for status in statuses)
    completeness = _round_percent(found_tally / total * 100) if total else 0
    completeness = max(0, min(100, completeness))

    missing_sections = [status.name for status in statuses if not status.found]

    suggestions: list[str] = []
    if missing_sections:
        suggestions.append(
            f"Se encontraron {len(missing_sections)} sección(es) faltante(s): {', '.join(missing_sections)}"
        )
        missing_critical = [name for name in missing_sections if name in CRITICAL_SECTIONS]
        if missing_critical:
            suggestions.append(
                f"Secciones críticas faltantes: {', '.join(missing_critical)}. "
                "Estas secciones son esenciales para un charter completo."
            )

    if completeness < INCOMPLETE_THRESHOLD:
        suggestions.append(INCOMPLETE_SUGGESTION)
    elif completeness >= SOLID_THRESHOLD:
        suggestions.append(SOLID_SUGGESTION)

    return ValidationResult(
        completeness=completeness,
        sections=statuses,
        missing_sections=missing_sections,
        suggestions=suggestions,
    )


def validate_charter_structure(text: str, profile: CharterProfile | None = None) -> ValidationResult:
    """Standalone structural score for a charter, no model call involved."""
    statuses = detect_sections(text, profile)
    if not (text or "").strip():
        logger.info("charter_validation_empty_document")
        return ValidationResult(
            completeness=0,
            sections=statuses,
            missing_sections=[status.name for status in statuses],
            suggestions=[EMPTY_DOCUMENT_SUGGESTION],
        )

    result = score_completeness(statuses)
    logger.info(
        "charter_validation completeness=%s missing=%s",
        result.completeness,
        len(result.missing_sections),
    )
    return result
