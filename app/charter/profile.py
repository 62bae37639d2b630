from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

from app.core.config.charter import CharterConfigError, get_charter_config

CANONICAL_SECTIONS: tuple[str, ...] = (
    "Información Básica del Proyecto",
    "Propósito y Justificación",
    "Objetivos y Criterios de Éxito",
    "Requisitos de Alto Nivel",
    "Supuestos y Riesgos",
    "Presupuesto y Recursos",
    "Interesados",
    "Autorización",
)
CRITICAL_SECTIONS: tuple[str, ...] = CANONICAL_SECTIONS[:3]


@dataclass(frozen=True)
class SectionBoundaryPattern:
    start: re.Pattern[str]
    end: re.Pattern[str] | None = None


@dataclass(frozen=True)
class CharterProfile:
    """Immutable lookup tables shared by the detector, extractor and linker."""

    sections: tuple[str, ...]
    keywords: Mapping[str, tuple[str, ...]]
    boundaries: Mapping[str, SectionBoundaryPattern]
    recommendation_mappings: tuple[tuple[str, str], ...]


def _compile(pattern: Any, *, section: str, field: str) -> re.Pattern[str]:
    if not isinstance(pattern, str) or not pattern.strip():
        raise CharterConfigError(f"Section '{section}' has an empty {field}.")
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise CharterConfigError(f"Section '{section}' has an invalid {field}: {exc}") from exc


def build_charter_profile(config: Mapping[str, Any]) -> CharterProfile:
    entries: dict[str, dict[str, Any]] = {}
    for entry in config.get("sections") or []:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise CharterConfigError("Every section entry needs a 'name'.")
        name = entry["name"]
        if name not in CANONICAL_SECTIONS:
            raise CharterConfigError(f"Unknown charter section '{name}'.")
        if name in entries:
            raise CharterConfigError(f"Duplicate charter section '{name}'.")
        entries[name] = entry

    missing = [name for name in CANONICAL_SECTIONS if name not in entries]
    if missing:
        raise CharterConfigError(f"Charter config is missing sections: {', '.join(missing)}")

    keywords: dict[str, tuple[str, ...]] = {}
    boundaries: dict[str, SectionBoundaryPattern] = {}
    for name in CANONICAL_SECTIONS:
        entry = entries[name]
        keywords[name] = tuple(str(keyword) for keyword in entry.get("keywords") or [] if str(keyword).strip())
        end_raw = entry.get("end_pattern")
        boundaries[name] = SectionBoundaryPattern(
            start=_compile(entry.get("start_pattern"), section=name, field="start_pattern"),
            end=None if end_raw is None else _compile(end_raw, section=name, field="end_pattern"),
        )

    mappings: list[tuple[str, str]] = []
    for phrase, target in (config.get("recommendation_mappings") or {}).items():
        if target not in CANONICAL_SECTIONS:
            raise CharterConfigError(f"Recommendation mapping '{phrase}' targets unknown section '{target}'.")
        mappings.append((str(phrase).lower(), target))

    return CharterProfile(
        sections=CANONICAL_SECTIONS,
        keywords=MappingProxyType(keywords),
        boundaries=MappingProxyType(boundaries),
        recommendation_mappings=tuple(mappings),
    )


@lru_cache(maxsize=1)
def get_charter_profile() -> CharterProfile:
    return build_charter_profile(get_charter_config())
