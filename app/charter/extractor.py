from __future__ import annotations

import logging

from app.charter.models import ExtractedSpan
from app.charter.profile import CharterProfile, SectionBoundaryPattern, get_charter_profile

logger = logging.getLogger(__name__)

FALLBACK_WINDOW_CHARS = 1000
MIN_COMPLETE_CHARS = 50


def _not_found() -> ExtractedSpan:
    return ExtractedSpan(content="", start_index=-1, end_index=-1, is_complete=False)


def _span_end(text: str, start: int, pattern: SectionBoundaryPattern) -> int:
    if pattern.end is None:
        return len(text)
    end_match = pattern.end.search(text, start)
    if end_match is not None and end_match.start() > start:
        return end_match.start()
    return min(start + FALLBACK_WINDOW_CHARS, len(text))


def extract_section(text: str, pattern: SectionBoundaryPattern, section_name: str = "") -> ExtractedSpan:
    """Approximate span of one section, bounded by its start/end patterns.

    A missing start match is an ordinary outcome and returns the not-found
    span. Sections without an end pattern run to the end of the document;
    sections whose end pattern does not match get a fixed window instead.
    """
    try:
        start_match = pattern.start.search(text or "")
        if start_match is None:
            logger.debug("charter_section_start_missing section=%s", section_name)
            return _not_found()

        start = start_match.start()
        end = _span_end(text, start, pattern)

        raw = text[start:end]
        content = raw.strip()
        if not content:
            return _not_found()

        content_start = start + (len(raw) - len(raw.lstrip()))
        content_end = content_start + len(content)
        logger.debug("charter_section_extracted section=%s chars=%s", section_name, len(content))
        return ExtractedSpan(
            content=content,
            start_index=content_start,
            end_index=content_end,
            is_complete=len(content) > MIN_COMPLETE_CHARS,
        )
    except Exception as exc:  # noqa: BLE001 - one bad section must not abort the analysis
        logger.warning("charter_section_extract_failed section=%s: %s", section_name, exc)
        return _not_found()


def extract_sections(text: str, profile: CharterProfile | None = None) -> dict[str, ExtractedSpan]:
    profile = profile or get_charter_profile()
    spans: dict[str, ExtractedSpan] = {}
    for name in profile.sections:
        pattern = profile.boundaries.get(name)
        spans[name] = extract_section(text, pattern, name) if pattern is not None else _not_found()
    return spans
