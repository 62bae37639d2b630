import re
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.charter.extractor import FALLBACK_WINDOW_CHARS, extract_section, extract_sections  # noqa: E402
from app.charter.profile import CANONICAL_SECTIONS, SectionBoundaryPattern  # noqa: E402
from charter_fixtures import SAMPLE_CHARTER  # noqa: E402


def _pattern(start, end=None):
    return SectionBoundaryPattern(
        start=re.compile(start, re.IGNORECASE),
        end=re.compile(end, re.IGNORECASE) if end is not None else None,
    )


class _ExplodingPattern:
    def search(self, *args, **kwargs):
        raise RuntimeError("catastrophic backtracking")


class PatternSectionExtractorTests(unittest.TestCase):
    def test_missing_start_pattern_returns_not_found_span(self):
        span = extract_section("Nada relevante aquí.", _pattern("Alcance:", "Hitos"))
        self.assertEqual(span.content, "")
        self.assertEqual(span.start_index, -1)
        self.assertEqual(span.end_index, -1)
        self.assertFalse(span.is_complete)

    def test_span_runs_until_end_pattern(self):
        body = "Incluye solicitud en línea, carga de documentos y dictamen automatizado."
        text = f"Intro\nAlcance: {body}\nHitos y entregables\nPiloto."
        span = extract_section(text, _pattern("Alcance:", "Hitos"))

        self.assertEqual(span.content, f"Alcance: {body}")
        self.assertEqual(span.start_index, text.index("Alcance:"))
        self.assertEqual(text[span.start_index : span.end_index], span.content)
        self.assertTrue(span.is_complete)

    def test_missing_end_pattern_uses_fixed_window(self):
        text = "Alcance: " + "a" * 3000
        span = extract_section(text, _pattern("Alcance:", "Hitos"))
        self.assertEqual(span.start_index, 0)
        self.assertEqual(span.end_index, FALLBACK_WINDOW_CHARS)
        self.assertEqual(len(span.content), FALLBACK_WINDOW_CHARS)

    def test_window_is_clamped_to_document_length(self):
        text = "Alcance: solo unas palabras"
        span = extract_section(text, _pattern("Alcance:", "Hitos"))
        self.assertEqual(span.content, text)
        self.assertEqual(span.end_index, len(text))
        self.assertFalse(span.is_complete)

    def test_section_without_end_pattern_runs_to_end_of_document(self):
        text = "Preámbulo\nControl de cambios\n" + "Versión 1.0 aprobada por el comité. " * 60
        span = extract_section(text, _pattern("Control de cambios"))
        self.assertEqual(span.start_index, text.index("Control de cambios"))
        self.assertEqual(span.content, text[span.start_index :].strip())
        self.assertGreater(len(span.content), FALLBACK_WINDOW_CHARS)

    def test_end_match_at_start_offset_is_ignored(self):
        text = "Resumen: " + "b" * 1500 + " Resumen final"
        span = extract_section(text, _pattern("Resumen:", "Resumen"))
        self.assertEqual(span.end_index, FALLBACK_WINDOW_CHARS)

    def test_content_is_trimmed_and_offsets_follow(self):
        text = "Alcance:   \n\n   Hitos"
        span = extract_section(text, _pattern("Alcance:", "Hitos"))
        self.assertEqual(span.content, "Alcance:")
        self.assertEqual(span.end_index - span.start_index, len("Alcance:"))

    def test_matching_errors_are_downgraded_to_not_found(self):
        pattern = SectionBoundaryPattern(start=_ExplodingPattern())
        span = extract_section("Alcance: algo", pattern, "Requisitos de Alto Nivel")
        self.assertEqual(span.content, "")
        self.assertEqual((span.start_index, span.end_index), (-1, -1))
        self.assertFalse(span.is_complete)

    def test_extract_sections_covers_every_canonical_section(self):
        spans = extract_sections(SAMPLE_CHARTER)
        self.assertEqual(list(spans), list(CANONICAL_SECTIONS))
        self.assertTrue(spans["Requisitos de Alto Nivel"].content.startswith("Alcance:"))
        self.assertTrue(spans["Interesados"].content.startswith("Equipo del Proyecto"))
        self.assertNotIn("ROI Esperado", spans["Interesados"].content)
        self.assertEqual(spans["Supuestos y Riesgos"].start_index, -1)
        self.assertTrue(spans["Autorización"].content.endswith("01/02/2025"))


if __name__ == "__main__":
    unittest.main()
