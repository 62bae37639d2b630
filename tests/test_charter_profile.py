import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.charter import CharterConfigError, get_charter_config  # noqa: E402
from app.charter.profile import (  # noqa: E402
    CANONICAL_SECTIONS,
    build_charter_profile,
    get_charter_profile,
)


def _minimal_config():
    return {
        "sections": [
            {"name": name, "keywords": ["x"], "start_pattern": "inicio", "end_pattern": None}
            for name in CANONICAL_SECTIONS
        ],
        "recommendation_mappings": {"roi": "Presupuesto y Recursos"},
    }


class CharterProfileTests(unittest.TestCase):
    def test_repo_config_loads_all_sections(self):
        config = get_charter_config()
        self.assertIsInstance(config, dict)

        profile = get_charter_profile()
        self.assertEqual(profile.sections, CANONICAL_SECTIONS)
        self.assertIsNone(profile.boundaries["Autorización"].end)
        self.assertIsNotNone(profile.boundaries["Interesados"].end)
        self.assertIn("budget", profile.keywords["Presupuesto y Recursos"])
        self.assertEqual(profile.recommendation_mappings[0], ("presupuesto", "Presupuesto y Recursos"))

    def test_profile_tables_are_read_only(self):
        profile = get_charter_profile()
        with self.assertRaises(TypeError):
            profile.keywords["Interesados"] = ("nuevo",)

    def test_boundary_patterns_ignore_case(self):
        profile = get_charter_profile()
        self.assertIsNotNone(profile.boundaries["Requisitos de Alto Nivel"].start.search("ALCANCE: todo"))

    def test_missing_section_is_rejected(self):
        config = _minimal_config()
        config["sections"] = config["sections"][:-1]
        with self.assertRaises(CharterConfigError):
            build_charter_profile(config)

    def test_invalid_regex_is_rejected(self):
        config = _minimal_config()
        config["sections"][0]["start_pattern"] = "(unclosed"
        with self.assertRaises(CharterConfigError):
            build_charter_profile(config)

    def test_mapping_to_unknown_section_is_rejected(self):
        config = _minimal_config()
        config["recommendation_mappings"] = {"glosario": "Glosario"}
        with self.assertRaises(CharterConfigError):
            build_charter_profile(config)

    def test_minimal_config_builds(self):
        profile = build_charter_profile(_minimal_config())
        self.assertEqual(profile.keywords["Interesados"], ("x",))
        self.assertEqual(profile.recommendation_mappings, (("roi", "Presupuesto y Recursos"),))


if __name__ == "__main__":
    unittest.main()
