from __future__ import annotations

from pathlib import Path
from typing import Any

_CHARTER_CONFIG_CACHE: dict[str, Any] | None = None
_CHARTER_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "charter_sections.yaml"


class CharterConfigError(RuntimeError):
    """Raised when the charter section tables cannot be loaded."""


def get_charter_config() -> dict[str, Any]:
    """Load section tables from repo-level config/charter_sections.yaml and cache them."""
    global _CHARTER_CONFIG_CACHE

    if _CHARTER_CONFIG_CACHE is not None:
        return _CHARTER_CONFIG_CACHE

    if not _CHARTER_CONFIG_PATH.exists():
        raise CharterConfigError(
            f"Charter config not found at '{_CHARTER_CONFIG_PATH}'. "
            "Expected file: config/charter_sections.yaml"
        )

    import yaml

    try:
        raw = _CHARTER_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise CharterConfigError(
            f"Failed to read charter config '{_CHARTER_CONFIG_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CharterConfigError(
            f"Invalid YAML in charter config '{_CHARTER_CONFIG_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise CharterConfigError(
            f"Invalid charter config '{_CHARTER_CONFIG_PATH}': expected a top-level mapping."
        )
    if not isinstance(parsed.get("sections"), list):
        raise CharterConfigError(
            f"Invalid charter config '{_CHARTER_CONFIG_PATH}': 'sections' must be a list."
        )

    _CHARTER_CONFIG_CACHE = parsed
    return _CHARTER_CONFIG_CACHE

