import sys
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.config import settings  # noqa: E402
from app.core.config.charter import CharterConfigError  # noqa: E402
from app.main import app  # noqa: E402
from charter_fixtures import SAMPLE_CHARTER, sample_analysis_payload  # noqa: E402

client = TestClient(app)


def _registered_paths() -> set[str]:
    return {route.path for route in app.routes}


def test_charter_routes_are_registered() -> None:
    paths = _registered_paths()

    assert "/v1/health" in paths
    assert "/v1/charter/validate" in paths
    assert "/v1/charter/sections" in paths


def test_health_endpoint_reports_loaded_sections() -> None:
    response = client.get("/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "sections": 8}


def test_validate_empty_document() -> None:
    response = client.post("/v1/charter/validate", json={"text": "  "})

    assert response.status_code == 200
    body = response.json()
    assert body["completeness"] == 0
    assert len(body["missingSections"]) == 8
    assert len(body["suggestions"]) == 1
    assert [section["found"] for section in body["sections"]] == [False] * 8


def test_sections_with_analysis() -> None:
    response = client.post(
        "/v1/charter/sections",
        json={
            "text": SAMPLE_CHARTER,
            "analysis": sample_analysis_payload(),
            "projectType": "operational",
            "projectStage": "draft",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["sections"]) == 8
    budget = next(s for s in body["sections"] if s["sectionName"] == "Presupuesto y Recursos")
    assert budget["maxPriority"] == "medium"
    assert budget["hasRecommendations"] is True
    assert body["localValidation"]["completeness"] > 0


def test_sections_without_analysis_uses_local_detection() -> None:
    response = client.post("/v1/charter/sections", json={"text": SAMPLE_CHARTER})

    assert response.status_code == 200
    sections = response.json()["sections"]
    assert all(section["maxPriority"] is None for section in sections)


def test_truncated_analysis_is_rejected() -> None:
    response = client.post(
        "/v1/charter/sections",
        json={"text": SAMPLE_CHARTER, "analysis": '{"overallScore": 70, "sections": ['},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "truncated"


def test_missing_api_key_is_rejected() -> None:
    with patch("app.core.security.settings", replace(settings, api_key="secret")):
        response = client.post("/v1/charter/validate", json={"text": SAMPLE_CHARTER})

    assert response.status_code == 401
    assert response.json()["detail"].startswith("Por favor")


def test_wrong_api_key_message_follows_accept_language() -> None:
    with patch("app.core.security.settings", replace(settings, api_key="secret")):
        response = client.post(
            "/v1/charter/sections",
            json={"text": SAMPLE_CHARTER},
            headers={"X-API-Key": "wrong", "Accept-Language": "en-US,en;q=0.9"},
        )

    assert response.status_code == 401
    assert response.json()["detail"] == "Please provide a valid API key to analyze the charter."


def test_valid_api_key_is_accepted() -> None:
    with patch("app.core.security.settings", replace(settings, api_key="secret")):
        response = client.post(
            "/v1/charter/validate",
            json={"text": SAMPLE_CHARTER},
            headers={"X-API-Key": "secret"},
        )

    assert response.status_code == 200


def test_oversized_text_is_rejected() -> None:
    with patch("app.api.v1.charter.settings", replace(settings, max_text_chars=10)):
        response = client.post("/v1/charter/validate", json={"text": SAMPLE_CHARTER})

    assert response.status_code == 413
    assert "10 characters" in response.json()["detail"]


def test_unavailable_section_tables_return_503() -> None:
    with patch(
        "app.api.v1.charter.map_charter_to_sections",
        side_effect=CharterConfigError("Charter config not found"),
    ):
        response = client.post("/v1/charter/sections", json={"text": SAMPLE_CHARTER})

    assert response.status_code == 503
    assert response.json()["detail"] == "Charter config not found"
