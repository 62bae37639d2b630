import logging

from fastapi import APIRouter, Header, HTTPException, Request, status

from app.charter import (
    AnalysisPayloadError,
    ValidationResult,
    map_charter_to_sections,
    parse_charter_analysis,
    validate_charter_structure,
)
from app.core.config import settings
from app.core.config.charter import CharterConfigError
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key
from app.schemas.charter import MapSectionsRequest, MapSectionsResponse, ValidateCharterRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_text_size(text: str) -> None:
    if len(text) > settings.max_text_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Charter text exceeds {settings.max_text_chars} characters.",
        )


def _config_unavailable(exc: CharterConfigError) -> HTTPException:
    logger.error("charter_config_unavailable: %s", exc)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.post("/charter/validate", response_model=ValidationResult)
@rate_limit()
async def charter_validate(
    request: Request,
    payload: ValidateCharterRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    accept_language: str | None = Header(default=None, alias="Accept-Language"),
):
    _ = request
    check_api_key(x_api_key, accept_language)
    _check_text_size(payload.text)
    try:
        return validate_charter_structure(payload.text)
    except CharterConfigError as exc:
        raise _config_unavailable(exc) from exc


@router.post("/charter/sections", response_model=MapSectionsResponse)
@rate_limit()
async def charter_sections(
    request: Request,
    payload: MapSectionsRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    accept_language: str | None = Header(default=None, alias="Accept-Language"),
):
    _ = request
    check_api_key(x_api_key, accept_language)
    _check_text_size(payload.text)
    try:
        analysis = None
        if payload.analysis is not None:
            analysis = parse_charter_analysis(
                payload.analysis,
                project_type=payload.project_type,
                project_stage=payload.project_stage,
            )
        sections = map_charter_to_sections(payload.text, analysis)
        local_validation = validate_charter_structure(payload.text)
    except AnalysisPayloadError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": exc.code, "message": str(exc)},
        ) from exc
    except CharterConfigError as exc:
        raise _config_unavailable(exc) from exc

    return MapSectionsResponse(sections=sections, local_validation=local_validation)
