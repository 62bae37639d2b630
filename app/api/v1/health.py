from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.charter.profile import get_charter_profile
from app.core.config.charter import CharterConfigError

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check that the service and its section tables are loaded.")
async def health_check():
    try:
        profile = get_charter_profile()
    except CharterConfigError as exc:
        return JSONResponse(status_code=503, content={"status": "degraded", "detail": str(exc)})
    return {"status": "healthy", "sections": len(profile.sections)}
