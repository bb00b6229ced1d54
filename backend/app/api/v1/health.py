"""Health check endpoint with configuration verification."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint.

    Checks:
    - LLM credential is configured (no call is made to the provider)

    Returns:
        JSON response with overall status and individual check results
    """
    checks = {}
    overall_healthy = True

    if settings.api_key_configured:
        checks["llm"] = "ok"
    else:
        logger.warning("Health check: LLM API key not configured")
        checks["llm"] = "error: API key not configured"
        overall_healthy = False

    status_code = 200 if overall_healthy else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "healthy" if overall_healthy else "unhealthy",
            "service": "tech-helper",
            "provider": settings.llm_provider,
            "checks": checks,
        },
    )
