"""Health check endpoints; used for liveness and readiness probes."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from practice_access.core.config import get_settings
from practice_access.infrastructure.persistence import database
from practice_access.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Record store unreachable", "model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 if the record store answers SELECT 1; 503 otherwise."""
    try:
        async with database.session_scope() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(
                status="not_ready", message="Record store unavailable"
            ).model_dump(),
        )
    return ReadinessResponse()
