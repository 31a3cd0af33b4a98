"""
LexiNote Backend — Health Check Route
=======================================

What:  Health check endpoint for container probes and the app's status badge.
How:   Runs SELECT 1 against the database and looks up the active provider.
Who:   Docker health checks; the mobile client on launch.

Status levels:
    healthy:    database reachable and an AI provider is active
    degraded:   database reachable, no active provider (AI features disabled)
    unhealthy:  database unreachable (HTTP 503)

The vendors themselves are not probed: every probe would be a billed
completion on the user's key.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote import __version__
from lexinote.database import get_db_session
from lexinote.schemas.note import HealthResponse
from lexinote.services.provider_service import provider_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(db: AsyncSession = Depends(get_db_session)):
    db_status = "connected"
    active_provider = None

    try:
        await db.execute(text("SELECT 1"))
        active = await provider_service.get_active_provider(db)
        active_provider = active.vendor if active else None
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", e)

    if db_status != "connected":
        overall = "unhealthy"
    elif active_provider is None:
        overall = "degraded"
    else:
        overall = "healthy"

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        active_provider=active_provider,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall == "unhealthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
