"""
Voxboard Backend - Health & Welcome Routes
===========================================

What:  GET / (welcome payload) and GET /health (status for probes).
Who:   Load balancers, container health checks, and humans poking the API.

Health Check Policy:
    Always HTTP 200. The body reports the database state so monitors can
    alert on it without the probe itself failing:
    - healthy:   SELECT 1 succeeded
    - degraded:  the database could not be reached
    External Google services are not probed; each call reports its own
    failures.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from voxboard import __version__
from voxboard.database import verify_connection
from voxboard.schemas.common import HealthResponse, WelcomeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get("/", response_model=WelcomeResponse, summary="Welcome message")
async def welcome() -> WelcomeResponse:
    return WelcomeResponse(message="Welcome to the Voxboard API", version=__version__)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await verify_connection()
    except Exception as e:
        db_status = "disconnected"
        overall = "degraded"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=round(time.time() - _start_time, 2),
        database=db_status,
    )
