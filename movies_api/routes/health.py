"""
Movies API — Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB through the storage accessor and reports the result.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   MongoDB answers the ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from movies_api import __version__
from movies_api.database import get_movie_store
from movies_api.schemas.movie import HealthResponse
from movies_api.services.store_base import MovieStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: MovieStore = Depends(get_movie_store),
) -> HealthResponse:
    """Probe MongoDB connectivity and report aggregate status with uptime."""
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
