"""
HeroVault Backend - Health Check Route
=======================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Runs SELECT 1 through a document store and reports the result.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from herovault import __version__
from herovault.dependencies import get_superhero_service
from herovault.exceptions import StoreError
from herovault.schemas.common import HealthResponse
from herovault.services.superhero_service import SuperheroService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    service: SuperheroService = Depends(get_superhero_service),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await service.store.ping()
    except StoreError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", e.context.get("error", e.message))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
