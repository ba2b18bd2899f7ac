"""Health check endpoint for the Watchdog API."""

import time

from fastapi import APIRouter

from ...config.logging import get_logger
from ...config.settings import get_settings
from ...ormdb import check_database_health
from ..models.responses import HealthResponse

logger = get_logger(__name__)
router = APIRouter()

SERVICE_NAME = "government-watchdog-api"

# Track application start time for uptime calculation
_app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Service status, version, uptime and record store connectivity",
)
def health_check() -> HealthResponse:
    """Report service health; an unreachable store degrades the status."""
    database = check_database_health()
    status = "ok" if database["connectivity"] else "degraded"

    if status != "ok":
        logger.warning("Health check degraded", database=database["status"])

    return HealthResponse(
        status=status,
        service=SERVICE_NAME,
        version=get_settings().app_version,
        uptime=round(time.time() - _app_start_time, 3),
        database=database["status"],
    )
