"""
Storefront Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the database and checks that the upload
       directory exists and is writable.

    healthy:   database reachable and upload directory writable (HTTP 200)
    unhealthy: either check failed (HTTP 200, status flag for monitoring)
"""

import logging
import os
import time
from pathlib import Path

from fastapi import APIRouter
from sqlalchemy import text

from storefront import __version__
from storefront.config import settings
from storefront.database import engine
from storefront.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    upload_status = "writable"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    upload_dir = Path(settings.upload_dir)
    if not (upload_dir.is_dir() and os.access(upload_dir, os.W_OK)):
        upload_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: upload directory not writable: %s", upload_dir)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        upload_dir=upload_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
