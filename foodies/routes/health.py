"""
Foodies Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the meals store and checks that the images
       directory is writable.

Status levels:
    - healthy:   database reachable and images directory writable
    - unhealthy: either dependency is down (shares would fail)
"""

import logging
import os
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text

from foodies import __version__
from foodies.database import engine
from foodies.dependencies import get_image_service
from foodies.schemas.meal import HealthResponse
from foodies.services.file_service import ImageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(images: ImageService = Depends(get_image_service)) -> HealthResponse:
    db_status = "connected"
    images_status = "writable"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if not (images.images_dir.is_dir() and os.access(images.images_dir, os.W_OK)):
        images_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: images dir not writable: %s", images.images_dir)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        images_dir=images_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
