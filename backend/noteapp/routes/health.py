"""
NoteApp Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
Why:   The only dependency this service has is a writable data directory;
       without it every registration and note write fails.
How:   Checks that data_dir exists and is writable by the server process.

Status levels:
    - healthy:   data directory writable
    - unhealthy: data directory missing or read-only
"""

import logging
import os
import time

from fastapi import APIRouter, Request

from noteapp import __version__
from noteapp.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    data_path = request.app.state.settings.data_path

    if data_path.is_dir() and os.access(data_path, os.W_OK):
        storage, overall = "writable", "healthy"
    else:
        storage, overall = "unwritable", "unhealthy"
        logger.warning("Health check: data directory %s is not writable", data_path)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
