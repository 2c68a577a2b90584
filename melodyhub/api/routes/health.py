"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or the
      media root is missing (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from melodyhub.api.dependencies import get_media_library
from melodyhub.infrastructure import database
from melodyhub.infrastructure.media_library import MediaLibrary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "melodyhub-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(library: MediaLibrary = Depends(get_media_library)):
    """Readiness probe — database connectivity and media root presence."""
    db_ok = await database.db_manager.health_check() if database.db_manager else False
    media_ok = library.exists()
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "media_root": "healthy" if media_ok else "missing",
    }
    if not (db_ok and media_ok):
        logger.warning(f"Readiness check failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
