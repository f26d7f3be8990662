# =============================================================================
# app/routers/health.py - Health Endpoints
# =============================================================================
# /api/health        process is up, plus environment and version
# /api/health/ready  document store and blob store both answer
# /api/health/live   bare liveness check
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import BlobStoreDep, StoreDep

logger = logging.getLogger(__name__)

router = APIRouter()

VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_backend(name: str, check: Callable[[], None]) -> str:
    """Run a backend check and describe the outcome in one word or a short reason."""
    try:
        check()
    except Exception as e:
        logger.warning(f"Readiness check for {name} failed: {e}")
        return f"unhealthy: {str(e)[:50]}"
    return "healthy"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class BackendChecks(BaseModel):
    """Outcome per backend: "healthy" or "unhealthy: <reason>"."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    status: str
    checks: BackendChecks
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Report that the API process is serving requests."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: StoreDep, blob_store: BlobStoreDep):
    """
    Check the backends a catalog request depends on.

    Answers 200 either way; `status` is "degraded" when any backend fails.
    """
    checks = BackendChecks(
        database=_check_backend("document store", store.ping),
        storage=_check_backend("blob store", blob_store.check),
    )
    ready = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
