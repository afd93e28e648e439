"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from mylist.api.dependencies.services import get_cache_backend
from mylist.config.settings import settings
from mylist.shared.cache import CacheBackend
from mylist.shared.db import ping_db
from mylist.shared.schemas.common import HealthResponse, ReadinessResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(backend: CacheBackend = Depends(get_cache_backend)):
    """
    Readiness check for Kubernetes/load balancers.

    The store must answer for the service to be ready. The cache is
    reported but does not gate readiness; requests degrade to the store
    when it is down.
    """
    database_ok = await ping_db()
    cache_ok = await backend.ping()
    body = ReadinessResponse(
        status="ready" if database_ok else "not_ready",
        database=database_ok,
        cache=cache_ok,
    )
    if not database_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(),
        )
    return body


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
