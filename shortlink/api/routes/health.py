"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from shortlink.api.dependencies import get_url_repository
from shortlink.core.config import settings
from shortlink.repositories.url_repository import URLRepository

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(store: URLRepository = Depends(get_url_repository)):
    """Check health of all system components."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {}
    }

    start_time = time.time()
    if await store.ping():
        health_status["components"]["database"] = {
            "status": "healthy",
            "latency_ms": round((time.time() - start_time) * 1000, 2)
        }
    else:
        health_status["status"] = "degraded"
        health_status["components"]["database"] = {"status": "unhealthy"}

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(store: URLRepository = Depends(get_url_repository)):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "database": await store.ping()}

    return {
        "ready": all(components_status.values()),
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
