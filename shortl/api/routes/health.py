"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from shortl.core.config import settings
from shortl.db.base import DatabaseHealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check():
    """Check health of the application and its database."""
    database = await DatabaseHealthCheck.check_connection()
    healthy = database["status"] == "healthy"

    # Error detail stays in the server log
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "degraded",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT.value,
            "timestamp": time.time(),
            "components": {
                "database": {
                    "status": database["status"],
                    "latency_ms": database["latency_ms"],
                }
            },
        },
    )


@router.get(
    "/health/ready",
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe():
    """Check if application is ready to handle requests."""
    database = await DatabaseHealthCheck.check_connection()
    components_status = {"api": True, "database": database["status"] == "healthy"}
    is_ready = all(components_status.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"ready": is_ready, "components": components_status},
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
