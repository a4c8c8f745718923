# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Health check endpoints that tell load balancers and operators whether the service is
# running and whether its storage is reachable.
# 🧪 Purpose (Technical Summary):
# Liveness, readiness and summary health endpoints. Readiness consults the
# AuthContainer's storage health (database ping for the database backend).
# 🔗 Dependencies:
# FastAPI, app.modules.authentication.presentation.dependencies (container)
# 🔄 Connected Modules / Calls From:
# app.main.py (mounted at the root), monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.modules.authentication.container import AuthContainer
from app.modules.authentication.presentation.dependencies import get_container

logger = logging.getLogger(__name__)

# Create router for health endpoints
health_router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring")
async def health_check(container: AuthContainer = Depends(get_container)) -> JSONResponse:
    """
    Basic health check endpoint.

    Reports service identity and configuration without touching storage.
    """
    settings = container.settings
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": _timestamp(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "storage": settings.STORAGE_BACKEND,
        }
    )


@health_router.get("/health/live",
                   summary="Liveness Probe",
                   description="Kubernetes liveness probe endpoint")
async def liveness_probe() -> Response:
    return Response(status_code=200, content="OK")


@health_router.get("/health/ready",
                   summary="Readiness Probe",
                   description="Kubernetes readiness probe endpoint")
async def readiness_probe(container: AuthContainer = Depends(get_container)) -> JSONResponse:
    """
    Readiness probe.

    Returns 200 if storage is reachable, 503 otherwise.
    """
    storage = await container.health()
    if storage["status"] == "healthy":
        return JSONResponse(
            status_code=200,
            content={"status": "ready", "storage": storage, "timestamp": _timestamp()}
        )

    logger.warning(f"Readiness probe failed: {storage.get('error')}")
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": "storage_unhealthy", "timestamp": _timestamp()}
    )
