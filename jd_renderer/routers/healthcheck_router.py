"""
Health check endpoints for Kubernetes and monitoring.

Provides:
- /health: Service status including the headless browser
- /health/live: Liveness check (is the service running?)
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from jd_renderer.core.config import settings

router = APIRouter(tags=["healthcheck"])


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthResponse(BaseModel):
    """Full health check response."""

    status: str  # "healthy"
    service: str
    environment: str
    timestamp: str
    browser: str  # "running", "idle"


class LivenessResponse(BaseModel):
    """Liveness check response."""

    status: str = "alive"
    timestamp: str


@router.get(
    "/health",
    summary="Full health check",
    description="Returns service status and whether the headless browser is running.",
    response_model=HealthResponse,
)
async def health_check(request: Request):
    """
    Full health check endpoint.

    The browser is launched lazily on the first render, so "idle" is healthy.
    """
    browser = getattr(request.app.state, "browser", None)
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        environment=settings.environment,
        timestamp=_utc_timestamp(),
        browser="running" if browser is not None and browser.is_running else "idle",
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Kubernetes liveness check: is the service running?",
    response_model=LivenessResponse,
    responses={200: {"description": "Service is alive"}},
)
async def liveness_check():
    return LivenessResponse(timestamp=_utc_timestamp())
