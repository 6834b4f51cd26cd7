"""Health check endpoints for the spawner HTTP service.

``create_health_router()`` gives a FastAPI app two unauthenticated probes:

- ``GET /health``       — service status envelope
- ``GET /health/live``  — liveness probe, always 200

Quick start::

    from task_spawner.core.health import create_health_router

    app.include_router(create_health_router("ecs-task-spawner", version="0.1.0"))

The spawner keeps no state of its own and talks to ECS only on demand, so
the health response reflects the process, not the orchestrator.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

# Set when the service first imports this module.
_START_TIME = time.monotonic()


class HealthResponse(BaseModel):
    """Health envelope returned from ``GET /health``.

    Fields
    ──────
    status    : Always ``ok`` while the process serves requests
    service   : Human-readable service name
    version   : Semver string
    uptime_s  : Seconds since startup
    timestamp : ISO-8601 UTC
    """

    status: str = "ok"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


class LivenessResponse(BaseModel):
    """Response for liveness probes — always returns ``{"status": "alive"}``."""

    status: str = "alive"


def create_health_router(
    service_name: str,
    version: str,
    prefix: str = "/health",
) -> APIRouter:
    """Create an ``APIRouter`` with the health endpoints.

    Parameters
    ----------
    service_name : str
        Human-readable name (e.g. ``"ecs-task-spawner"``).
    version : str
        Service version string.
    prefix : str
        URL prefix (default ``"/health"``).
    """
    router = APIRouter(tags=["health"])

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Primary health probe."""
        return HealthResponse(service=service_name, version=version)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        """Liveness probe — always 200 if the process is running."""
        return LivenessResponse()

    return router
