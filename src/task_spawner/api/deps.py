"""
FastAPI dependency injection — shared singletons.

Usage in routers::

    from task_spawner.api.deps import Repository

    @router.post("/things")
    def do_thing(repo: Repository):
        ...

Manifesto:
    Dependency injection keeps routers thin.  Settings, the orchestrator
    gateway and the repository are built once per process and shared by
    every request.

Tags:
    ecs-task-spawner, api, dependency-injection, singletons

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from task_spawner.api.settings import APISettings
from task_spawner.tasks._types import OrchestratorGateway
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.gateways import EcsGateway, InMemoryGateway, create_ecs_client
from task_spawner.tasks.repository import TaskRepository

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> APISettings:
    """Cached settings — loaded once per process."""
    return APISettings()


@lru_cache(maxsize=1)
def get_deployment() -> DeploymentSettings:
    """Cached deployment settings — loaded once per process."""
    return DeploymentSettings()


# ── Repository ───────────────────────────────────────────────────────────


def build_gateway(settings: APISettings, deployment: DeploymentSettings) -> OrchestratorGateway:
    """Create the orchestrator gateway selected by ``settings.gateway_backend``."""
    if settings.gateway_backend == "memory":
        return InMemoryGateway(region=settings.aws_region)
    client = create_ecs_client(
        region=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
        max_attempts=settings.aws_max_attempts,
    )
    return EcsGateway(client, deployment)


def build_repository(settings: APISettings, deployment: DeploymentSettings) -> TaskRepository:
    """Create the repository the app serves from."""
    return TaskRepository(build_gateway(settings, deployment), deployment)


def get_repository(request: Request) -> TaskRepository:
    """The repository stored on ``app.state`` by ``create_app``."""
    return request.app.state.repository


# ── Convenience type aliases ─────────────────────────────────────────────

Repository = Annotated[TaskRepository, Depends(get_repository)]
