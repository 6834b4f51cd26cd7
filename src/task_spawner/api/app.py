"""
FastAPI application factory.

``create_app()`` wires logging, middleware, routers and error handlers into
a single ``FastAPI`` instance, and stores the shared
:class:`~task_spawner.tasks.repository.TaskRepository` on ``app.state``.

Manifesto:
    The app factory is the single composition root — middleware, routers,
    the orchestrator gateway and lifecycle hooks are wired here so the rest
    of the codebase never touches ``FastAPI`` directly.

Tags:
    ecs-task-spawner, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from task_spawner.api.deps import build_repository, get_deployment, get_settings
from task_spawner.api.middleware.auth import AuthMiddleware
from task_spawner.api.middleware.errors import (
    spawner_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from task_spawner.api.middleware.request_id import RequestIDMiddleware
from task_spawner.api.settings import APISettings
from task_spawner.core.errors import SpawnerError
from task_spawner.core.health import create_health_router
from task_spawner.core.logging import configure_logging, get_logger
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.repository import TaskRepository


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: APISettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    log = get_logger("task_spawner.api")
    deployment = app.state.repository.deployment
    log.info(
        "spawner_api_starting",
        version=app.version,
        gateway=settings.gateway_backend,
        cluster=deployment.cluster_name,
    )
    yield
    log.info("spawner_api_shutting_down")


def create_app(
    *,
    settings: APISettings | None = None,
    deployment: DeploymentSettings | None = None,
    repository: TaskRepository | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : APISettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    deployment : DeploymentSettings | None
        Override worker deployment parameters.
    repository : TaskRepository | None
        Pre-built repository (tests pass one over an ``InMemoryGateway``).
        When ``None`` one is built from ``settings.gateway_backend``.
    """
    settings = settings or get_settings()
    if repository is None:
        repository = build_repository(settings, deployment or get_deployment())

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.repository = repository
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (last added is outermost) ─────────────────────────
    app.add_middleware(AuthMiddleware, api_key=settings.api_key)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(SpawnerError, spawner_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from task_spawner.api.routers import workers

    app.include_router(create_health_router("ecs-task-spawner", version=settings.api_version))
    app.include_router(workers.router, tags=["workers"])

    return app
