"""
API-specific settings.

Extends :class:`~task_spawner.core.settings.SpawnerBaseSettings` with the
parameters that govern the REST transport (auth, CORS, which orchestrator
gateway to use and how to reach AWS).

All values can be overridden via environment variables prefixed with
``SPAWNER_``.  Deployment parameters for the spawned workers live in
:class:`~task_spawner.tasks.config.DeploymentSettings` (``SPAWNER_ECS_``).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from task_spawner import __version__
from task_spawner.core.settings import SpawnerBaseSettings


class APISettings(SpawnerBaseSettings):
    """Settings for the spawner REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``SPAWNER_API_KEY``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="SPAWNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── API ──────────────────────────────────────────────────────────────
    api_title: str = Field(default="ecs-task-spawner", description="OpenAPI title")
    api_version: str = Field(default=__version__, description="OpenAPI version string")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Auth ─────────────────────────────────────────────────────────────
    api_key: str | None = Field(default=None, description="API key required on worker routes")

    # ── Orchestrator ─────────────────────────────────────────────────────
    gateway_backend: Literal["ecs", "memory"] = Field(
        default="ecs",
        description="'ecs' talks to AWS; 'memory' keeps tasks in-process",
    )
    aws_region: str = Field(default="us-east-1", description="Region of the ECS cluster")
    aws_endpoint_url: str | None = Field(default=None, description="Override ECS endpoint (LocalStack)")
    aws_max_attempts: int = Field(default=3, ge=1, description="botocore retry attempts")
