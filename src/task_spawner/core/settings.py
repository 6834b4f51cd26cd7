"""Shared base settings for the task spawner.

``SpawnerBaseSettings`` carries the knobs every entry point needs (bind
address, debug mode, log level and format).  Each layer subclasses it with
its own ``env_prefix``.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not on first request
    - **Environment-driven:** Reads from env vars and ``.env`` files
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from task_spawner.core.settings import SpawnerBaseSettings
    >>> class WorkerSettings(SpawnerBaseSettings):
    ...     model_config = {"env_prefix": "WORKER_"}
    ...     pool_size: int = 4

Tags:
    settings, configuration, pydantic, environment, ecs-task-spawner

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpawnerBaseSettings(BaseSettings):
    """Common settings shared by the API server and the CLI.

    Fields
    ──────
    host       : Bind address for the HTTP server
    port       : Bind port for the HTTP server
    debug      : Enable debug mode (exception details in 500 bodies)
    log_level  : Structlog log level
    log_json   : Force JSON (True) or console (False) logs; None auto-detects
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Network ──────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3000

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool | None = Field(
        default=None,
        description="JSON logs when True, console when False, auto when unset",
    )
