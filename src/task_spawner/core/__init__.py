"""Core primitives shared by every layer: errors, logging, settings, health.

Manifesto:
    Nothing in ``core`` knows about ECS or HTTP routing.  The task layer
    and the API layer both build on these primitives so that errors and
    log records look the same no matter where they were raised.

Tags:
    ecs-task-spawner, core, primitives

Doc-Types:
    api-reference
"""

from task_spawner.core.errors import (
    AuthError,
    DescribeError,
    ErrorCategory,
    ListError,
    NoTaskStartedError,
    NotFoundError,
    OrchestratorError,
    RegistrationError,
    RunError,
    SpawnerError,
    UnsupportedVendorError,
    ValidationError,
)
from task_spawner.core.logging import configure_logging, get_logger

__all__ = [
    "AuthError",
    "DescribeError",
    "ErrorCategory",
    "ListError",
    "NoTaskStartedError",
    "NotFoundError",
    "OrchestratorError",
    "RegistrationError",
    "RunError",
    "SpawnerError",
    "UnsupportedVendorError",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
