"""
Structured error types for the task spawner.

Every failure the spawner can surface is a :class:`SpawnerError` subclass.
Each one carries a category, a stable machine-readable ``code`` (the value
rendered as ``error.type`` in HTTP responses) and an optional chained cause.

Manifesto:
    - **One taxonomy:** builder, gateway and repository raise from the same
      hierarchy, so the HTTP layer maps errors with a single table.
    - **Wrap, never swallow:** orchestrator SDK failures become typed errors
      with the SDK exception preserved as ``cause``.
    - **No retry semantics here:** the spawner submits once; retry policy
      lives in the boto3 client configuration.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        SpawnerError                           │
        │              (category, code, context, cause)                 │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ValidationError        NotFoundError       AuthError         │
        │  VALIDATION_ERROR       NOT_FOUND_ERROR     UNAUTHORIZED_ERROR│
        │       │                                                       │
        │  UnsupportedVendorError                                       │
        │  UNSUPPORTED_VENDOR                                           │
        │                                                               │
        │  OrchestratorError  (AWS_SDK_ERROR)                           │
        │       │                                                       │
        │  RegistrationError   RunError   NoTaskStartedError            │
        │  ListError           DescribeError                            │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = UnsupportedVendorError("acme")
    >>> err.code
    'UNSUPPORTED_VENDOR'
    >>> err.vendor
    'acme'

    >>> try:
    ...     raise ConnectionError("endpoint unreachable")
    ... except ConnectionError as e:
    ...     err = ListError("list_tasks failed", cause=e)
    >>> err.to_dict()["cause"]
    'endpoint unreachable'

Tags:
    error-handling, exception-hierarchy, ecs-task-spawner

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse classification used for logging and HTTP status selection."""

    VALIDATION = "VALIDATION"       # Bad input, unknown vendor
    NOT_FOUND = "NOT_FOUND"         # Nothing to return
    AUTH = "AUTH"                   # Missing or wrong API key
    ORCHESTRATOR = "ORCHESTRATOR"   # ECS API call failed
    INTERNAL = "INTERNAL"           # Bugs, unexpected state


class SpawnerError(Exception):
    """
    Base exception for all task spawner errors.

    Subclasses set ``default_category`` and ``code``.  Extra structured
    fields for log records go into ``context``.

    Example:
        >>> err = SpawnerError("boom")
        >>> err.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> err.to_dict()["error_type"]
        'SpawnerError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SpawnerError:
        """Attach structured metadata (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


# =============================================================================
# INPUT ERRORS
# =============================================================================


class ValidationError(SpawnerError):
    """Request data is malformed."""

    default_category = ErrorCategory.VALIDATION
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class UnsupportedVendorError(ValidationError):
    """The requested vendor has no worker image."""

    code = "UNSUPPORTED_VENDOR"

    def __init__(self, vendor: str, message: str | None = None):
        self.vendor = vendor
        super().__init__(message or f"Unsupported vendor: {vendor!r}", field="vendor")


class NotFoundError(SpawnerError):
    """A query had nothing to look at."""

    default_category = ErrorCategory.NOT_FOUND
    code = "NOT_FOUND_ERROR"


class AuthError(SpawnerError):
    """Missing or invalid API key."""

    default_category = ErrorCategory.AUTH
    code = "UNAUTHORIZED_ERROR"


# =============================================================================
# ORCHESTRATOR ERRORS
# =============================================================================


class OrchestratorError(SpawnerError):
    """An orchestrator (ECS) call failed."""

    default_category = ErrorCategory.ORCHESTRATOR
    code = "AWS_SDK_ERROR"


class RegistrationError(OrchestratorError):
    """``RegisterTaskDefinition`` was rejected or returned no ARN."""

    code = "REGISTER_TASK_DEFINITION_ERROR"


class RunError(OrchestratorError):
    """``RunTask`` failed."""

    code = "RUN_TASK_ERROR"


class NoTaskStartedError(OrchestratorError):
    """``RunTask`` succeeded but reported no started task."""

    code = "TASK_SPAWN_ERROR"

    def __init__(self, definition_id: str, message: str | None = None, **kwargs: Any):
        self.definition_id = definition_id
        super().__init__(
            message or f"No task was started for task definition {definition_id}",
            **kwargs,
        )


class ListError(OrchestratorError):
    """``ListTasks`` failed."""

    code = "LIST_TASKS_ERROR"


class DescribeError(OrchestratorError):
    """``DescribeTasks`` failed."""

    code = "DESCRIBE_TASKS_ERROR"


__all__ = [
    "ErrorCategory",
    "SpawnerError",
    "ValidationError",
    "UnsupportedVendorError",
    "NotFoundError",
    "AuthError",
    "OrchestratorError",
    "RegistrationError",
    "RunError",
    "NoTaskStartedError",
    "ListError",
    "DescribeError",
]
