"""Task-layer types and the orchestrator gateway protocol.

This module defines the records that flow through the spawner:

- WorkRequest: what a client asks for (data location, requester, client, vendor)
- TaskDefinition: the fully-resolved container task handed to the orchestrator
- Tag / EnvVar: key/value pairs in orchestrator wire order
- TaskFamilyQuery / TagQuery: the two read-path filters
- TaskInfo: the normalised view of one orchestrator task
- OrchestratorGateway: Protocol for register / run / list / describe

Design Notes:
    Records are frozen dataclasses, not Pydantic models.  Pydantic lives at
    the HTTP boundary (``task_spawner.api.schemas``); inside the task layer
    the data is already validated and never mutated.

    ``RawTask`` is deliberately loose (``Mapping[str, Any]``).  Gateways hand
    back records shaped like the ECS ``Task`` structure and the normaliser is
    the only code that reads them.

Architecture:

    .. code-block:: text

        WorkRequest ──build──▶ TaskDefinition ──register/run──▶ RawTask
                                                                  │
        TaskFamilyQuery / TagQuery ──list/describe──▶ RawTask ────┤
                                                                  ▼
                                                     normalize ─▶ TaskInfo

See Also:
    tasks.builder — WorkRequest → TaskDefinition
    tasks.normalizer — RawTask → TaskInfo
    tasks.gateways — OrchestratorGateway implementations
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from task_spawner.core.errors import ValidationError

RawTask = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Key/value pairs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tag:
    """Key/value metadata attached to a task."""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class EnvVar:
    """Environment variable injected into the worker container."""

    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def _require_non_empty(**fields: str) -> None:
    for name, value in fields.items():
        if not value:
            raise ValidationError(f"{name} must not be empty", field=name)


@dataclass(frozen=True)
class WorkRequest:
    """A client's request to run one worker.

    Example:
        >>> WorkRequest(
        ...     data_location="s3://bucket/x",
        ...     requester_id="r1",
        ...     client_id="c1",
        ...     vendor="bloomberg",
        ... )
    """

    data_location: str
    requester_id: str
    client_id: str
    vendor: str

    def __post_init__(self) -> None:
        _require_non_empty(
            data_location=self.data_location,
            requester_id=self.requester_id,
            client_id=self.client_id,
            vendor=self.vendor,
        )


@dataclass(frozen=True)
class TaskFamilyQuery:
    """Select tasks whose task-definition ARN contains ``family_name``."""

    family_name: str

    def __post_init__(self) -> None:
        _require_non_empty(family_name=self.family_name)


@dataclass(frozen=True)
class TagQuery:
    """Select tasks carrying the tag ``key=value`` exactly."""

    key: str
    value: str

    def __post_init__(self) -> None:
        _require_non_empty(key=self.key)


# ---------------------------------------------------------------------------
# Task definition
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskDefinition:
    """A fully-resolved container task, ready for registration.

    Built once per spawn by :class:`~task_spawner.tasks.builder.TaskSpecBuilder`.
    Tag keys are unique within one definition.
    """

    family: str
    cluster: str
    subnet: str
    security_group: str
    image: str
    log_group: str
    task_role: str
    execution_role: str
    tags: tuple[Tag, ...] = ()
    env_vars: tuple[EnvVar, ...] = ()

    def __post_init__(self) -> None:
        keys = [t.key for t in self.tags]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValidationError(
                f"Duplicate tag keys in task definition: {', '.join(duplicates)}",
                field="tags",
            )
        for tag in self.tags:
            if not tag.key or not tag.value:
                raise ValidationError(
                    f"Tag {tag.key!r} must have a non-empty key and value",
                    field="tags",
                )


# ---------------------------------------------------------------------------
# Task info
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Normalised view of one orchestrator task.

    Produced only by :func:`~task_spawner.tasks.normalizer.normalize`.
    ``cpu_usage`` and ``memory_usage`` are always None until a metrics
    source is wired in; they are part of the wire shape already.
    """

    task_id: str
    status: str
    created_at: datetime
    running_duration: timedelta | None
    image: str
    cpu_usage: float | None = None
    memory_usage: float | None = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire shape."""
        return {
            "task_arn": self.task_id,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "running_duration": (
                self.running_duration.total_seconds()
                if self.running_duration is not None
                else None
            ),
            "image": self.image,
            "cpu_usage": self.cpu_usage,
            "memory_usage": self.memory_usage,
            "tags": [t.to_dict() for t in self.tags],
        }


# ---------------------------------------------------------------------------
# Orchestrator gateway protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class OrchestratorGateway(Protocol):
    """The four orchestrator capabilities the spawner depends on.

    Implementations must be safe for concurrent use by multiple in-flight
    requests.  Every method raises a typed
    :class:`~task_spawner.core.errors.OrchestratorError` subclass on failure.

    .. code-block:: text

        register_definition(definition) → definition id  | RegistrationError
        run(cluster, id, definition)    → [RawTask]      | RunError
        list_task_ids(cluster)          → [task id]      | ListError
        describe(cluster, ids)          → [RawTask]      | DescribeError
    """

    def register_definition(self, definition: TaskDefinition) -> str:
        """Register ``definition`` and return its id (ARN)."""
        ...

    def run(
        self,
        cluster: str,
        definition_id: str,
        definition: TaskDefinition,
    ) -> list[RawTask]:
        """Start one task from ``definition_id``; returns started tasks."""
        ...

    def list_task_ids(self, cluster: str) -> list[str]:
        """List every task id in ``cluster``; empty list when there are none."""
        ...

    def describe(self, cluster: str, ids: Sequence[str]) -> list[RawTask]:
        """Describe the tasks in ``ids``."""
        ...


__all__ = [
    "EnvVar",
    "OrchestratorGateway",
    "RawTask",
    "Tag",
    "TagQuery",
    "TaskDefinition",
    "TaskFamilyQuery",
    "TaskInfo",
    "WorkRequest",
]
