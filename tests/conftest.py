"""
Shared pytest fixtures and configuration for ecs-task-spawner tests.

This module provides:
- Auto-marking of tests by location (unit / integration)
- Deployment settings, work requests and raw ECS task records
- An InMemoryGateway-backed repository and FastAPI test client

Usage:
    Fixtures are auto-discovered by pytest; use them as function arguments.

    def test_something(repository, work_request):
        ...
"""

import sys
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

# Ensure task_spawner is importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from task_spawner.tasks._types import WorkRequest
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.gateways.memory import InMemoryGateway
from task_spawner.tasks.repository import TaskRepository


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "api" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_spawner_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop SPAWNER_* variables so settings tests see the defaults."""
    import os

    for key in list(os.environ):
        if key.startswith("SPAWNER_"):
            monkeypatch.delenv(key, raising=False)
    yield


# =============================================================================
# Task-layer fixtures
# =============================================================================


@pytest.fixture
def deployment() -> DeploymentSettings:
    """Deployment settings with recognisable, non-default values."""
    return DeploymentSettings(
        cluster_name="workers",
        subnet_id="subnet-test",
        security_group_id="sg-test",
        log_group="/ecs/test-worker",
        task_role_arn="arn:aws:iam::111111111111:role/task",
        execution_role_arn="arn:aws:iam::111111111111:role/exec",
    )


@pytest.fixture
def work_request() -> WorkRequest:
    return WorkRequest(
        data_location="s3://bucket/x",
        requester_id="r1",
        client_id="c1",
        vendor="bloomberg",
    )


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def repository(gateway: InMemoryGateway, deployment: DeploymentSettings) -> TaskRepository:
    return TaskRepository(gateway, deployment)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed 'current time' for deterministic normalisation."""
    return datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC)


def make_raw_task(
    task_arn: str = "arn:aws:ecs:us-east-1:111111111111:task/workers/abc",
    *,
    family: str = "worker-bloomberg",
    status: str | None = "RUNNING",
    created_at: Any = None,
    images: tuple[str, ...] = ("public.ecr.aws/soi/bloomberg-worker:latest",),
    tags: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Build an ECS-shaped raw task record for tests."""
    raw: dict[str, Any] = {
        "taskArn": task_arn,
        "taskDefinitionArn": f"arn:aws:ecs:us-east-1:111111111111:task-definition/{family}:1",
        "containers": [{"name": f"c{i}", "image": image} for i, image in enumerate(images)],
        "tags": tags if tags is not None else [],
    }
    if status is not None:
        raw["lastStatus"] = status
    if created_at is not None:
        raw["createdAt"] = created_at
    return raw


@pytest.fixture
def raw_task_factory():
    """Expose :func:`make_raw_task` to tests as a fixture."""
    return make_raw_task
