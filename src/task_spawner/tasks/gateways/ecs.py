"""AWS ECS gateway backed by boto3.

Renders :class:`TaskDefinition` records into ECS API calls and wraps every
botocore failure in the matching typed error.

.. code-block:: text

    register_definition  → RegisterTaskDefinition   (RegistrationError)
    run                  → RunTask (FARGATE, awsvpc) (RunError)
    list_task_ids        → ListTasks, all pages      (ListError)
    describe             → DescribeTasks, 100 ids    (DescribeError)
                           per call, include=TAGS

A boto3 client is thread-safe, so one gateway instance is shared by all
in-flight requests.  Retries and timeouts are the client's business; they
are configured in :func:`create_ecs_client`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from task_spawner.core.errors import DescribeError, ListError, RegistrationError, RunError
from task_spawner.core.logging import get_logger
from task_spawner.tasks._types import RawTask, TaskDefinition
from task_spawner.tasks.config import DeploymentSettings

logger = get_logger(__name__)

# DescribeTasks accepts at most this many task ids per call.
DESCRIBE_BATCH_SIZE = 100

_SDK_ERRORS = (ClientError, BotoCoreError)


def create_ecs_client(
    region: str = "us-east-1",
    endpoint_url: str | None = None,
    max_attempts: int = 3,
) -> Any:
    """Build a boto3 ECS client.

    ``endpoint_url`` points the client at LocalStack or another ECS-compatible
    endpoint.  Credentials come from the standard boto3 chain.
    """
    client_kwargs: dict[str, Any] = {
        "service_name": "ecs",
        "region_name": region,
        "config": Config(retries={"max_attempts": max_attempts, "mode": "standard"}),
    }
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url

    client = boto3.client(**client_kwargs)
    logger.info("ecs_client_initialized", region=region, endpoint=endpoint_url)
    return client


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return f"{error.get('Code', 'ClientError')}: {error.get('Message', '')}".rstrip(": ")
    return str(exc)


class EcsGateway:
    """``OrchestratorGateway`` over the ECS API.

    Parameters
    ----------
    client:
        A boto3 ECS client (see :func:`create_ecs_client`).
    deployment:
        Container sizing, log routing and networking applied to every
        registration and run.
    """

    def __init__(self, client: Any, deployment: DeploymentSettings) -> None:
        self.client = client
        self.deployment = deployment

    # --- Wire rendering ---

    def register_params(self, definition: TaskDefinition) -> dict[str, Any]:
        """``RegisterTaskDefinition`` parameters for ``definition``."""
        d = self.deployment
        container = {
            "name": d.container_name,
            "image": definition.image,
            "cpu": d.cpu,
            "memory": d.memory,
            "essential": True,
            "logConfiguration": {
                "logDriver": "awslogs",
                "options": {
                    "awslogs-group": definition.log_group,
                    "awslogs-region": d.log_region,
                    "awslogs-stream-prefix": d.log_stream_prefix,
                },
            },
            "environment": [e.to_dict() for e in definition.env_vars],
        }
        return {
            "family": definition.family,
            "taskRoleArn": definition.task_role,
            "executionRoleArn": definition.execution_role,
            "networkMode": "awsvpc",
            "requiresCompatibilities": ["FARGATE"],
            "cpu": str(d.cpu),
            "memory": str(d.memory),
            "containerDefinitions": [container],
        }

    def run_params(
        self, cluster: str, definition_id: str, definition: TaskDefinition
    ) -> dict[str, Any]:
        """``RunTask`` parameters for one task of ``definition_id``."""
        params: dict[str, Any] = {
            "cluster": cluster,
            "launchType": "FARGATE",
            "taskDefinition": definition_id,
            "count": 1,
            "networkConfiguration": {
                "awsvpcConfiguration": {
                    "subnets": [definition.subnet],
                    "securityGroups": [definition.security_group],
                    "assignPublicIp": "ENABLED" if self.deployment.assign_public_ip else "DISABLED",
                },
            },
        }
        if definition.tags:
            params["tags"] = [t.to_dict() for t in definition.tags]
        return params

    # --- OrchestratorGateway ---

    def register_definition(self, definition: TaskDefinition) -> str:
        try:
            response = self.client.register_task_definition(**self.register_params(definition))
        except _SDK_ERRORS as exc:
            logger.error("register_task_definition_failed", family=definition.family, error=str(exc))
            raise RegistrationError(
                f"Failed to register task definition {definition.family}: {_error_message(exc)}",
                cause=exc,
            ) from exc

        arn = (response.get("taskDefinition") or {}).get("taskDefinitionArn")
        if not arn:
            raise RegistrationError(
                f"RegisterTaskDefinition returned no ARN for {definition.family}"
            )
        return arn

    def run(self, cluster: str, definition_id: str, definition: TaskDefinition) -> list[RawTask]:
        try:
            response = self.client.run_task(**self.run_params(cluster, definition_id, definition))
        except _SDK_ERRORS as exc:
            logger.error("run_task_failed", cluster=cluster, task_definition_arn=definition_id, error=str(exc))
            raise RunError(
                f"Failed to run task {definition_id}: {_error_message(exc)}",
                cause=exc,
            ) from exc

        failures = response.get("failures") or []
        if failures:
            logger.warning(
                "run_task_reported_failures",
                cluster=cluster,
                task_definition_arn=definition_id,
                failures=[f.get("reason") for f in failures],
            )
        return list(response.get("tasks") or [])

    def list_task_ids(self, cluster: str) -> list[str]:
        task_ids: list[str] = []
        try:
            paginator = self.client.get_paginator("list_tasks")
            for page in paginator.paginate(cluster=cluster):
                task_ids.extend(page.get("taskArns") or [])
        except _SDK_ERRORS as exc:
            logger.error("list_tasks_failed", cluster=cluster, error=str(exc))
            raise ListError(
                f"Failed to list tasks in {cluster}: {_error_message(exc)}",
                cause=exc,
            ) from exc

        logger.debug("tasks_listed", cluster=cluster, count=len(task_ids))
        return task_ids

    def describe(self, cluster: str, ids: Sequence[str]) -> list[RawTask]:
        tasks: list[RawTask] = []
        failures: list[dict[str, Any]] = []

        for start in range(0, len(ids), DESCRIBE_BATCH_SIZE):
            batch = list(ids[start:start + DESCRIBE_BATCH_SIZE])
            try:
                response = self.client.describe_tasks(
                    cluster=cluster,
                    tasks=batch,
                    include=["TAGS"],
                )
            except _SDK_ERRORS as exc:
                logger.error("describe_tasks_failed", cluster=cluster, count=len(batch), error=str(exc))
                raise DescribeError(
                    f"Failed to describe tasks in {cluster}: {_error_message(exc)}",
                    cause=exc,
                ) from exc
            tasks.extend(response.get("tasks") or [])
            failures.extend(response.get("failures") or [])

        if ids and not tasks and failures:
            reasons = sorted({f.get("reason") or "unknown" for f in failures})
            raise DescribeError(
                f"DescribeTasks returned no tasks for {len(ids)} ids: {', '.join(reasons)}"
            ).with_context(cluster=cluster)

        if failures:
            logger.warning(
                "describe_tasks_reported_failures",
                cluster=cluster,
                failures=len(failures),
            )
        return tasks
