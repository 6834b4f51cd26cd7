"""In-memory orchestrator gateway for tests and local development.

Behaves like a tiny ECS: registered definitions get increasing revisions,
``run`` creates one task record shaped like the ECS ``Task`` structure,
``list_task_ids`` / ``describe`` read them back.  No AWS account needed.

.. code-block:: text

    InMemoryGateway behavior:

    register_definition(defn)
      └── arn:aws:ecs:<region>:000000000000:task-definition/<family>:<rev>

    run(cluster, arn, defn)
      └── one task, lastStatus="PROVISIONING", createdAt=now, tags=defn.tags

    Inject failures:
      gateway.fail_register = True   → register_definition() raises RegistrationError
      gateway.fail_run = True        → run() raises RunError
      gateway.start_no_tasks = True  → run() returns []
      gateway.fail_list = True       → list_task_ids() raises ListError
      gateway.fail_describe = True   → describe() raises DescribeError

    Track usage:
      gateway.register_count, run_count, list_count, describe_count

Example:
    >>> gateway = InMemoryGateway()
    >>> gateway.add_task({"taskArn": "arn:1", "taskDefinitionArn": "td/worker-x:1"})
    >>> gateway.list_task_ids("default")
    ['arn:1']
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from task_spawner.core.errors import DescribeError, ListError, RegistrationError, RunError
from task_spawner.tasks._types import RawTask, TaskDefinition

_ACCOUNT_ID = "000000000000"


class InMemoryGateway:
    """Thread-safe in-memory implementation of ``OrchestratorGateway``."""

    def __init__(self, *, region: str = "us-east-1", initial_status: str = "PROVISIONING") -> None:
        self.region = region
        self.initial_status = initial_status

        self._lock = threading.Lock()
        self._revisions: dict[str, int] = {}
        self.definitions: dict[str, TaskDefinition] = {}
        # cluster -> task arn -> raw task, insertion ordered
        self.tasks: dict[str, dict[str, dict[str, Any]]] = {}

        self.register_count: int = 0
        self.run_count: int = 0
        self.list_count: int = 0
        self.describe_count: int = 0

        self.fail_register: bool = False
        self.fail_run: bool = False
        self.start_no_tasks: bool = False
        self.fail_list: bool = False
        self.fail_describe: bool = False

    # --- OrchestratorGateway ---

    def register_definition(self, definition: TaskDefinition) -> str:
        with self._lock:
            self.register_count += 1
            if self.fail_register:
                raise RegistrationError(f"Injected failure registering {definition.family}")
            revision = self._revisions.get(definition.family, 0) + 1
            self._revisions[definition.family] = revision
            arn = (
                f"arn:aws:ecs:{self.region}:{_ACCOUNT_ID}:"
                f"task-definition/{definition.family}:{revision}"
            )
            self.definitions[arn] = definition
            return arn

    def run(self, cluster: str, definition_id: str, definition: TaskDefinition) -> list[RawTask]:
        with self._lock:
            self.run_count += 1
            if self.fail_run:
                raise RunError(f"Injected failure running {definition_id}")
            if definition_id not in self.definitions:
                raise RunError(f"Unknown task definition: {definition_id}")
            if self.start_no_tasks:
                return []

            task_arn = f"arn:aws:ecs:{self.region}:{_ACCOUNT_ID}:task/{cluster}/{uuid.uuid4().hex}"
            raw = {
                "taskArn": task_arn,
                "clusterArn": f"arn:aws:ecs:{self.region}:{_ACCOUNT_ID}:cluster/{cluster}",
                "taskDefinitionArn": definition_id,
                "lastStatus": self.initial_status,
                "desiredStatus": "RUNNING",
                "launchType": "FARGATE",
                "createdAt": datetime.now(UTC),
                "containers": [{"name": "worker", "image": definition.image}],
                "tags": [t.to_dict() for t in definition.tags],
            }
            self.tasks.setdefault(cluster, {})[task_arn] = raw
            return [dict(raw)]

    def list_task_ids(self, cluster: str) -> list[str]:
        with self._lock:
            self.list_count += 1
            if self.fail_list:
                raise ListError(f"Injected failure listing tasks in {cluster}")
            return list(self.tasks.get(cluster, {}))

    def describe(self, cluster: str, ids: Sequence[str]) -> list[RawTask]:
        with self._lock:
            self.describe_count += 1
            if self.fail_describe:
                raise DescribeError(f"Injected failure describing tasks in {cluster}")
            known = self.tasks.get(cluster, {})
            return [dict(known[i]) for i in ids if i in known]

    # --- Test helpers ---

    def add_task(self, raw_task: Mapping[str, Any], *, cluster: str = "default") -> str:
        """Seed a raw task record; returns its id (``taskArn`` or a generated one)."""
        with self._lock:
            task_arn = raw_task.get("taskArn") or f"task-{uuid.uuid4().hex}"
            self.tasks.setdefault(cluster, {})[task_arn] = dict(raw_task)
            return task_arn

    def reset(self) -> None:
        """Forget all definitions, tasks and counters."""
        with self._lock:
            self._revisions.clear()
            self.definitions.clear()
            self.tasks.clear()
            self.register_count = self.run_count = 0
            self.list_count = self.describe_count = 0
