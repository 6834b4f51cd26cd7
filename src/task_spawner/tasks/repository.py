"""
Task repository — the single entry point the HTTP layer talks to.

Combines the builder, the orchestrator gateway, the normaliser and the
query composer behind three operations:

.. code-block:: text

    spawn(WorkRequest)
      ├── TaskSpecBuilder.build()            UnsupportedVendorError
      ├── gateway.register_definition()      RegistrationError
      ├── gateway.run()                      RunError
      ├── first started task                 NoTaskStartedError
      └── normalize()                        → TaskInfo

    get_by_family(TaskFamilyQuery)  → TaskQueryComposer.by_family()
    get_by_tag(TagQuery)            → TaskQueryComposer.by_tag()

The repository holds only the gateway handle and the deployment settings.
It keeps no per-request state, so one instance serves every request
concurrently.  The first error aborts the pipeline and propagates
unchanged; nothing is retried.

Manifesto:
    The orchestrator is the only source of truth.  The repository
    translates, submits and reshapes; it never caches task state.

Tags:
    ecs-task-spawner, tasks, repository, facade

Doc-Types:
    api-reference
"""

from __future__ import annotations

from task_spawner.core.errors import NoTaskStartedError
from task_spawner.core.logging import get_logger
from task_spawner.tasks._types import (
    OrchestratorGateway,
    TagQuery,
    TaskFamilyQuery,
    TaskInfo,
    WorkRequest,
)
from task_spawner.tasks.builder import TaskSpecBuilder
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.normalizer import normalize
from task_spawner.tasks.queries import TaskQueryComposer

logger = get_logger(__name__)


class TaskRepository:
    """Spawn worker tasks and query them by family or tag.

    Example:
        >>> repo = TaskRepository(InMemoryGateway(), DeploymentSettings())
        >>> info = repo.spawn(WorkRequest("s3://b/x", "r1", "c1", "bloomberg"))
        >>> info.status
        'PROVISIONING'
    """

    def __init__(self, gateway: OrchestratorGateway, deployment: DeploymentSettings) -> None:
        self.gateway = gateway
        self.deployment = deployment
        self.builder = TaskSpecBuilder(deployment)
        self.queries = TaskQueryComposer(gateway, deployment.cluster_name)

    def spawn(self, request: WorkRequest) -> TaskInfo:
        """Register a task definition for ``request`` and run one task from it."""
        definition = self.builder.build(request)

        definition_id = self.gateway.register_definition(definition)
        logger.info(
            "task_definition_registered",
            family=definition.family,
            task_definition_arn=definition_id,
            image=definition.image,
        )

        started = self.gateway.run(definition.cluster, definition_id, definition)
        if not started:
            raise NoTaskStartedError(definition_id).with_context(
                cluster=definition.cluster,
                family=definition.family,
            )

        info = normalize(started[0])
        logger.info(
            "task_started",
            cluster=definition.cluster,
            task_arn=info.task_id,
            status=info.status,
            vendor=request.vendor,
            requester_id=request.requester_id,
            client_id=request.client_id,
        )
        return info

    def get_by_family(self, query: TaskFamilyQuery) -> list[TaskInfo]:
        """Tasks in the cluster whose definition belongs to ``query.family_name``."""
        return self.queries.by_family(query)

    def get_by_tag(self, query: TagQuery) -> list[TaskInfo]:
        """Tasks in the cluster tagged ``query.key=query.value``."""
        return self.queries.by_tag(query)
