"""
ecs-task-spawner — translate work requests into ECS Fargate tasks.

The package is split the same way the runtime is:

- ``task_spawner.core``   — errors, logging, settings, health primitives
- ``task_spawner.tasks``  — the task-spec builder, normaliser, query composer
  and the :class:`~task_spawner.tasks.repository.TaskRepository` façade
- ``task_spawner.api``    — the FastAPI transport around the repository
- ``task_spawner.cli``    — ``task-spawner serve``

Quick start::

    from task_spawner.tasks import TaskRepository, WorkRequest
    from task_spawner.tasks.config import DeploymentSettings
    from task_spawner.tasks.gateways import InMemoryGateway

    repo = TaskRepository(InMemoryGateway(), DeploymentSettings())
    info = repo.spawn(WorkRequest("s3://bucket/x", "r1", "c1", "bloomberg"))

Tags:
    ecs-task-spawner, package-root

Doc-Types:
    api-reference
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
