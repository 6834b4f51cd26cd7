"""
Task layer — build, submit and query ECS worker tasks.

Modules:
    _types       Records (WorkRequest, TaskDefinition, TaskInfo …) and the
                 OrchestratorGateway protocol
    vendors      Vendor → worker image catalog
    config       DeploymentSettings (cluster, network, IAM, logs)
    builder      WorkRequest → TaskDefinition
    normalizer   raw orchestrator task → TaskInfo
    queries      family / tag read paths
    repository   TaskRepository façade
    gateways     EcsGateway (boto3) and InMemoryGateway

Tags:
    ecs-task-spawner, tasks

Doc-Types:
    api-reference
"""

from task_spawner.tasks._types import (
    EnvVar,
    OrchestratorGateway,
    RawTask,
    Tag,
    TagQuery,
    TaskDefinition,
    TaskFamilyQuery,
    TaskInfo,
    WorkRequest,
)
from task_spawner.tasks.builder import TaskSpecBuilder
from task_spawner.tasks.normalizer import normalize
from task_spawner.tasks.queries import TaskQueryComposer
from task_spawner.tasks.repository import TaskRepository
from task_spawner.tasks.vendors import VENDOR_IMAGES, resolve_image

__all__ = [
    "EnvVar",
    "OrchestratorGateway",
    "RawTask",
    "Tag",
    "TagQuery",
    "TaskDefinition",
    "TaskFamilyQuery",
    "TaskInfo",
    "TaskQueryComposer",
    "TaskRepository",
    "TaskSpecBuilder",
    "VENDOR_IMAGES",
    "WorkRequest",
    "normalize",
    "resolve_image",
]
