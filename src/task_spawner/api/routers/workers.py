"""
Workers router — spawn worker tasks and look them up.

Endpoints:
    POST   /spawn-worker    Build, register and run a worker task
    POST   /task-family     Tasks whose task definition matches a family
    POST   /task-tag        Tasks carrying an exact key=value tag

Handlers are plain ``def``: the repository makes blocking boto3 calls, so
FastAPI runs them in its threadpool.  Errors propagate to the exception
handlers in :mod:`task_spawner.api.middleware.errors`.

Tags:
    ecs-task-spawner, api, workers, spawn

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from fastapi import APIRouter

from task_spawner.api.deps import Repository
from task_spawner.api.schemas.common import ErrorResponse
from task_spawner.api.schemas.tasks import (
    TagBody,
    TaskFamilyBody,
    TaskInfoSchema,
    WorkRequestBody,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/spawn-worker", response_model=TaskInfoSchema)
def spawn_worker(repo: Repository, body: WorkRequestBody):
    """Spawn one worker task for the requested vendor.

    Returns the normalised info of the started task.
    """
    info = repo.spawn(body.to_request())
    return TaskInfoSchema.from_task_info(info)


@router.post("/task-family", response_model=list[TaskInfoSchema])
def get_task_family(repo: Repository, body: TaskFamilyBody):
    """List tasks whose task-definition ARN contains ``task_family``."""
    return [TaskInfoSchema.from_task_info(i) for i in repo.get_by_family(body.to_query())]


@router.post("/task-tag", response_model=list[TaskInfoSchema])
def get_tasks_by_tag(repo: Repository, body: TagBody):
    """List tasks tagged exactly ``key=value``."""
    return [TaskInfoSchema.from_task_info(i) for i in repo.get_by_tag(body.to_query())]
