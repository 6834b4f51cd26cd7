"""
REST API layer for the task spawner.

Provides a FastAPI application factory whose endpoints delegate to
:class:`~task_spawner.tasks.repository.TaskRepository`.  All task logic
lives in ``task_spawner.tasks``; this package handles only HTTP transport
concerns: serialisation, authentication, error mapping and request ids.

Quick start::

    from task_spawner.api import create_app

    app = create_app()  # ready for uvicorn

Tags:
    ecs-task-spawner, api, REST, FastAPI, transport-layer

Doc-Types:
    api-reference
"""

from task_spawner.api.app import create_app

__all__ = ["create_app"]
