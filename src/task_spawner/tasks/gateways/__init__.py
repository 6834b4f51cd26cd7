"""Orchestrator gateway implementations.

    gateways/
    ├── ecs.py      ← EcsGateway (boto3), create_ecs_client
    └── memory.py   ← InMemoryGateway (tests, local development)

Both satisfy :class:`~task_spawner.tasks._types.OrchestratorGateway`.
"""

from task_spawner.tasks.gateways.ecs import EcsGateway, create_ecs_client
from task_spawner.tasks.gateways.memory import InMemoryGateway

__all__ = ["EcsGateway", "InMemoryGateway", "create_ecs_client"]
