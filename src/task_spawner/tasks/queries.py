"""Query composer — the family and tag read paths.

Both reads are the same four-step pipeline over the gateway::

    list_task_ids(cluster) ──▶ describe(cluster, ids) ──▶ filter ──▶ normalize

An empty *listing* is a :class:`NotFoundError`; a non-empty listing where
nothing passes the filter is an empty result.  Each read makes exactly one
list call and at most one describe call.  Results keep the order the
orchestrator returned them in.
"""

from __future__ import annotations

from collections.abc import Callable

from task_spawner.core.errors import NotFoundError
from task_spawner.core.logging import get_logger
from task_spawner.tasks._types import (
    OrchestratorGateway,
    RawTask,
    TagQuery,
    TaskFamilyQuery,
    TaskInfo,
)
from task_spawner.tasks.normalizer import normalize

logger = get_logger(__name__)


def matches_family(raw_task: RawTask, family_name: str) -> bool:
    """True if the task's definition ARN contains ``family_name`` (case-sensitive)."""
    arn = raw_task.get("taskDefinitionArn")
    return bool(arn) and family_name in arn


def matches_tag(raw_task: RawTask, key: str, value: str) -> bool:
    """True if any tag equals ``key=value`` exactly."""
    return any(
        t.get("key") == key and t.get("value") == value
        for t in raw_task.get("tags") or ()
    )


class TaskQueryComposer:
    """Run list → describe → filter → normalize reads against one cluster."""

    def __init__(self, gateway: OrchestratorGateway, cluster: str) -> None:
        self.gateway = gateway
        self.cluster = cluster

    def by_family(self, query: TaskFamilyQuery) -> list[TaskInfo]:
        """Tasks whose task-definition ARN contains ``query.family_name``.

        Raises:
            NotFoundError: the cluster has no tasks at all.
        """
        return self._select(
            lambda raw: matches_family(raw, query.family_name),
            empty_message="no tasks in cluster",
            query={"family_name": query.family_name},
        )

    def by_tag(self, query: TagQuery) -> list[TaskInfo]:
        """Tasks tagged exactly ``query.key=query.value``.

        Raises:
            NotFoundError: the cluster has no tasks at all.
        """
        return self._select(
            lambda raw: matches_tag(raw, query.key, query.value),
            empty_message=f"no tasks with tag {query.key}={query.value}",
            query={"tag_key": query.key, "tag_value": query.value},
        )

    def _select(
        self,
        keep: Callable[[RawTask], bool],
        *,
        empty_message: str,
        query: dict[str, str],
    ) -> list[TaskInfo]:
        task_ids = self.gateway.list_task_ids(self.cluster)
        if not task_ids:
            logger.info("no_tasks_listed", cluster=self.cluster, **query)
            raise NotFoundError(empty_message).with_context(cluster=self.cluster, **query)

        described = self.gateway.describe(self.cluster, task_ids)
        selected = [normalize(raw) for raw in described if keep(raw)]

        logger.info(
            "tasks_selected",
            cluster=self.cluster,
            listed=len(task_ids),
            described=len(described),
            selected=len(selected),
            **query,
        )
        return selected
