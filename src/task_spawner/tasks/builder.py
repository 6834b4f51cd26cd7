"""Task definition builder — WorkRequest → TaskDefinition.

Pure data transformation: resolves the worker image, derives the tags and
environment, and copies placement/IAM/logging fields from
:class:`~task_spawner.tasks.config.DeploymentSettings`.  No network I/O, so
it is tested without any orchestrator double.

.. code-block:: text

    WorkRequest(vendor="bloomberg", data_location="s3://b/x",
                requester_id="r1", client_id="c1")
        │
        ├── image     = VENDOR_IMAGES["bloomberg"]   (UnsupportedVendorError otherwise)
        ├── env_vars  = [APP_DATA_URL=s3://b/x]
        ├── tags      = [soiid=r1, clientid=c1, worker_type=bloomberg]
        └── family    = "worker-bloomberg"

Tags:
    ecs-task-spawner, tasks, builder, task-definition

Doc-Types:
    api-reference
"""

from __future__ import annotations

from task_spawner.tasks._types import EnvVar, Tag, TaskDefinition, WorkRequest
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.vendors import resolve_image

DATA_URL_ENV = "APP_DATA_URL"

REQUESTER_TAG = "soiid"
CLIENT_TAG = "clientid"
WORKER_TYPE_TAG = "worker_type"


class TaskSpecBuilder:
    """Build task definitions for one deployment.

    Example:
        >>> builder = TaskSpecBuilder(DeploymentSettings())
        >>> definition = builder.build(request)
        >>> [t.key for t in definition.tags]
        ['soiid', 'clientid', 'worker_type']
    """

    def __init__(self, deployment: DeploymentSettings) -> None:
        self.deployment = deployment

    def build(self, request: WorkRequest) -> TaskDefinition:
        """Build the task definition for ``request``.

        Raises:
            UnsupportedVendorError: the vendor has no worker image.
        """
        image = resolve_image(request.vendor)
        deployment = self.deployment

        return TaskDefinition(
            family=f"{deployment.family_prefix}-{request.vendor}",
            cluster=deployment.cluster_name,
            subnet=deployment.subnet_id,
            security_group=deployment.security_group_id,
            image=image,
            log_group=deployment.log_group,
            task_role=deployment.task_role_arn,
            execution_role=deployment.execution_role_arn,
            tags=self._tags(request),
            env_vars=(EnvVar(DATA_URL_ENV, request.data_location),),
        )

    @staticmethod
    def _tags(request: WorkRequest) -> tuple[Tag, ...]:
        # Order is part of the contract: requester, client, worker type.
        return (
            Tag(REQUESTER_TAG, request.requester_id),
            Tag(CLIENT_TAG, request.client_id),
            Tag(WORKER_TYPE_TAG, request.vendor),
        )
