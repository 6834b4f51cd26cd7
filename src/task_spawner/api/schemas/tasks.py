"""
Request and response schemas for the worker endpoints.

Request bodies validate and convert into the task layer's frozen records
(``to_request()`` / ``to_query()``); responses are built from
:class:`~task_spawner.tasks._types.TaskInfo`.

The spawn body also accepts the field names used by earlier clients
(``soiid`` for ``requester_id``, ``clientid`` for ``client_id``).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from task_spawner.tasks._types import TagQuery, TaskFamilyQuery, TaskInfo, WorkRequest


class WorkRequestBody(BaseModel):
    """Body of ``POST /spawn-worker``.

    Example:
        {
            "data_location": "s3://bucket/x",
            "requester_id": "r1",
            "client_id": "c1",
            "vendor": "bloomberg"
        }
    """

    data_location: str = Field(min_length=1, description="URI of the data the worker processes")
    requester_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("requester_id", "soiid"),
        description="Who asked for the work",
    )
    client_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("client_id", "clientid"),
        description="Client the work is done for",
    )
    vendor: str = Field(min_length=1, description="Data vendor; selects the worker image")

    def to_request(self) -> WorkRequest:
        return WorkRequest(
            data_location=self.data_location,
            requester_id=self.requester_id,
            client_id=self.client_id,
            vendor=self.vendor,
        )


class TaskFamilyBody(BaseModel):
    """Body of ``POST /task-family``."""

    task_family: str = Field(
        min_length=1,
        validation_alias=AliasChoices("task_family", "family_name"),
        description="Substring matched against task-definition ARNs",
    )

    def to_query(self) -> TaskFamilyQuery:
        return TaskFamilyQuery(family_name=self.task_family)


class TagBody(BaseModel):
    """Body of ``POST /task-tag``."""

    key: str = Field(min_length=1, description="Tag key (exact match)")
    value: str = Field(description="Tag value (exact match)")

    def to_query(self) -> TagQuery:
        return TagQuery(key=self.key, value=self.value)


class TagSchema(BaseModel):
    key: str
    value: str


class TaskInfoSchema(BaseModel):
    """One task as returned by every worker endpoint.

    ``running_duration`` is in seconds; null when the orchestrator did not
    report a creation time.  ``cpu_usage`` and ``memory_usage`` are reserved
    and currently always null.
    """

    task_arn: str
    status: str
    created_at: datetime
    running_duration: float | None = Field(default=None, description="Seconds since created_at")
    image: str
    cpu_usage: float | None = None
    memory_usage: float | None = None
    tags: list[TagSchema] = Field(default_factory=list)

    @classmethod
    def from_task_info(cls, info: TaskInfo) -> TaskInfoSchema:
        return cls.model_validate(info.to_dict())
