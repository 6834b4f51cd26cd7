"""Result normaliser — raw orchestrator task → :class:`TaskInfo`.

The orchestrator's task records are partially optional: a task that is still
provisioning may have no containers, ``createdAt`` can be missing, tags can
lack a key or a value.  None of that is an error here.  Each field degrades
to a documented default instead:

.. code-block:: text

    taskArn             → task_id            (""  if absent)
    lastStatus          → status             (""  if absent)
    createdAt           → created_at         (now if absent)
    now - createdAt     → running_duration   (None if createdAt absent, ≥ 0)
    containers[].image  → image              (concatenated, "" per missing)
    tags[].key/value    → tags               ("" per missing key/value)
    —                   → cpu_usage, memory_usage (always None)

``createdAt`` is a ``datetime`` when it comes from boto3, and epoch seconds
(int or float) when a record was built by hand or decoded from JSON.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from task_spawner.tasks._types import RawTask, Tag, TaskInfo

_ZERO = timedelta(0)


def _utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Convert an orchestrator timestamp to an aware UTC datetime.

    Accepts ``datetime`` (naive values are taken as UTC) and epoch seconds.
    Negative epochs clamp to the epoch.  Non-finite or out-of-range epochs,
    and anything else, yield None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(max(value, 0), UTC)
        except (OverflowError, ValueError, OSError):
            return None
    return None


def _image(containers: Iterable[Mapping[str, Any]] | None) -> str:
    return "".join((c.get("image") or "") for c in containers or ())


def _tags(raw_tags: Iterable[Mapping[str, Any]] | None) -> tuple[Tag, ...]:
    return tuple(
        Tag(key=t.get("key") or "", value=t.get("value") or "")
        for t in raw_tags or ()
    )


def normalize(raw_task: RawTask, *, now: datetime | None = None) -> TaskInfo:
    """Map one raw orchestrator task to a :class:`TaskInfo`.

    Args:
        raw_task: ECS-shaped task record.
        now: Reference time for ``running_duration`` and the ``created_at``
            fallback.  Defaults to the current UTC time.
    """
    now = now or _utcnow()
    created_at = parse_timestamp(raw_task.get("createdAt"))

    running_duration: timedelta | None = None
    if created_at is not None:
        # Clock skew can put createdAt slightly in the future.
        running_duration = max(now - created_at, _ZERO)

    return TaskInfo(
        task_id=raw_task.get("taskArn") or "",
        status=raw_task.get("lastStatus") or "",
        created_at=created_at if created_at is not None else now,
        running_duration=running_duration,
        image=_image(raw_task.get("containers")),
        cpu_usage=None,
        memory_usage=None,
        tags=_tags(raw_task.get("tags")),
    )
