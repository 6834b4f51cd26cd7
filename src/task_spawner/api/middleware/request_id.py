"""Request-ID middleware — injects ``X-Request-ID`` on every request.

The id is also bound into the structlog context, so every log record
emitted while the request is handled carries ``request_id``.

Unclassified exceptions are rendered here with
:func:`~task_spawner.api.middleware.errors.unhandled_exception_handler`
instead of in Starlette's outermost error middleware, so 500 responses
carry the header too.

Tags:
    ecs-task-spawner, api, middleware, request-id, correlation

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from task_spawner.api.middleware.errors import unhandled_exception_handler
from task_spawner.core.logging import bind_context, unbind_context


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request/response cycle."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        bind_context(request_id=request_id)
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        finally:
            unbind_context("request_id")
        response.headers["X-Request-ID"] = request_id
        return response
