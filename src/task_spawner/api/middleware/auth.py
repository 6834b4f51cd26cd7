"""
API-key authentication middleware.

When ``SPAWNER_API_KEY`` is set, every request must carry the key either as
``X-API-Key: <key>`` or ``Authorization: Bearer <key>``.  Unauthenticated
requests receive a 401 with the standard error body.

Bypass paths (no auth required):
  - ``/health``, ``/health/live``
  - ``/docs``, ``/redoc``, ``/openapi.json``

Tags:
    ecs-task-spawner, api, middleware, authentication, API-key

Doc-Types:
    api-reference
"""

from __future__ import annotations

import re
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from task_spawner.api.middleware.errors import error_response
from task_spawner.core.errors import AuthError

# Paths that never require authentication
_BYPASS_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^/health"),
    re.compile(r"/docs$"),
    re.compile(r"/redoc$"),
    re.compile(r"/openapi\.json$"),
]


def _is_bypass(path: str) -> bool:
    """Return True if *path* should skip authentication."""
    return any(p.search(path) for p in _BYPASS_PATTERNS)


def _provided_key(request: Request) -> str | None:
    header = request.headers.get("X-API-Key")
    if header:
        return header
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests that lack a valid API key.

    If ``api_key`` is ``None`` (the default), authentication is disabled
    and all requests pass through.
    """

    def __init__(self, app: object, api_key: str | None = None) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._api_key is None or _is_bypass(request.url.path):
            return await call_next(request)

        provided = _provided_key(request)
        if provided is None or not secrets.compare_digest(provided, self._api_key):
            return error_response(
                AuthError("Missing or invalid API key. Provide X-API-Key header.")
            )

        return await call_next(request)
