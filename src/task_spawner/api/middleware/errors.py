"""
Error-handling middleware — maps spawner errors to JSON error responses.

Every non-2xx response has the same body::

    {"error": {"type": "UNSUPPORTED_VENDOR", "message": "Unsupported vendor: 'acme'"}}

``type`` is the error's stable code; the HTTP status is looked up from it.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from task_spawner.api.schemas.common import ErrorBody, ErrorResponse
from task_spawner.core.errors import SpawnerError
from task_spawner.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNSUPPORTED_VENDOR": 400,
    "UNAUTHORIZED_ERROR": 401,
    "NOT_FOUND_ERROR": 404,
    "AWS_SDK_ERROR": 500,
    "REGISTER_TASK_DEFINITION_ERROR": 500,
    "RUN_TASK_ERROR": 500,
    "TASK_SPAWN_ERROR": 500,
    "LIST_TASKS_ERROR": 500,
    "DESCRIBE_TASKS_ERROR": 500,
    "INTERNAL_SERVER_ERROR": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def error_response(error: SpawnerError, *, message: str | None = None) -> JSONResponse:
    """Build the JSON error response for ``error``."""
    body = ErrorResponse(error=ErrorBody(type=error.code, message=message or error.message))
    return JSONResponse(status_code=status_for_error_code(error.code), content=body.model_dump())


async def spawner_error_handler(request: Request, exc: SpawnerError) -> JSONResponse:
    """Render a typed spawner error."""
    status = status_for_error_code(exc.code)
    log = logger.error if status >= 500 else logger.info
    log("request_failed", path=request.url.path, status=status, **exc.to_dict())
    return error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render a request-body validation failure as ``VALIDATION_ERROR``."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg', 'invalid')}" if location else err.get("msg", "invalid"))

    body = ErrorResponse(
        error=ErrorBody(type="VALIDATION_ERROR", message="; ".join(problems) or "Invalid request body")
    )
    logger.info("request_invalid", path=request.url.path, problems=problems)
    return JSONResponse(status_code=400, content=body.model_dump())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unclassified exceptions — 500 with a generic message."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    debug = request.app.state.settings.debug
    body = ErrorResponse(
        error=ErrorBody(
            type="INTERNAL_SERVER_ERROR",
            message=str(exc) if debug else "An unexpected error occurred.",
        )
    )
    return JSONResponse(status_code=500, content=body.model_dump())
