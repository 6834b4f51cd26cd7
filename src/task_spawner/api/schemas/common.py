"""
Common API schemas — the error envelope.

Every 4xx/5xx response body is an :class:`ErrorResponse`.

Example:
    {
        "error": {
            "type": "NOT_FOUND_ERROR",
            "message": "no tasks in cluster"
        }
    }
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Machine-readable code plus human message."""

    type: str = Field(description="Stable error code (e.g. 'UNSUPPORTED_VENDOR', 'AWS_SDK_ERROR')")
    message: str = Field(description="Human-readable explanation of the error")


class ErrorResponse(BaseModel):
    """Canonical error envelope for all non-2xx responses."""

    error: ErrorBody
