"""
Error handling - maps operation error codes to RFC 7807 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from seqspine.api.schemas.common import ErrorDetail, ProblemDetail
from seqspine.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "VALIDATION_FAILED": 400,
    "ALLOCATION_FAILED": 409,
    "UNAVAILABLE": 503,
    "INTERNAL": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        errors=[ErrorDetail(**e) for e in errors or []],
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        media_type="application/problem+json",
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures as 422 problem details."""
    errors = [
        {
            "code": str(err.get("type", "invalid")).upper(),
            "message": err.get("msg", ""),
            "field": ".".join(str(part) for part in err.get("loc", ())),
        }
        for err in exc.errors()
    ]
    return problem_response(
        status=422,
        title="Request validation failed",
        instance=str(request.url),
        errors=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions - returns 500 with ProblemDetail."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url),
    )
