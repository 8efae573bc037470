"""
Shared API router utilities.

- ``_dc()`` - convert a dataclass (or object with ``to_dict``) to a plain dict
- ``_handle_error()`` - convert a failed OperationResult to a ``problem_response``

Tags:
    seq-spine, api, utils
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from seqspine.api.middleware.errors import problem_response, status_for_error_code
from seqspine.ops.result import OperationResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult[Any], request: Request | None = None) -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response."""
    error = result.error
    code = error.code if error else "INTERNAL"
    headers = {"Retry-After": "1"} if error and error.retryable else None
    return problem_response(
        status=status_for_error_code(code),
        title=error.message if error else "Operation failed",
        detail=code,
        instance=str(request.url) if request is not None else "",
        errors=[
            {"code": code, "message": f"{key}={value}", "field": key}
            for key, value in (error.details.items() if error else ())
        ],
        headers=headers,
    )
