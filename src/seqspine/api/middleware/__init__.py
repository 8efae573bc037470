"""API middleware and exception handlers."""

from seqspine.api.middleware.errors import (
    problem_response,
    status_for_error_code,
    unhandled_exception_handler,
    validation_exception_handler,
)
from seqspine.api.middleware.request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
    "problem_response",
    "status_for_error_code",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
