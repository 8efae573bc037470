"""
Common API schemas - shared envelopes and RFC 7807 errors.

Response Envelope Conventions:
    - 2xx single-item responses use ``SuccessResponse[T]``
    - 2xx list responses use ``PagedResponse[T]``
    - 4xx/5xx responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` tracks server-side processing time
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Field-level error detail."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``NOT_FOUND`` (404): no mapping, unknown category or path
        - ``VALIDATION_FAILED`` (400): malformed permanent id
        - ``ALLOCATION_FAILED`` (409): mapping insert failed, sequence id left unused
        - ``UNAVAILABLE`` (503): storage could not be reached
        - ``INTERNAL`` (500): unexpected server error

    Example:
        {
            "type": "about:blank",
            "title": "No product record with sequence id '7'",
            "status": 404,
            "detail": "",
            "instance": "/api/v1/categories/product/sequences/7",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Human-readable explanation")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(default_factory=list)


# ── Success Envelopes ────────────────────────────────────────────────────


class PageMeta(BaseModel):
    total: int = Field(description="Total items across all pages")
    limit: int = Field(description="Items per page (requested)")
    offset: int = Field(description="Current offset (0-based)")
    has_more: bool = Field(description="True if more pages exist after current")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope for single-item responses."""

    data: T = Field(description="Response payload")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(default_factory=list)


class PagedResponse(BaseModel, Generic[T]):
    """Paged success envelope for list responses."""

    data: list[T] = Field(description="Items of this page")
    page: PageMeta = Field(description="Pagination metadata")
    elapsed_ms: float = Field(default=0.0)
    warnings: list[str] = Field(default_factory=list)
