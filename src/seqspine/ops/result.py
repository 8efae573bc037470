"""
Operation result envelope.

Provides :class:`OperationResult` - a typed success/failure envelope that
every operation function returns - and the mapping from
:class:`~seqspine.core.errors.SeqSpineError` subclasses to the
machine-readable error codes the API and CLI branch on.

Error codes:

================== ============================================ ======
Code               Raised for                                   HTTP
================== ============================================ ======
NOT_FOUND          lookup miss, unknown category                404
VALIDATION_FAILED  malformed ids, invalid input                 400
ALLOCATION_FAILED  mapping insert failed after counter advance  409
UNAVAILABLE        storage could not be reached                 503
INTERNAL           anything else                                500
================== ============================================ ======
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from seqspine.core.errors import (
    AllocationError,
    DatabaseConnectionError,
    ErrorCategory,
    SeqSpineError,
    ValidationError,
    categorize_error,
)

T = TypeVar("T")

NOT_FOUND = "NOT_FOUND"
VALIDATION_FAILED = "VALIDATION_FAILED"
ALLOCATION_FAILED = "ALLOCATION_FAILED"
UNAVAILABLE = "UNAVAILABLE"
INTERNAL = "INTERNAL"


def error_code_for(exc: Exception) -> str:
    """Machine-readable code of an exception raised inside an operation."""
    if isinstance(exc, AllocationError):
        return ALLOCATION_FAILED
    if isinstance(exc, ValidationError):
        return VALIDATION_FAILED
    if isinstance(exc, DatabaseConnectionError):
        return UNAVAILABLE
    return INTERNAL


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``ALLOCATION_FAILED``, …).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing/alerting.
        details: Extra key/value context (category, permanent id, …).
        retryable: Whether the caller should retry the operation.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Use :meth:`ok`, :meth:`fail` or :meth:`from_exception` instead of the
    constructor.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a successful result."""
        return cls(
            success=True,
            data=data,
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def from_exception(cls, exc: Exception, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Failed result carrying the code, category and context of *exc*."""
        if isinstance(exc, SeqSpineError):
            return cls.fail(
                error_code_for(exc),
                exc.message,
                category=exc.category,
                details=exc.context.to_dict(),
                retryable=exc.retryable,
                elapsed_ms=elapsed_ms,
            )
        return cls.fail(
            INTERNAL,
            str(exc) or exc.__class__.__name__,
            category=categorize_error(exc),
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON output)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = _plain(self.data)
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.warnings:
            d["warnings"] = self.warnings
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


@dataclass
class PagedResult(OperationResult[list[T]]):
    """Paginated result for list operations.

    ``has_more`` is computed from *total*, *offset* and *limit*.
    """

    total: int = 0
    limit: int = 50
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_items(
        cls,
        items: list[T],
        total: int,
        *,
        limit: int = 50,
        offset: int = 0,
        elapsed_ms: float = 0.0,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            total=total,
            limit=limit,
            offset=offset,
            has_more=(offset + limit) < total,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["total"] = self.total
        d["limit"] = self.limit
        d["offset"] = self.offset
        d["has_more"] = self.has_more
        return d


def _plain(value: Any) -> Any:
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


# ------------------------------------------------------------------ #
# Timing helper
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()


__all__ = [
    "NOT_FOUND",
    "VALIDATION_FAILED",
    "ALLOCATION_FAILED",
    "UNAVAILABLE",
    "INTERNAL",
    "error_code_for",
    "OperationError",
    "OperationResult",
    "PagedResult",
    "start_timer",
]
