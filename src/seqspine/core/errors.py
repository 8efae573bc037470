"""
Structured error types for seq-spine.

Every failure that can leave the storage layer is expressed as a
:class:`SeqSpineError` subclass carrying a category, an explicit retry
flag, structured context and the chained cause.  Routine event shapes
(ineligible records, unknown sequence ids, duplicate triggers) are *not*
errors and never raise.

Manifesto:
    - **Typed hierarchy:** callers branch on the class, not on message text
    - **Explicit retry semantics:** each error knows if it is retryable
    - **Rich context:** record category, permanent id and sequence id travel
      with the error into logs and API responses
    - **Chaining:** the underlying driver exception is kept as ``cause``

Architecture:
    ::

        SeqSpineError  (category, retryable, context, cause)
        ├── TransientError            retryable
        │   └── DatabaseConnectionError
        ├── ValidationError
        ├── ConfigError
        │   └── InvalidConfigError
        └── DatabaseError
            ├── IntegrityError
            │   └── DuplicateMappingError
            └── AllocationError

Examples:
    >>> err = AllocationError("mapping insert failed")
    >>> err.with_context(record_category="product", permanent_id=501)
    AllocationError('mapping insert failed', category=DATABASE)
    >>> err.to_dict()["context"]["permanent_id"]
    501

Guardrails:
    ❌ DON'T: raise for a lookup miss or an ineligible publish event
    ✅ DO: return ``None`` and let the caller fall back to default behaviour

    ❌ DON'T: swallow the driver exception
    ✅ DO: pass it as ``cause=`` when wrapping

Tags:
    error-handling, exception-hierarchy, retry-logic, seq-spine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error."""

    operation: str | None = None
    record_category: str | None = None
    permanent_id: int | None = None
    sequence_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            key: value
            for key, value in (
                ("operation", self.operation),
                ("record_category", self.record_category),
                ("permanent_id", self.permanent_id),
                ("sequence_id", self.sequence_id),
            )
            if value is not None
        }
        if self.metadata:
            result.update(self.metadata)
        return result


class SeqSpineError(Exception):
    """Base class for all seq-spine errors.

    Subclasses set ``default_category`` and ``default_retryable``; both can
    be overridden per instance.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SeqSpineError:
        """Add context to this error (fluent API)."""
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS
# =============================================================================


class TransientError(SeqSpineError):
    """Temporary failure; the same call may succeed later."""

    default_retryable = True


class DatabaseConnectionError(TransientError):
    """Storage could not be reached."""

    default_category = ErrorCategory.DATABASE


# =============================================================================
# VALIDATION / CONFIG
# =============================================================================


class ValidationError(SeqSpineError):
    """Input rejected before touching storage."""

    default_category = ErrorCategory.VALIDATION


class ConfigError(SeqSpineError):
    """Configuration is missing or inconsistent."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """A configuration value failed validation."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        msg = message or f"Invalid value for {key}: {value!r}"
        super().__init__(msg)
        self.key = key
        self.value = value


# =============================================================================
# DATABASE
# =============================================================================


class DatabaseError(SeqSpineError):
    """Database query or transaction error."""

    default_category = ErrorCategory.DATABASE


class IntegrityError(DatabaseError):
    """Database integrity constraint violation."""


class DuplicateMappingError(IntegrityError):
    """A mapping row collided with ``permanent_id`` or ``(sequence_id, category)``."""


class AllocationError(DatabaseError):
    """A sequence number was reserved but the mapping could not be persisted.

    The category counter keeps the reserved number; it is a permanent gap.
    """


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, SeqSpineError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, SeqSpineError):
        return error.category
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SeqSpineError",
    "TransientError",
    "DatabaseConnectionError",
    "ValidationError",
    "ConfigError",
    "InvalidConfigError",
    "DatabaseError",
    "IntegrityError",
    "DuplicateMappingError",
    "AllocationError",
    "is_retryable",
    "categorize_error",
]
