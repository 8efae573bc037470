"""
Typed request objects for operations.

Each dataclass is the *input* contract of one operation function.
Requests carry only transport-agnostic data: no raw HTTP bodies and no
CLI params.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from seqspine.core.models import PUBLISH_STATUS

# ------------------------------------------------------------------ #
# Database operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitRequest:
    """Request for :func:`seqspine.ops.database.initialize_database`."""

    seed_counters: bool = False


# ------------------------------------------------------------------ #
# Lifecycle events
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class PublishRecordRequest:
    """Request for :func:`seqspine.ops.sequences.publish_record`."""

    permanent_id: int
    category: str
    parent_id: int = 0
    status: str = PUBLISH_STATUS


@dataclass(frozen=True, slots=True)
class DeleteRecordRequest:
    """Request for :func:`seqspine.ops.sequences.delete_record`."""

    permanent_id: int


# ------------------------------------------------------------------ #
# Lookups
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ResolveSequenceRequest:
    """``sequence_id`` is raw input; malformed values are a miss."""

    category: str
    sequence_id: Any


@dataclass(frozen=True, slots=True)
class LookupRecordRequest:
    permanent_id: Any


@dataclass(frozen=True, slots=True)
class ResolvePathRequest:
    path: str


@dataclass(frozen=True, slots=True)
class PermalinkRequest:
    permanent_id: Any


@dataclass(frozen=True, slots=True)
class ListMappingsRequest:
    category: str
    limit: int = 50
    offset: int = 0
