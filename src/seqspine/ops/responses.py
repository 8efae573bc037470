"""
Typed response objects for operations.

Each dataclass is the payload of one operation beyond the generic
:class:`OperationResult` envelope.  Responses carry only domain data: no
HTTP status codes and no CLI formatting.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]


# ------------------------------------------------------------------ #
# Database responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitResult(_Serializable):
    """Result payload for :func:`seqspine.ops.database.initialize_database`."""

    tables_created: list[str]
    counters_seeded: list[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class TableCount(_Serializable):
    """Row count for a single table (``-1`` when the table is absent)."""

    table: str
    count: int


@dataclass(frozen=True, slots=True)
class DatabaseHealth(_Serializable):
    connected: bool
    backend: str = "unknown"
    table_count: int = 0
    latency_ms: float = 0.0


# ------------------------------------------------------------------ #
# Sequence responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class PublishOutcome(_Serializable):
    """Result of a publish event.

    ``skipped`` is ``True`` for ineligible events; ``created`` is ``False``
    when an existing mapping was returned.
    """

    permanent_id: int
    category: str
    sequence_id: int | None = None
    created: bool = False
    skipped: bool = False
    permalink: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DeleteOutcome(_Serializable):
    permanent_id: int
    removed: bool
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class MappingView(_Serializable):
    permanent_id: int
    sequence_id: int
    category: str
    permalink: str | None = None


@dataclass(frozen=True, slots=True)
class CounterView(_Serializable):
    category: str
    last_value: int
    base_path: str
    query_var: str


@dataclass(frozen=True, slots=True)
class PermalinkView(_Serializable):
    permanent_id: int
    permalink: str
