"""
Allocator - reserve the next sequence id of a category for a published record.

Manifesto:
    The publish event fires on every save of a record, concurrently from
    independent requests.  Allocation must therefore be idempotent per
    ``permanent_id`` and must never read a counter, add one and write it
    back from application code.

Architecture:
    ::

        reserve(category, permanent_id, is_eligible)
            │
            ├─ ineligible / unknown category ──────────► None
            ├─ mapping exists (fast path, read only) ──► existing id
            ▼
        BEGIN IMMEDIATE (SQLite writer)
            counter upsert ... RETURNING last_value     ← writer lock held
            re-check mapping ── exists ──► ROLLBACK ───► existing id
            SAVEPOINT
                INSERT mapping ── fails ──► ROLLBACK TO SAVEPOINT
            COMMIT                                      (counter kept: gap)
            │
            ├─ insert failed ─────────────────────────► AllocationError
            ▼
        new id

    Duplicate triggers for one record serialize on the counter row lock,
    so they produce one mapping and one counter advance.  A failed mapping
    insert still commits the counter increment; the number is a permanent
    gap and the next event for the record allocates a fresh one.

Guardrails:
    ❌ DON'T: roll back the counter when the mapping insert fails
    ✅ DO: surface ``AllocationError`` and let a later event retry

    ❌ DON'T: raise for ineligible events
    ✅ DO: return ``None``

Tags:
    allocator, counter, idempotency, concurrency, seq-spine
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seqspine.core.errors import AllocationError, DatabaseError, ValidationError, is_retryable
from seqspine.core.logging import get_logger
from seqspine.core.models import PUBLISH_STATUS, AllocationResult, Mapping, PublishEvent
from seqspine.core.orm import writer
from seqspine.core.protocols import CounterStore, MappingStore
from seqspine.core.repositories import CounterRepository, MappingRepository
from seqspine.sequencing.resolver import parse_positive_int

logger = get_logger(__name__)


class Allocator:
    """Per-category sequence allocation over one engine."""

    def __init__(
        self,
        engine: Engine,
        categories: Collection[str],
        publish_status: str = PUBLISH_STATUS,
    ) -> None:
        self._engine = engine
        self._writer = writer(engine)
        self._categories = frozenset(categories)
        self._publish_status = publish_status

    def on_publish(self, event: PublishEvent) -> AllocationResult | None:
        """Allocate for a publish lifecycle event if the record is eligible."""
        eligible = event.is_eligible(self._categories, self._publish_status)
        return self.reserve(event.category, event.permanent_id, eligible)

    def allocate(self, category: str, permanent_id: Any, is_eligible: bool = True) -> int | None:
        """Return the record's sequence id, allocating one if needed.

        Returns ``None`` for ineligible input.

        Raises:
            ValidationError: ``permanent_id`` is not a positive integer.
            AllocationError: the mapping could not be persisted.
        """
        result = self.reserve(category, permanent_id, is_eligible)
        return result.sequence_id if result else None

    def reserve(
        self, category: str, permanent_id: Any, is_eligible: bool = True
    ) -> AllocationResult | None:
        """Like :meth:`allocate` but reports whether a mapping was created."""
        if not is_eligible or category not in self._categories:
            logger.debug(
                "allocation_skipped",
                category=category,
                permanent_id=permanent_id,
                eligible=is_eligible,
            )
            return None

        pid = parse_positive_int(permanent_id)
        if pid is None:
            raise ValidationError(
                f"permanent_id must be a positive integer, got {permanent_id!r}"
            ).with_context(operation="allocate", record_category=category)

        with self._engine.connect() as conn:
            existing = MappingRepository(conn).get_by_permanent_id(pid)
        if existing is not None:
            logger.debug(
                "sequence_reused",
                category=existing.category,
                permanent_id=pid,
                sequence_id=existing.sequence_id,
            )
            return _existing(existing)

        return self._allocate_new(category, pid)

    def _allocate_new(self, category: str, permanent_id: int) -> AllocationResult:
        insert_failure: DatabaseError | None = None
        try:
            with self._writer.connect() as conn, conn.begin() as trans:
                counters: CounterStore = CounterRepository(conn)
                mappings: MappingStore = MappingRepository(conn)
                sequence_id = counters.increment_and_fetch(category)

                existing = mappings.get_by_permanent_id(permanent_id)
                if existing is not None:
                    # Lost the race to a concurrent trigger for the same record
                    trans.rollback()
                    logger.info(
                        "allocation_raced",
                        category=existing.category,
                        permanent_id=permanent_id,
                        sequence_id=existing.sequence_id,
                    )
                    return _existing(existing)

                try:
                    with conn.begin_nested():
                        mappings.insert_mapping(permanent_id, sequence_id, category)
                except DatabaseError as exc:
                    insert_failure = exc
        except (DatabaseError, SQLAlchemyError) as exc:
            logger.error(
                "allocation_failed",
                category=category,
                permanent_id=permanent_id,
                error=str(exc),
            )
            raise AllocationError(
                f"Sequence allocation failed for {category} record {permanent_id}: {exc}",
                retryable=is_retryable(exc),
                cause=exc,
            ).with_context(
                operation="allocate", record_category=category, permanent_id=permanent_id
            ) from exc

        if insert_failure is not None:
            logger.warning(
                "allocation_failed",
                category=category,
                permanent_id=permanent_id,
                gap=sequence_id,
                error=insert_failure.message,
            )
            raise AllocationError(
                f"Mapping insert failed for {category} record {permanent_id}; "
                f"sequence id {sequence_id} is left unused",
                cause=insert_failure,
            ).with_context(
                operation="allocate",
                record_category=category,
                permanent_id=permanent_id,
                sequence_id=sequence_id,
            ) from insert_failure

        logger.info(
            "sequence_allocated",
            category=category,
            permanent_id=permanent_id,
            sequence_id=sequence_id,
        )
        return AllocationResult(
            permanent_id=permanent_id,
            category=category,
            sequence_id=sequence_id,
            created=True,
        )


def _existing(mapping: Mapping) -> AllocationResult:
    return AllocationResult(
        permanent_id=mapping.permanent_id,
        category=mapping.category,
        sequence_id=mapping.sequence_id,
        created=False,
    )


__all__ = ["Allocator"]
