"""
Sequence operations.

Lifecycle events, lookups and listings over the
:class:`~seqspine.sequencing.service.SequenceService` carried by the
:class:`~seqspine.ops.context.OperationContext`.  Every function returns an
:class:`OperationResult` and never raises.
"""

from __future__ import annotations

from seqspine.core.logging import get_logger
from seqspine.core.models import PublishEvent, RouteMatch
from seqspine.ops.context import OperationContext
from seqspine.ops.requests import (
    DeleteRecordRequest,
    ListMappingsRequest,
    LookupRecordRequest,
    PermalinkRequest,
    PublishRecordRequest,
    ResolvePathRequest,
    ResolveSequenceRequest,
)
from seqspine.ops.responses import (
    CounterView,
    DeleteOutcome,
    MappingView,
    PermalinkView,
    PublishOutcome,
)
from seqspine.ops.result import NOT_FOUND, VALIDATION_FAILED, OperationResult, PagedResult, start_timer
from seqspine.sequencing.resolver import parse_positive_int
from seqspine.sequencing.routing import query_var

logger = get_logger(__name__)


def _log_failure(ctx: OperationContext, op: str, exc: Exception) -> None:
    logger.exception("op_failed", op=op, request_id=ctx.request_id, error=str(exc))


# ------------------------------------------------------------------ #
# Lifecycle events
# ------------------------------------------------------------------ #


def publish_record(
    ctx: OperationContext,
    request: PublishRecordRequest,
) -> OperationResult[PublishOutcome]:
    """Allocate a sequence id for a published record (idempotent).

    Ineligible events succeed with ``skipped=True`` and no sequence id.
    In dry-run mode the existing mapping, if any, is reported and nothing
    is allocated.
    """
    timer = start_timer()
    service = ctx.service
    event = PublishEvent(
        permanent_id=request.permanent_id,
        category=request.category,
        parent_id=request.parent_id,
        status=request.status,
    )

    if not event.is_eligible(service.categories, service.settings.publish_status):
        return OperationResult.ok(
            PublishOutcome(
                permanent_id=request.permanent_id,
                category=request.category,
                skipped=True,
                dry_run=ctx.dry_run,
            ),
            elapsed_ms=timer.elapsed_ms,
        )

    if parse_positive_int(request.permanent_id) is None:
        return OperationResult.fail(
            VALIDATION_FAILED,
            f"permanent_id must be a positive integer, got {request.permanent_id!r}",
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        if ctx.dry_run:
            existing = service.lookup(request.permanent_id)
            return OperationResult.ok(
                PublishOutcome(
                    permanent_id=request.permanent_id,
                    category=request.category,
                    sequence_id=existing.sequence_id if existing else None,
                    permalink=service.permalink(request.permanent_id) if existing else None,
                    dry_run=True,
                ),
                elapsed_ms=timer.elapsed_ms,
            )
        result = service.on_publish(event)
    except Exception as exc:
        _log_failure(ctx, "publish_record", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)

    if result is None:
        return OperationResult.ok(
            PublishOutcome(
                permanent_id=request.permanent_id,
                category=request.category,
                skipped=True,
            ),
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(
        PublishOutcome(
            permanent_id=result.permanent_id,
            category=result.category,
            sequence_id=result.sequence_id,
            created=result.created,
            permalink=service.permalink(result.permanent_id),
        ),
        elapsed_ms=timer.elapsed_ms,
    )


def delete_record(
    ctx: OperationContext,
    request: DeleteRecordRequest,
) -> OperationResult[DeleteOutcome]:
    """Remove the mapping of a deleted record.  Counters are untouched."""
    timer = start_timer()

    if parse_positive_int(request.permanent_id) is None:
        return OperationResult.fail(
            VALIDATION_FAILED,
            f"permanent_id must be a positive integer, got {request.permanent_id!r}",
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        if ctx.dry_run:
            exists = ctx.service.lookup(request.permanent_id) is not None
            return OperationResult.ok(
                DeleteOutcome(permanent_id=request.permanent_id, removed=exists, dry_run=True),
                elapsed_ms=timer.elapsed_ms,
            )
        removed = ctx.service.on_delete(request.permanent_id)
        return OperationResult.ok(
            DeleteOutcome(permanent_id=request.permanent_id, removed=removed),
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _log_failure(ctx, "delete_record", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Lookups
# ------------------------------------------------------------------ #


def resolve_sequence(
    ctx: OperationContext,
    request: ResolveSequenceRequest,
) -> OperationResult[MappingView]:
    """Forward lookup ``(category, sequence_id)`` → record."""
    timer = start_timer()
    try:
        permanent_id = ctx.service.resolve_by_sequence(request.category, request.sequence_id)
        if permanent_id is None:
            return OperationResult.fail(
                NOT_FOUND,
                f"No {request.category} record with sequence id {request.sequence_id!r}",
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(
            MappingView(
                permanent_id=permanent_id,
                sequence_id=parse_positive_int(request.sequence_id),
                category=request.category,
                permalink=ctx.service.permalink(permanent_id),
            ),
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _log_failure(ctx, "resolve_sequence", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


def lookup_record(
    ctx: OperationContext,
    request: LookupRecordRequest,
) -> OperationResult[MappingView]:
    """Reverse lookup ``permanent_id`` → ``(sequence_id, category)``."""
    timer = start_timer()
    try:
        mapping = ctx.service.lookup(request.permanent_id)
        if mapping is None:
            return OperationResult.fail(
                NOT_FOUND,
                f"Record {request.permanent_id!r} has no sequence id",
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(
            MappingView(
                permanent_id=mapping.permanent_id,
                sequence_id=mapping.sequence_id,
                category=mapping.category,
                permalink=ctx.service.permalink(mapping.permanent_id),
            ),
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _log_failure(ctx, "lookup_record", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


def resolve_path(
    ctx: OperationContext,
    request: ResolvePathRequest,
) -> OperationResult[RouteMatch]:
    """Route a public ``/<base_path>/<sequence_id>/`` path to its record."""
    timer = start_timer()
    try:
        matched = ctx.service.route(request.path)
        if matched is None:
            return OperationResult.fail(
                NOT_FOUND,
                f"No record is served at {request.path!r}",
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(matched, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        _log_failure(ctx, "resolve_path", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


def get_permalink(
    ctx: OperationContext,
    request: PermalinkRequest,
) -> OperationResult[PermalinkView]:
    timer = start_timer()
    try:
        link = ctx.service.permalink(request.permanent_id)
        if link is None:
            return OperationResult.fail(
                NOT_FOUND,
                f"Record {request.permanent_id!r} has no sequence id",
                elapsed_ms=timer.elapsed_ms,
            )
        return OperationResult.ok(
            PermalinkView(permanent_id=parse_positive_int(request.permanent_id), permalink=link),
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _log_failure(ctx, "get_permalink", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Listings
# ------------------------------------------------------------------ #


def list_counters(ctx: OperationContext) -> OperationResult[list[CounterView]]:
    """Counter, base path and query variable of every configured category."""
    timer = start_timer()
    try:
        views = [
            CounterView(
                category=counter.category,
                last_value=counter.last_value,
                base_path=ctx.service.base_path(counter.category),
                query_var=query_var(counter.category),
            )
            for counter in ctx.service.counters()
        ]
        return OperationResult.ok(views, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        _log_failure(ctx, "list_counters", exc)
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


def list_mappings(
    ctx: OperationContext,
    request: ListMappingsRequest,
) -> PagedResult[MappingView]:
    """Mappings of one category by ascending sequence id."""
    timer = start_timer()

    if request.category not in ctx.service.categories:
        return PagedResult.fail(
            NOT_FOUND,
            f"Unknown category {request.category!r}",
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        mappings, total = ctx.service.list_mappings(
            request.category, limit=request.limit, offset=request.offset
        )
        base = ctx.service.base_path(request.category)
        home = ctx.service.settings.home_url
        views = [
            MappingView(
                permanent_id=m.permanent_id,
                sequence_id=m.sequence_id,
                category=m.category,
                permalink=f"{home}/{base}/{m.sequence_id}/",
            )
            for m in mappings
        ]
        return PagedResult.from_items(
            views,
            total=total,
            limit=request.limit,
            offset=request.offset,
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        _log_failure(ctx, "list_mappings", exc)
        return PagedResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)
