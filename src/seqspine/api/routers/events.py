"""
Events router - publish and delete lifecycle events.

Endpoints:
    POST   /events/publish   Allocate a sequence id for a published record
    POST   /events/delete    Drop the mapping of a deleted record

Both endpoints are idempotent: re-sending a publish event returns the
existing sequence id, re-sending a delete event is a no-op.

Tags:
    seq-spine, api, events, lifecycle
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from seqspine.api.deps import OpContext
from seqspine.api.schemas.common import SuccessResponse
from seqspine.api.schemas.domains import (
    DeleteBody,
    DeleteOutcomeSchema,
    PublishBody,
    PublishOutcomeSchema,
)
from seqspine.api.utils import _dc, _handle_error
from seqspine.ops.requests import DeleteRecordRequest, PublishRecordRequest
from seqspine.ops.sequences import delete_record, publish_record

router = APIRouter(prefix="/events")


@router.post("/publish", response_model=SuccessResponse[PublishOutcomeSchema])
def publish(
    body: PublishBody,
    ctx: OpContext,
    request: Request,
    dry_run: bool = Query(False, description="Report the existing mapping without allocating"),
):
    """Allocate a sequence id for a published record.

    Ineligible events (unknown category, child record, non-published
    status) succeed with ``skipped: true``.

    Example:
        POST /api/v1/events/publish
        {"permanent_id": 501, "category": "product"}

        Response (200):
        {"data": {"permanent_id": 501, "category": "product", "sequence_id": 1,
                  "created": true, "skipped": false, "permalink": "/product/1/"}}
    """
    ctx.dry_run = dry_run
    result = publish_record(
        ctx,
        PublishRecordRequest(
            permanent_id=body.permanent_id,
            category=body.category,
            parent_id=body.parent_id,
            status=body.status,
        ),
    )
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=PublishOutcomeSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
        warnings=result.warnings,
    )


@router.post("/delete", response_model=SuccessResponse[DeleteOutcomeSchema])
def delete(
    body: DeleteBody,
    ctx: OpContext,
    request: Request,
    dry_run: bool = Query(False, description="Report whether a mapping would be removed"),
):
    """Remove the mapping of a deleted record.  The category counter is unchanged."""
    ctx.dry_run = dry_run
    result = delete_record(ctx, DeleteRecordRequest(permanent_id=body.permanent_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=DeleteOutcomeSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
        warnings=result.warnings,
    )
