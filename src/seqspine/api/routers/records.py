"""
Records router - reverse lookups and display URLs.

Endpoints:
    GET    /records/{permanent_id}             Sequence id and category of a record
    GET    /records/{permanent_id}/permalink   Public URL of a record

Tags:
    seq-spine, api, records, permalink
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from seqspine.api.deps import OpContext
from seqspine.api.schemas.common import SuccessResponse
from seqspine.api.schemas.domains import MappingSchema, PermalinkSchema
from seqspine.api.utils import _dc, _handle_error
from seqspine.ops.requests import LookupRecordRequest, PermalinkRequest
from seqspine.ops.sequences import get_permalink, lookup_record

router = APIRouter(prefix="/records")


@router.get("/{permanent_id}", response_model=SuccessResponse[MappingSchema])
def get_record(permanent_id: str, ctx: OpContext, request: Request):
    result = lookup_record(ctx, LookupRecordRequest(permanent_id=permanent_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=MappingSchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)


@router.get("/{permanent_id}/permalink", response_model=SuccessResponse[PermalinkSchema])
def get_record_permalink(permanent_id: str, ctx: OpContext, request: Request):
    """``<home_url>/<base_path>/<sequence_id>/`` of a mapped record."""
    result = get_permalink(ctx, PermalinkRequest(permanent_id=permanent_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=PermalinkSchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)
