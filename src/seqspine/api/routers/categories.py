"""
Categories router - counters, forward lookups and mapping listings.

Endpoints:
    GET    /categories                                    Counters of every category
    GET    /categories/{category}/sequences/{sequence_id} Record behind a sequence id
    GET    /categories/{category}/mappings                Mappings by sequence id

Tags:
    seq-spine, api, categories, resolver
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from seqspine.api.deps import OpContext
from seqspine.api.schemas.common import PagedResponse, PageMeta, SuccessResponse
from seqspine.api.schemas.domains import CounterSchema, MappingSchema
from seqspine.api.utils import _dc, _handle_error
from seqspine.ops.requests import ListMappingsRequest, ResolveSequenceRequest
from seqspine.ops.sequences import list_counters, list_mappings, resolve_sequence

router = APIRouter(prefix="/categories")


@router.get("", response_model=SuccessResponse[list[CounterSchema]])
def list_categories(ctx: OpContext, request: Request):
    """Every configured category with its counter, base path and query variable."""
    result = list_counters(ctx)
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=[CounterSchema(**_dc(c)) for c in result.data or []],
        elapsed_ms=result.elapsed_ms,
    )


@router.get(
    "/{category}/sequences/{sequence_id}",
    response_model=SuccessResponse[MappingSchema],
)
def get_by_sequence(category: str, sequence_id: str, ctx: OpContext, request: Request):
    """Forward lookup.

    ``sequence_id`` is taken as a raw string: malformed values such as
    ``abc``, ``0`` or ``1.5`` are a 404, like any other miss.
    """
    result = resolve_sequence(ctx, ResolveSequenceRequest(category=category, sequence_id=sequence_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=MappingSchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)


@router.get("/{category}/mappings", response_model=PagedResponse[MappingSchema])
def get_mappings(
    category: str,
    ctx: OpContext,
    request: Request,
    limit: int = Query(50, ge=1, le=500, description="Maximum items to return (1-500)"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
):
    """Mappings of one category in ascending sequence id order."""
    result = list_mappings(ctx, ListMappingsRequest(category=category, limit=limit, offset=offset))
    if not result.success:
        return _handle_error(result, request)
    return PagedResponse(
        data=[MappingSchema(**_dc(m)) for m in result.data or []],
        page=PageMeta(
            total=result.total,
            limit=result.limit,
            offset=result.offset,
            has_more=result.has_more,
        ),
        elapsed_ms=result.elapsed_ms,
    )
