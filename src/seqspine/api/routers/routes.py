"""
Route router - resolve a public path to its record.

Endpoints:
    GET    /route?path=/product/12/   Record served at a public path

Tags:
    seq-spine, api, routing
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from seqspine.api.deps import OpContext
from seqspine.api.schemas.common import SuccessResponse
from seqspine.api.schemas.domains import RouteSchema
from seqspine.api.utils import _dc, _handle_error
from seqspine.ops.requests import ResolvePathRequest
from seqspine.ops.sequences import resolve_path

router = APIRouter()


@router.get("/route", response_model=SuccessResponse[RouteSchema])
def route(
    ctx: OpContext,
    request: Request,
    path: str = Query(..., description="Public path, e.g. /product/12/"),
):
    """A path that matches no rule or no mapping is a 404; the host falls back to default routing."""
    result = resolve_path(ctx, ResolvePathRequest(path=path))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=RouteSchema(**_dc(result.data)), elapsed_ms=result.elapsed_ms)
