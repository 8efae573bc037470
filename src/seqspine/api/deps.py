"""
FastAPI dependency injection - shared singletons and per-request factories.

Usage in routers::

    from seqspine.api.deps import OpContext

    @router.get("/categories")
    def list_categories(ctx: OpContext):
        ...

Manifesto:
    Dependency injection keeps routers thin.  The settings and the
    :class:`SequenceService` are created once per application; the
    :class:`OperationContext` is built per request and carries the
    request id through the call chain.

Tags:
    seq-spine, api, dependency-injection
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Request

from seqspine.core.settings import SeqSpineSettings, get_settings
from seqspine.ops.context import OperationContext
from seqspine.sequencing.service import SequenceService

# ── Service (one per application) ────────────────────────────────────────


def get_service(request: Request) -> SequenceService:
    """The service built by the application lifespan."""
    return request.app.state.service


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    service: Annotated[SequenceService, Depends(get_service)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    return OperationContext(
        service=service,
        request_id=request_id,
        caller="api",
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[SeqSpineSettings, Depends(get_settings)]
Service = Annotated[SequenceService, Depends(get_service)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
