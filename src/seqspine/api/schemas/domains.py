"""
Domain schemas - request bodies and payloads of the sequence endpoints.

Payload schemas mirror the dataclasses in :mod:`seqspine.ops.responses`
field for field, so routers build them with ``Schema(**_dc(result.data))``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# ── Request bodies ───────────────────────────────────────────────────────


class PublishBody(BaseModel):
    """A record was saved by the host publishing lifecycle.

    Example:
        {"permanent_id": 501, "category": "product", "parent_id": 0, "status": "publish"}
    """

    permanent_id: int = Field(gt=0, description="Stable id of the record")
    category: str = Field(min_length=1, description="Record category, e.g. 'product'")
    parent_id: int = Field(default=0, description="0 for top-level records")
    status: str = Field(default="publish", description="Record status after the save")


class DeleteBody(BaseModel):
    permanent_id: int = Field(gt=0, description="Stable id of the deleted record")


# ── Payloads ─────────────────────────────────────────────────────────────


class PublishOutcomeSchema(BaseModel):
    permanent_id: int
    category: str
    sequence_id: int | None = None
    created: bool = False
    skipped: bool = False
    permalink: str | None = None
    dry_run: bool = False


class DeleteOutcomeSchema(BaseModel):
    permanent_id: int
    removed: bool
    dry_run: bool = False


class MappingSchema(BaseModel):
    permanent_id: int
    sequence_id: int
    category: str
    permalink: str | None = None


class CounterSchema(BaseModel):
    category: str
    last_value: int = Field(description="Highest sequence id ever issued (0 = none)")
    base_path: str
    query_var: str


class RouteSchema(BaseModel):
    category: str
    sequence_id: int
    permanent_id: int


class PermalinkSchema(BaseModel):
    permanent_id: int
    permalink: str
