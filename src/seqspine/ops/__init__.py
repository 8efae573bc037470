"""
Operations layer - transport-agnostic business logic for seq-spine.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` (never raise)
- All functions know nothing about HTTP or the CLI
- All write operations support ``dry_run`` previews

Usage::

    from seqspine.ops import OperationContext
    from seqspine.ops.requests import PublishRecordRequest
    from seqspine.ops.sequences import publish_record

    ctx = OperationContext(service=service, caller="sdk")
    result = publish_record(ctx, PublishRecordRequest(permanent_id=501, category="product"))
    assert result.data.sequence_id == 1
"""

from seqspine.ops.context import OperationContext
from seqspine.ops.result import OperationError, OperationResult, PagedResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
]
