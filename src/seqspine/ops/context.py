"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the sequence service, caller identity,
dry-run flag and arbitrary metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from seqspine.sequencing.service import SequenceService


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        service: The application's :class:`SequenceService`.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request: ``"api"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, operations report without side effects.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    service: SequenceService
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
