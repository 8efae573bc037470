"""Lifecycle reconciler - drop the mapping of a deleted record.

The category counter is never touched: a deleted record's sequence id is
a permanent gap and is never issued again.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import Engine

from seqspine.core.logging import get_logger
from seqspine.core.orm import writer
from seqspine.core.repositories import MappingRepository
from seqspine.sequencing.resolver import parse_positive_int

logger = get_logger(__name__)


class LifecycleReconciler:
    def __init__(self, engine: Engine) -> None:
        self._engine = writer(engine)

    def on_delete(self, permanent_id: Any) -> bool:
        """Remove the mapping of *permanent_id*.  Returns whether a row was removed."""
        pid = parse_positive_int(permanent_id)
        if pid is None:
            return False
        with self._engine.begin() as conn:
            removed = MappingRepository(conn).delete_by_permanent_id(pid)
        if removed:
            logger.info("mapping_deleted", permanent_id=pid)
        else:
            logger.debug("mapping_delete_noop", permanent_id=pid)
        return removed


__all__ = ["LifecycleReconciler"]
