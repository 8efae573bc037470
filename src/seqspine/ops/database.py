"""
Database operations.

Thin wrappers around :mod:`seqspine.core.schema` for provisioning, row
counts and health checks.
"""

from __future__ import annotations

import time

from sqlalchemy import text

from seqspine.core.logging import get_logger
from seqspine.core.schema import SEQ_TABLES, existing_tables, table_status
from seqspine.ops.context import OperationContext
from seqspine.ops.requests import DatabaseInitRequest
from seqspine.ops.responses import DatabaseHealth, DatabaseInitResult, TableCount
from seqspine.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


def initialize_database(
    ctx: OperationContext,
    request: DatabaseInitRequest | None = None,
) -> OperationResult[DatabaseInitResult]:
    """Create the seq-spine tables (idempotent).

    With ``seed_counters`` every configured category gets a counter row
    at 0 if it has none.
    """
    request = request or DatabaseInitRequest()
    timer = start_timer()
    service = ctx.service

    try:
        if ctx.dry_run:
            missing = sorted(set(SEQ_TABLES.values()) - existing_tables(service.engine))
            return OperationResult.ok(
                DatabaseInitResult(tables_created=missing, dry_run=True),
                elapsed_ms=timer.elapsed_ms,
            )

        created = service.provision()
        seeded: list[str] = []
        if request.seed_counters:
            seeded = [counter.category for counter in service.initialize_counters()]
        return OperationResult.ok(
            DatabaseInitResult(tables_created=created, counters_seeded=seeded),
            elapsed_ms=timer.elapsed_ms,
        )
    except Exception as exc:
        logger.exception("op_failed", op="initialize_database", error=str(exc))
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)


def get_table_counts(ctx: OperationContext) -> OperationResult[list[TableCount]]:
    """Row counts for the seq-spine tables (``-1`` for absent tables)."""
    timer = start_timer()
    try:
        status = table_status(ctx.service.engine)
    except Exception as exc:
        logger.exception("op_failed", op="get_table_counts", error=str(exc))
        return OperationResult.from_exception(exc, elapsed_ms=timer.elapsed_ms)

    counts = [
        TableCount(table=name, count=info["rows"] if info["exists"] else -1)
        for name, info in status.items()
    ]
    return OperationResult.ok(counts, elapsed_ms=timer.elapsed_ms)


def check_database_health(ctx: OperationContext) -> OperationResult[DatabaseHealth]:
    """Connectivity, backend and provisioned table count."""
    timer = start_timer()
    engine = ctx.service.engine
    start = time.perf_counter()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        latency = (time.perf_counter() - start) * 1000
        present = existing_tables(engine)
    except Exception as exc:
        logger.warning("database_unhealthy", error=str(exc))
        return OperationResult.ok(
            DatabaseHealth(connected=False, backend=engine.dialect.name),
            warnings=[str(exc)],
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(
        DatabaseHealth(
            connected=True,
            backend=engine.dialect.name,
            table_count=len(present),
            latency_ms=round(latency, 2),
        ),
        elapsed_ms=timer.elapsed_ms,
    )
