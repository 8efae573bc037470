"""
Schema provisioning for the two seq-spine tables.

Manifesto:
    Provisioning runs on every install and every application start, so it
    must be idempotent: create what is absent, never drop or alter what is
    present.  Uninstall is not represented here; mappings
    outlive the process that created them.

Architecture:
    ::

        Table Registry (SEQ_TABLES):
        ┌────────────────────────────────────────────────────────────┐
        │ counters  → seq_counters   (category PK, last_value ≥ 0)   │
        │ mappings  → seq_mappings   (id, permanent_id UNIQUE,       │
        │                             sequence_id, category,         │
        │                             UNIQUE(sequence_id, category)) │
        └────────────────────────────────────────────────────────────┘

Examples:
    >>> engine = create_seq_engine("sqlite:///seq_spine.db")
    >>> provision(engine)
    ['seq_counters', 'seq_mappings']
    >>> provision(engine)
    []

Tags:
    schema, ddl, provisioning, seq-spine
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seqspine.core.errors import DatabaseError
from seqspine.core.logging import get_logger
from seqspine.core.orm import COUNTERS_TABLE, MAPPINGS_TABLE, SeqBase

logger = get_logger(__name__)

SEQ_TABLES = {
    "counters": COUNTERS_TABLE,
    "mappings": MAPPINGS_TABLE,
}


def existing_tables(engine: Engine) -> set[str]:
    """Names of the seq-spine tables already present."""
    present = set(inspect(engine).get_table_names())
    return {name for name in SEQ_TABLES.values() if name in present}


def provision(engine: Engine) -> list[str]:
    """Create absent tables and return the names of those created.

    Raises:
        DatabaseError: DDL failed.
    """
    try:
        before = existing_tables(engine)
        SeqBase.metadata.create_all(engine, checkfirst=True)
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Schema provisioning failed: {exc}", cause=exc) from exc

    created = sorted(set(SEQ_TABLES.values()) - before)
    if created:
        logger.info("schema_provisioned", tables=created)
    else:
        logger.debug("schema_up_to_date")
    return created


def table_status(engine: Engine) -> dict[str, Any]:
    """Presence and row count per table, for ``db status`` and readiness."""
    present = existing_tables(engine)
    status: dict[str, Any] = {}
    with engine.connect() as conn:
        for table in SeqBase.metadata.sorted_tables:
            if table.name not in present:
                status[table.name] = {"exists": False, "rows": None}
                continue
            rows = conn.execute(select(func.count()).select_from(table)).scalar_one()
            status[table.name] = {"exists": True, "rows": rows}
    return status


__all__ = ["SEQ_TABLES", "existing_tables", "provision", "table_status"]
