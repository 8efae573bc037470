"""SQLAlchemy 2.0 storage layer for seq-spine.

Modules
-------
base        SeqBase (declarative base)
session     Engine factory with SQLite transaction control, writer()
tables      SequenceCounterTable, SequenceMappingTable

Tags:
    seq-spine, orm, sqlalchemy, declarative

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from seqspine.core.orm.base import SeqBase
from seqspine.core.orm.session import IMMEDIATE_OPTION, create_seq_engine, writer
from seqspine.core.orm.tables import (
    COUNTERS_TABLE,
    MAPPINGS_TABLE,
    SequenceCounterTable,
    SequenceMappingTable,
)

__all__ = [
    "SeqBase",
    "IMMEDIATE_OPTION",
    "create_seq_engine",
    "writer",
    "COUNTERS_TABLE",
    "MAPPINGS_TABLE",
    "SequenceCounterTable",
    "SequenceMappingTable",
]
