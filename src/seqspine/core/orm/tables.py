"""Table definitions - category counters and sequence mappings.

Tags:
    seq-spine, orm, sqlalchemy, tables

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, Index, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from seqspine.core.orm.base import SeqBase

COUNTERS_TABLE = "seq_counters"
MAPPINGS_TABLE = "seq_mappings"


class SequenceCounterTable(SeqBase):
    """Highest sequence id ever issued per category."""

    __tablename__ = COUNTERS_TABLE
    __table_args__ = (CheckConstraint("last_value >= 0", name="ck_seq_counters_last_value"),)

    category: Mapped[str] = mapped_column(String(64), primary_key=True)
    last_value: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default=text("0")
    )


class SequenceMappingTable(SeqBase):
    """``permanent_id`` ↔ ``(sequence_id, category)``."""

    __tablename__ = MAPPINGS_TABLE
    __table_args__ = (
        UniqueConstraint("sequence_id", "category", name="uq_seq_mappings_sequence_category"),
        Index("ix_seq_mappings_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    permanent_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    sequence_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)


__all__ = [
    "COUNTERS_TABLE",
    "MAPPINGS_TABLE",
    "SequenceCounterTable",
    "SequenceMappingTable",
]
