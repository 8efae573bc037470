"""Mapping repository - seq_mappings.

Tags:
    seq-spine, repository, mapping

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from seqspine.core.errors import DuplicateMappingError, IntegrityError
from seqspine.core.models import Mapping
from seqspine.core.orm import MAPPINGS_TABLE
from seqspine.core.repository import BaseRepository

_COLUMNS = "id, permanent_id, sequence_id, category"


def _to_mapping(row: dict[str, Any]) -> Mapping:
    return Mapping(
        permanent_id=int(row["permanent_id"]),
        sequence_id=int(row["sequence_id"]),
        category=row["category"],
        id=row["id"],
    )


class MappingRepository(BaseRepository):
    """CRUD for ``seq_mappings``.  Rows are inserted and deleted, never updated."""

    TABLE = MAPPINGS_TABLE

    # -- reads -----------------------------------------------------------------

    def get_by_permanent_id(self, permanent_id: int) -> Mapping | None:
        row = self.query_one(
            f"SELECT {_COLUMNS} FROM {self.TABLE} WHERE permanent_id = :permanent_id",
            {"permanent_id": permanent_id},
        )
        return _to_mapping(row) if row else None

    def get_by_sequence(self, category: str, sequence_id: int) -> Mapping | None:
        row = self.query_one(
            f"SELECT {_COLUMNS} FROM {self.TABLE} "
            "WHERE sequence_id = :sequence_id AND category = :category",
            {"sequence_id": sequence_id, "category": category},
        )
        return _to_mapping(row) if row else None

    def list_for_category(
        self,
        category: str,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Mapping], int]:
        """Mappings of *category* by ascending sequence id.  Returns ``(rows, total)``."""
        total = self.scalar(
            f"SELECT COUNT(*) FROM {self.TABLE} WHERE category = :category",
            {"category": category},
        )
        rows = self.query(
            f"SELECT {_COLUMNS} FROM {self.TABLE} WHERE category = :category "
            "ORDER BY sequence_id LIMIT :limit OFFSET :offset",
            {"category": category, "limit": limit, "offset": offset},
        )
        return [_to_mapping(row) for row in rows], int(total or 0)

    # -- writes ----------------------------------------------------------------

    def insert_mapping(self, permanent_id: int, sequence_id: int, category: str) -> Mapping:
        """Persist a new mapping.

        Raises:
            DuplicateMappingError: ``permanent_id`` or ``(sequence_id, category)``
                is already mapped.
        """
        try:
            row_id = self.scalar(
                f"INSERT INTO {self.TABLE} (permanent_id, sequence_id, category) "
                "VALUES (:permanent_id, :sequence_id, :category) RETURNING id",
                {"permanent_id": permanent_id, "sequence_id": sequence_id, "category": category},
            )
        except IntegrityError as exc:
            raise DuplicateMappingError(
                exc.message, cause=exc.cause
            ).with_context(
                operation="insert_mapping",
                record_category=category,
                permanent_id=permanent_id,
                sequence_id=sequence_id,
            ) from exc
        return Mapping(
            permanent_id=permanent_id,
            sequence_id=sequence_id,
            category=category,
            id=row_id,
        )

    def delete_by_permanent_id(self, permanent_id: int) -> bool:
        """Remove the mapping of *permanent_id*.  Returns whether a row was removed."""
        result = self.execute(
            f"DELETE FROM {self.TABLE} WHERE permanent_id = :permanent_id",
            {"permanent_id": permanent_id},
        )
        return result.rowcount > 0
