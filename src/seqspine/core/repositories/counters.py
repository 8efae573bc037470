"""Counter repository - seq_counters.

Tags:
    seq-spine, repository, counter

Doc-Types:
    api-reference
"""

from __future__ import annotations

from seqspine.core.models import Counter
from seqspine.core.orm import COUNTERS_TABLE
from seqspine.core.repository import BaseRepository


class CounterRepository(BaseRepository):
    """Per-category counters.

    ``increment_and_fetch`` is a single upsert statement; the row lock it
    takes is held until the caller's transaction ends.
    """

    TABLE = COUNTERS_TABLE

    # -- reads -----------------------------------------------------------------

    def current(self, category: str) -> int:
        """Counter value, 0 when the category has never allocated."""
        value = self.scalar(
            f"SELECT last_value FROM {self.TABLE} WHERE category = :category",
            {"category": category},
        )
        return int(value) if value is not None else 0

    def list_all(self) -> list[Counter]:
        rows = self.query(f"SELECT category, last_value FROM {self.TABLE} ORDER BY category")
        return [Counter(category=row["category"], last_value=int(row["last_value"])) for row in rows]

    # -- writes ----------------------------------------------------------------

    def get_or_initialize(self, category: str) -> int:
        """Create the counter at 0 when absent and return its value."""
        self.execute(
            f"INSERT INTO {self.TABLE} (category, last_value) VALUES (:category, 0) "
            "ON CONFLICT (category) DO NOTHING",
            {"category": category},
        )
        return self.current(category)

    def increment_and_fetch(self, category: str) -> int:
        """Add one to the counter and return the new value (1 on first use)."""
        value = self.scalar(
            f"INSERT INTO {self.TABLE} (category, last_value) VALUES (:category, 1) "
            f"ON CONFLICT (category) DO UPDATE SET last_value = {self.TABLE}.last_value + 1 "
            "RETURNING last_value",
            {"category": category},
        )
        return int(value)
