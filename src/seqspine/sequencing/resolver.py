"""
Resolver - best-effort lookups between sequence ids and permanent ids.

Resolution is not a validated command: any malformed sequence id
(``"abc"``, ``"0"``, ``"-3"``, ``"1.5"``, ``True``) is simply "not found".
Forward lookup drives request routing, reverse lookup drives display URLs.

Examples:
    >>> parse_positive_int("12")
    12
    >>> parse_positive_int("1.5") is None
    True
    >>> resolver.resolve_by_sequence("product", "2")
    502
    >>> resolver.resolve_by_permanent_id(502)
    (2, 'product')

Tags:
    resolver, lookup, routing, seq-spine
"""

from __future__ import annotations

import re
from collections.abc import Collection
from typing import Any

from sqlalchemy.engine import Engine

from seqspine.core.models import Mapping
from seqspine.core.repositories import MappingRepository

_DIGITS_RE = re.compile(r"^[0-9]+$")

# Largest value a BIGINT column can hold
MAX_ID = 2**63 - 1


def parse_positive_int(value: Any) -> int | None:
    """Coerce *value* to a positive integer id, or ``None`` when malformed.

    Accepts ``int`` and decimal digit strings (surrounding whitespace is
    ignored).  Rejects booleans, floats, signs, decimals, zero and values
    that do not fit a BIGINT column.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DIGITS_RE.match(text):
            return None
        number = int(text)
    else:
        return None
    if number <= 0 or number > MAX_ID:
        return None
    return number


class Resolver:
    """Read-only lookups over the mapping store.  No side effects."""

    def __init__(self, engine: Engine, categories: Collection[str]) -> None:
        self._engine = engine
        self._categories = frozenset(categories)

    def lookup(self, permanent_id: Any) -> Mapping | None:
        """Full mapping row for *permanent_id*, or ``None``."""
        pid = parse_positive_int(permanent_id)
        if pid is None:
            return None
        with self._engine.connect() as conn:
            return MappingRepository(conn).get_by_permanent_id(pid)

    def resolve_by_sequence(self, category: str, sequence_id: Any) -> int | None:
        """``(category, sequence_id)`` → ``permanent_id``, or ``None``."""
        if category not in self._categories:
            return None
        seq = parse_positive_int(sequence_id)
        if seq is None:
            return None
        with self._engine.connect() as conn:
            mapping = MappingRepository(conn).get_by_sequence(category, seq)
        return mapping.permanent_id if mapping else None

    def resolve_by_permanent_id(self, permanent_id: Any) -> tuple[int, str] | None:
        """``permanent_id`` → ``(sequence_id, category)``, or ``None``."""
        mapping = self.lookup(permanent_id)
        if mapping is None:
            return None
        return mapping.sequence_id, mapping.category


__all__ = ["MAX_ID", "parse_positive_int", "Resolver"]
