"""
Structural protocols for seq-spine.

Manifesto:
    Protocols define contracts without inheritance.  The allocator only
    needs something that can increment a counter and something that can
    store a mapping; the base-path resolver only needs a key-value reader.
    Tests and alternative backends satisfy these by shape.

Architecture:
    ::

        protocols.py
        ├── CounterStore       - per-category atomic increment-and-fetch
        ├── MappingStore       - unique (permanent_id, sequence_id, category) rows
        └── StorefrontOptions  - key-value configuration of the storefront

Guardrails:
    ❌ DON'T: implement the counter as read, add one, write
    ✅ DO: ``increment_and_fetch`` is one storage statement

    ❌ DON'T: add implementation logic to protocol classes
    ✅ DO: keep protocols pure contracts; repositories implement them

Tags:
    protocol, counter, mapping, storefront, seq-spine, contracts
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from seqspine.core.models import Counter, Mapping


@runtime_checkable
class CounterStore(Protocol):
    """Durable per-category last-allocated value."""

    def increment_and_fetch(self, category: str) -> int:
        """Atomically add one to the category counter and return the new value.

        Creates the counter at 1 when the category has never been used.
        """
        ...

    def get_or_initialize(self, category: str) -> int:
        """Return the counter, creating it at 0 when absent."""
        ...

    def current(self, category: str) -> int:
        """Return the counter value, 0 when absent.  No side effects."""
        ...

    def list_all(self) -> list[Counter]: ...


@runtime_checkable
class MappingStore(Protocol):
    """Durable mapping table with storage-enforced uniqueness."""

    def get_by_permanent_id(self, permanent_id: int) -> Mapping | None: ...

    def get_by_sequence(self, category: str, sequence_id: int) -> Mapping | None: ...

    def insert_mapping(self, permanent_id: int, sequence_id: int, category: str) -> Mapping:
        """Persist a mapping.

        Raises:
            DuplicateMappingError: ``permanent_id`` or ``(sequence_id, category)``
                already exists.
        """
        ...

    def delete_by_permanent_id(self, permanent_id: int) -> bool: ...

    def list_for_category(
        self, category: str, *, limit: int = 100, offset: int = 0
    ) -> tuple[list[Mapping], int]:
        """Mappings of a category ordered by sequence id, plus the total count."""
        ...


@runtime_checkable
class StorefrontOptions(Protocol):
    """Key-value options of the external storefront collaborator."""

    def get(self, key: str) -> Any:
        """Return the stored option value, or ``None`` when unset."""
        ...


__all__ = ["CounterStore", "MappingStore", "StorefrontOptions"]
