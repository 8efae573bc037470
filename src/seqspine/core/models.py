"""Domain value objects shared by storage, sequencing and the outer surfaces.

All models are frozen dataclasses: a mapping is never mutated after it is
created, and events are plain messages.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import asdict, dataclass, field
from typing import Any

PUBLISH_STATUS = "publish"


@dataclass(frozen=True)
class Mapping:
    """A durable ``permanent_id`` ↔ ``(sequence_id, category)`` association."""

    permanent_id: int
    sequence_id: int
    category: str
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Counter:
    """Highest sequence id ever issued for a category (0 = none yet)."""

    category: str
    last_value: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PublishEvent:
    """A record was saved by the host publishing lifecycle.

    The event may fire many times for the same record (every save); only
    top-level records in the published state are eligible.
    """

    permanent_id: int
    category: str
    parent_id: int = 0
    status: str = PUBLISH_STATUS

    def is_eligible(
        self,
        categories: Collection[str],
        publish_status: str = PUBLISH_STATUS,
    ) -> bool:
        return (
            self.category in categories
            and self.parent_id == 0
            and self.status == publish_status
        )


@dataclass(frozen=True)
class DeleteEvent:
    """A record was permanently deleted."""

    permanent_id: int


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of an eligible allocation.

    ``created`` is ``False`` when an existing mapping was returned.
    """

    permanent_id: int
    category: str
    sequence_id: int
    created: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RouteMatch:
    """A public path resolved to its record."""

    category: str
    sequence_id: int
    permanent_id: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RewriteRule:
    """``^<base>/([0-9]+)/?$`` → ``<category>_seq_id``."""

    category: str
    base_path: str
    pattern: str
    query_var: str
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", re.compile(self.pattern))

    def match(self, path: str) -> str | None:
        """Return the captured sequence id for *path*, or ``None``."""
        found = self._regex.match(path)
        return found.group(1) if found else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "base_path": self.base_path,
            "pattern": self.pattern,
            "query_var": self.query_var,
        }


__all__ = [
    "PUBLISH_STATUS",
    "Mapping",
    "Counter",
    "PublishEvent",
    "DeleteEvent",
    "AllocationResult",
    "RouteMatch",
    "RewriteRule",
]
