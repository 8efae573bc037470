"""
SequenceService - the one object the application talks to.

Manifesto:
    Built once at application start from an engine and settings, and
    passed explicitly to whoever needs it.  Lifecycle events arrive as
    method calls; every call opens its own storage connection, so the
    service is safe to share across threads and requests.

Architecture:
    ::

        SequenceService
        ├── Allocator            on_publish / allocate / reserve
        ├── Resolver             resolve_by_sequence / resolve_by_permanent_id / lookup
        ├── LifecycleReconciler  on_delete
        ├── BasePathResolver     base_path
        └── Router               rewrite_rules / query_vars / match / route
                                 rewrite_query / permalink

Examples:
    >>> service = SequenceService.from_settings(SeqSpineSettings(database_url="sqlite:///x.db"))
    >>> service.provision()
    >>> service.on_publish(PublishEvent(permanent_id=501, category="product"))
    AllocationResult(permanent_id=501, category='product', sequence_id=1, created=True)
    >>> service.permalink(501)
    '/product/1/'

Tags:
    service, facade, seq-spine
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import Engine

from seqspine.core.logging import get_logger
from seqspine.core.models import (
    AllocationResult,
    Counter,
    DeleteEvent,
    Mapping,
    PublishEvent,
    RewriteRule,
    RouteMatch,
)
from seqspine.core.orm import create_seq_engine, writer
from seqspine.core.protocols import StorefrontOptions
from seqspine.core.repositories import CounterRepository, MappingRepository
from seqspine.core.schema import provision as provision_schema
from seqspine.core.settings import SeqSpineSettings, get_settings
from seqspine.sequencing.allocator import Allocator
from seqspine.sequencing.base_paths import BasePathResolver, SettingsStorefrontOptions
from seqspine.sequencing.reconciler import LifecycleReconciler
from seqspine.sequencing.resolver import Resolver
from seqspine.sequencing.routing import Router

logger = get_logger(__name__)


class SequenceService:
    """Facade over allocation, resolution, reconciliation and routing."""

    def __init__(
        self,
        engine: Engine,
        settings: SeqSpineSettings,
        options: StorefrontOptions | None = None,
    ) -> None:
        self.engine = engine
        self.settings = settings
        self.categories: list[str] = list(settings.categories)

        self._allocator = Allocator(engine, self.categories, settings.publish_status)
        self._resolver = Resolver(engine, self.categories)
        self._reconciler = LifecycleReconciler(engine)
        self._base_paths = BasePathResolver(
            storefront_category=settings.storefront_category,
            options=options if options is not None else SettingsStorefrontOptions(settings),
        )
        self._router = Router(self.categories, self._base_paths, self._resolver, settings.home_url)

    @classmethod
    def from_settings(
        cls,
        settings: SeqSpineSettings | None = None,
        options: StorefrontOptions | None = None,
    ) -> SequenceService:
        """Build the engine from ``settings.database_url`` and wrap it."""
        settings = settings or get_settings()
        engine = create_seq_engine(
            settings.database_url,
            busy_timeout_s=settings.sqlite_busy_timeout_s,
        )
        return cls(engine, settings, options)

    def provision(self) -> list[str]:
        """Create absent tables.  Returns the names of those created."""
        return provision_schema(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    # -- allocation ------------------------------------------------------------

    def on_publish(self, event: PublishEvent) -> AllocationResult | None:
        return self._allocator.on_publish(event)

    def allocate(self, category: str, permanent_id: Any, is_eligible: bool = True) -> int | None:
        return self._allocator.allocate(category, permanent_id, is_eligible)

    def reserve(
        self, category: str, permanent_id: Any, is_eligible: bool = True
    ) -> AllocationResult | None:
        return self._allocator.reserve(category, permanent_id, is_eligible)

    # -- resolution ------------------------------------------------------------

    def resolve_by_sequence(self, category: str, sequence_id: Any) -> int | None:
        return self._resolver.resolve_by_sequence(category, sequence_id)

    def resolve_by_permanent_id(self, permanent_id: Any) -> tuple[int, str] | None:
        return self._resolver.resolve_by_permanent_id(permanent_id)

    def lookup(self, permanent_id: Any) -> Mapping | None:
        return self._resolver.lookup(permanent_id)

    # -- deletion --------------------------------------------------------------

    def on_delete(self, event: DeleteEvent | int) -> bool:
        permanent_id = event.permanent_id if isinstance(event, DeleteEvent) else event
        return self._reconciler.on_delete(permanent_id)

    # -- routing ---------------------------------------------------------------

    def base_path(self, category: str) -> str:
        return self._base_paths.base_path(category)

    def rewrite_rules(self) -> list[RewriteRule]:
        return self._router.rewrite_rules()

    def query_vars(self) -> list[str]:
        return self._router.query_vars()

    def match(self, path: str) -> tuple[str, str] | None:
        return self._router.match(path)

    def route(self, path: str) -> RouteMatch | None:
        return self._router.route(path)

    def rewrite_query(self, query_vars: dict[str, Any]) -> dict[str, Any]:
        return self._router.rewrite_query(query_vars)

    def permalink(self, permanent_id: Any, default: str | None = None) -> str | None:
        return self._router.permalink(permanent_id, default)

    # -- introspection ---------------------------------------------------------

    def counter_value(self, category: str) -> int:
        with self.engine.connect() as conn:
            return CounterRepository(conn).current(category)

    def counters(self) -> list[Counter]:
        """Counter of every configured category (0 when never used)."""
        with self.engine.connect() as conn:
            stored = {c.category: c.last_value for c in CounterRepository(conn).list_all()}
        return [Counter(category=name, last_value=stored.get(name, 0)) for name in self.categories]

    def initialize_counters(self) -> list[Counter]:
        """Create every configured counter at 0 if absent."""
        with writer(self.engine).begin() as conn:
            repo = CounterRepository(conn)
            return [Counter(category=name, last_value=repo.get_or_initialize(name)) for name in self.categories]

    def list_mappings(
        self, category: str, *, limit: int = 100, offset: int = 0
    ) -> tuple[list[Mapping], int]:
        with self.engine.connect() as conn:
            return MappingRepository(conn).list_for_category(category, limit=limit, offset=offset)


__all__ = ["SequenceService"]
