"""seq-spine core: settings, logging, errors, models and storage.

Modules
-------
settings      SeqSpineSettings (pydantic-settings), get_settings
logging       structlog configuration
errors        SeqSpineError hierarchy
models        Mapping, Counter, events, AllocationResult, RouteMatch
protocols     CounterStore, MappingStore, StorefrontOptions
orm           SQLAlchemy tables and engine factory
schema        Idempotent provisioning
repositories  CounterRepository, MappingRepository
"""

from seqspine.core.errors import (
    AllocationError,
    DatabaseError,
    DuplicateMappingError,
    SeqSpineError,
    ValidationError,
)
from seqspine.core.models import (
    AllocationResult,
    Counter,
    DeleteEvent,
    Mapping,
    PublishEvent,
    RewriteRule,
    RouteMatch,
)
from seqspine.core.settings import SeqSpineSettings, get_settings

__all__ = [
    "AllocationError",
    "DatabaseError",
    "DuplicateMappingError",
    "SeqSpineError",
    "ValidationError",
    "AllocationResult",
    "Counter",
    "DeleteEvent",
    "Mapping",
    "PublishEvent",
    "RewriteRule",
    "RouteMatch",
    "SeqSpineSettings",
    "get_settings",
]
