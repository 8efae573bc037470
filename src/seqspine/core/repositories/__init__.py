"""Repositories for the seq-spine tables.

Tags:
    seq-spine, repository

Doc-Types:
    api-reference
"""

from seqspine.core.repositories.counters import CounterRepository
from seqspine.core.repositories.mappings import MappingRepository

__all__ = ["CounterRepository", "MappingRepository"]
