"""Sequencing: allocation, resolution, reconciliation, base paths and routing.

Modules
-------
allocator     Allocator (idempotent per-category allocation)
resolver      Resolver, parse_positive_int
reconciler    LifecycleReconciler
base_paths    BasePathResolver, SettingsStorefrontOptions
routing       Router (rewrite rules, query rewriting, permalinks)
service       SequenceService (the public facade)
"""

from seqspine.sequencing.allocator import Allocator
from seqspine.sequencing.base_paths import BasePathResolver, SettingsStorefrontOptions
from seqspine.sequencing.reconciler import LifecycleReconciler
from seqspine.sequencing.resolver import Resolver, parse_positive_int
from seqspine.sequencing.routing import Router, query_var
from seqspine.sequencing.service import SequenceService

__all__ = [
    "Allocator",
    "BasePathResolver",
    "SettingsStorefrontOptions",
    "LifecycleReconciler",
    "Resolver",
    "parse_positive_int",
    "Router",
    "query_var",
    "SequenceService",
]
