"""
Routing - public ``/<base_path>/<sequence_id>/`` URLs in both directions.

Architecture:
    ::

        incoming path ──► match() ──► (category, "12") ──► Resolver ──► RouteMatch
        query vars {"product_seq_id": "12"} ──► rewrite_query()
                 ──► {"post_type": "product", "p": 502}
        permanent_id ──► Resolver (reverse) ──► permalink()
                 ──► "<home_url>/<base_path>/<sequence_id>/"

    A miss in any direction leaves the input untouched so the host falls
    back to its default routing.

Tags:
    routing, rewrite, permalink, seq-spine
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from seqspine.core.models import RewriteRule, RouteMatch
from seqspine.sequencing.base_paths import BasePathResolver
from seqspine.sequencing.resolver import Resolver, parse_positive_int


def query_var(category: str) -> str:
    """Name of the routing query variable of *category*."""
    return f"{category}_seq_id"


class Router:
    """Rewrite rules, path matching, query rewriting and permalinks."""

    def __init__(
        self,
        categories: Sequence[str],
        base_paths: BasePathResolver,
        resolver: Resolver,
        home_url: str = "",
    ) -> None:
        self._categories = list(categories)
        self._base_paths = base_paths
        self._resolver = resolver
        self._home_url = home_url.rstrip("/")

    def rewrite_rules(self) -> list[RewriteRule]:
        rules = []
        for category in self._categories:
            base = self._base_paths.base_path(category)
            rules.append(
                RewriteRule(
                    category=category,
                    base_path=base,
                    pattern=rf"^{re.escape(base)}/([0-9]+)/?$",
                    query_var=query_var(category),
                )
            )
        return rules

    def query_vars(self) -> list[str]:
        return [query_var(category) for category in self._categories]

    def match(self, path: str) -> tuple[str, str] | None:
        """``(category, raw sequence id)`` for a public path, or ``None``.

        The leading slash is optional, as is the trailing one.
        """
        relative = path.lstrip("/")
        for rule in self.rewrite_rules():
            raw = rule.match(relative)
            if raw is not None:
                return rule.category, raw
        return None

    def route(self, path: str) -> RouteMatch | None:
        matched = self.match(path)
        if matched is None:
            return None
        category, raw = matched
        permanent_id = self._resolver.resolve_by_sequence(category, raw)
        if permanent_id is None:
            return None
        return RouteMatch(
            category=category,
            sequence_id=parse_positive_int(raw),
            permanent_id=permanent_id,
        )

    def rewrite_query(self, query_vars: dict[str, Any]) -> dict[str, Any]:
        """Point a content query at the record named by a ``<category>_seq_id`` var.

        On a hit, sets ``post_type`` and ``p`` and removes the sequence
        variable so it is not interpreted twice.  On a miss the query is
        returned unchanged.
        """
        rewritten = dict(query_vars)
        for category in self._categories:
            name = query_var(category)
            raw = rewritten.get(name)
            if not raw:
                continue
            permanent_id = self._resolver.resolve_by_sequence(category, raw)
            if permanent_id is None:
                continue
            rewritten["post_type"] = category
            rewritten["p"] = permanent_id
            rewritten.pop(name)
            break
        return rewritten

    def permalink(self, permanent_id: Any, default: str | None = None) -> str | None:
        """Public URL of a mapped record, or *default* unchanged."""
        resolved = self._resolver.resolve_by_permanent_id(permanent_id)
        if resolved is None:
            return default
        sequence_id, category = resolved
        base = self._base_paths.base_path(category)
        return f"{self._home_url}/{base}/{sequence_id}/"


__all__ = ["query_var", "Router"]
