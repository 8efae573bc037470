"""Tests for rewrite rules, path matching, query rewriting and permalinks."""

from __future__ import annotations

import pytest

from seqspine.core.models import RouteMatch
from seqspine.core.settings import SeqSpineSettings
from seqspine.sequencing.routing import query_var
from seqspine.sequencing.service import SequenceService


@pytest.fixture
def shop(db_url):
    """Service with a storefront base of ``shop`` and an absolute home URL."""
    settings = SeqSpineSettings(
        database_url=db_url,
        storefront_base="shop",
        home_url="https://example.test/",
    )
    svc = SequenceService.from_settings(settings)
    svc.provision()
    svc.allocate("product", 501)
    svc.allocate("product", 502)
    svc.allocate("event", 601)
    yield svc
    svc.dispose()


class TestRewriteRules:
    def test_one_rule_per_category(self, service):
        rules = service.rewrite_rules()
        assert [r.category for r in rules] == ["product", "portfolio", "event"]
        assert rules[0].pattern == r"^product/([0-9]+)/?$"
        assert rules[0].query_var == "product_seq_id"

    def test_rules_follow_base_path(self, shop):
        assert shop.rewrite_rules()[0].base_path == "shop"

    def test_query_vars(self, service):
        assert service.query_vars() == ["product_seq_id", "portfolio_seq_id", "event_seq_id"]
        assert query_var("event") == "event_seq_id"


class TestMatch:
    @pytest.mark.parametrize("path", ["/shop/12/", "shop/12", "/shop/12", "shop/12/"])
    def test_slashes_optional(self, shop, path):
        assert shop.match(path) == ("product", "12")

    @pytest.mark.parametrize("path", ["/product/12/", "/shop/abc/", "/shop/12/extra", "/shop/", "/shop/-1/"])
    def test_no_match(self, shop, path):
        assert shop.match(path) is None

    def test_route_hit(self, shop):
        assert shop.route("/shop/2/") == RouteMatch(category="product", sequence_id=2, permanent_id=502)
        assert shop.route("/event/1/") == RouteMatch(category="event", sequence_id=1, permanent_id=601)

    def test_route_unmapped_id(self, shop):
        assert shop.route("/shop/99/") is None


class TestRewriteQuery:
    def test_hit(self, shop):
        rewritten = shop.rewrite_query({"product_seq_id": "2", "page": "1"})
        assert rewritten == {"post_type": "product", "p": 502, "page": "1"}

    def test_miss_is_unchanged(self, shop):
        query = {"product_seq_id": "99"}
        assert shop.rewrite_query(query) == query

    def test_malformed_is_unchanged(self, shop):
        query = {"event_seq_id": "1.5"}
        assert shop.rewrite_query(query) == query

    def test_no_sequence_var(self, shop):
        assert shop.rewrite_query({"s": "shoes"}) == {"s": "shoes"}

    def test_input_not_mutated(self, shop):
        query = {"event_seq_id": "1"}
        shop.rewrite_query(query)
        assert query == {"event_seq_id": "1"}


class TestPermalink:
    def test_mapped_record(self, shop):
        assert shop.permalink(502) == "https://example.test/shop/2/"
        assert shop.permalink(601) == "https://example.test/event/1/"

    def test_relative_without_home_url(self, service):
        service.allocate("portfolio", 701)
        assert service.permalink(701) == "/portfolio/1/"

    def test_unmapped_returns_default(self, shop):
        assert shop.permalink(999) is None
        assert shop.permalink(999, "https://example.test/?p=999") == "https://example.test/?p=999"

    def test_permalink_routes_back(self, shop):
        link = shop.permalink(501)
        path = link.removeprefix("https://example.test")
        assert shop.route(path).permanent_id == 501
