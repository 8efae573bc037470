"""Tests for the sequence operations layer."""

from __future__ import annotations

import pytest

from seqspine.core.errors import DatabaseConnectionError
from seqspine.core.repositories import MappingRepository
from seqspine.ops.context import OperationContext
from seqspine.ops.requests import (
    DeleteRecordRequest,
    ListMappingsRequest,
    LookupRecordRequest,
    PermalinkRequest,
    PublishRecordRequest,
    ResolvePathRequest,
    ResolveSequenceRequest,
)
from seqspine.ops.result import (
    ALLOCATION_FAILED,
    NOT_FOUND,
    UNAVAILABLE,
    VALIDATION_FAILED,
)
from seqspine.ops.sequences import (
    delete_record,
    get_permalink,
    list_counters,
    list_mappings,
    lookup_record,
    publish_record,
    resolve_path,
    resolve_sequence,
)


@pytest.fixture
def ctx(service) -> OperationContext:
    return OperationContext(service=service)


def _publish(ctx, permanent_id, category="product", **kwargs):
    return publish_record(ctx, PublishRecordRequest(permanent_id=permanent_id, category=category, **kwargs))


class TestPublishRecord:
    def test_allocates(self, ctx):
        result = _publish(ctx, 501)
        assert result.success
        assert result.data.sequence_id == 1
        assert result.data.created is True
        assert result.data.permalink == "/product/1/"

    def test_republish_returns_existing(self, ctx):
        _publish(ctx, 501)
        result = _publish(ctx, 501)
        assert result.data.sequence_id == 1
        assert result.data.created is False

    def test_ineligible_is_skipped(self, ctx):
        result = _publish(ctx, 501, status="draft")
        assert result.success
        assert result.data.skipped is True
        assert result.data.sequence_id is None

    def test_unknown_category_is_skipped(self, ctx):
        assert _publish(ctx, 501, category="recipe").data.skipped is True

    @pytest.mark.parametrize("bad", [0, "abc"])
    def test_ineligible_wins_over_invalid_id(self, ctx, bad):
        result = _publish(ctx, bad, status="draft")
        assert result.success
        assert result.data.skipped is True

    @pytest.mark.parametrize("bad", [0, -1, "abc"])
    def test_invalid_permanent_id(self, ctx, bad):
        result = _publish(ctx, bad)
        assert not result.success
        assert result.error.code == VALIDATION_FAILED

    def test_dry_run_does_not_allocate(self, ctx, service):
        ctx.dry_run = True
        result = _publish(ctx, 501)
        assert result.data.dry_run is True
        assert result.data.sequence_id is None
        assert service.counter_value("product") == 0

    def test_dry_run_reports_existing(self, ctx):
        _publish(ctx, 501)
        ctx.dry_run = True
        result = _publish(ctx, 501)
        assert result.data.sequence_id == 1
        assert result.data.permalink == "/product/1/"

    def test_allocation_failure(self, ctx, engine):
        with engine.begin() as conn:
            MappingRepository(conn).insert_mapping(999, 1, "product")
        result = _publish(ctx, 501)
        assert not result.success
        assert result.error.code == ALLOCATION_FAILED
        assert result.error.details["sequence_id"] == 1

    def test_unavailable_storage(self, ctx, service, monkeypatch):
        def boom(event):
            raise DatabaseConnectionError("database is locked")

        monkeypatch.setattr(service, "on_publish", boom)
        result = _publish(ctx, 501)
        assert result.error.code == UNAVAILABLE
        assert result.error.retryable is True


class TestDeleteRecord:
    def test_removes(self, ctx):
        _publish(ctx, 501)
        result = delete_record(ctx, DeleteRecordRequest(permanent_id=501))
        assert result.data.removed is True

    def test_repeat_is_noop(self, ctx):
        result = delete_record(ctx, DeleteRecordRequest(permanent_id=501))
        assert result.success
        assert result.data.removed is False

    def test_dry_run_keeps_mapping(self, ctx, service):
        _publish(ctx, 501)
        ctx.dry_run = True
        result = delete_record(ctx, DeleteRecordRequest(permanent_id=501))
        assert result.data.removed is True
        assert result.data.dry_run is True
        assert service.lookup(501) is not None

    def test_invalid_id(self, ctx):
        result = delete_record(ctx, DeleteRecordRequest(permanent_id=0))
        assert result.error.code == VALIDATION_FAILED


class TestLookups:
    def test_resolve_sequence(self, ctx):
        _publish(ctx, 501)
        result = resolve_sequence(ctx, ResolveSequenceRequest(category="product", sequence_id="1"))
        assert result.data.permanent_id == 501
        assert result.data.sequence_id == 1

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5", "7"])
    def test_resolve_sequence_miss(self, ctx, raw):
        _publish(ctx, 501)
        result = resolve_sequence(ctx, ResolveSequenceRequest(category="product", sequence_id=raw))
        assert result.error.code == NOT_FOUND

    def test_lookup_record(self, ctx):
        _publish(ctx, 601, category="event")
        result = lookup_record(ctx, LookupRecordRequest(permanent_id="601"))
        assert (result.data.sequence_id, result.data.category) == (1, "event")

    def test_lookup_record_miss(self, ctx):
        assert lookup_record(ctx, LookupRecordRequest(permanent_id=1)).error.code == NOT_FOUND

    def test_resolve_path(self, ctx):
        _publish(ctx, 501)
        result = resolve_path(ctx, ResolvePathRequest(path="/product/1/"))
        assert result.data.permanent_id == 501

    def test_resolve_path_miss(self, ctx):
        assert resolve_path(ctx, ResolvePathRequest(path="/about/")).error.code == NOT_FOUND

    def test_get_permalink(self, ctx):
        _publish(ctx, 501)
        result = get_permalink(ctx, PermalinkRequest(permanent_id=501))
        assert result.data.permalink == "/product/1/"

    def test_get_permalink_miss(self, ctx):
        assert get_permalink(ctx, PermalinkRequest(permanent_id=501)).error.code == NOT_FOUND


class TestListings:
    def test_list_counters(self, ctx):
        _publish(ctx, 501)
        _publish(ctx, 502)
        result = list_counters(ctx)
        by_category = {c.category: c for c in result.data}
        assert by_category["product"].last_value == 2
        assert by_category["event"].last_value == 0
        assert by_category["product"].query_var == "product_seq_id"

    def test_list_mappings_paged(self, ctx):
        for pid in range(501, 506):
            _publish(ctx, pid)
        result = list_mappings(ctx, ListMappingsRequest(category="product", limit=2, offset=2))
        assert [m.sequence_id for m in result.data] == [3, 4]
        assert result.total == 5
        assert result.has_more is True
        assert result.to_dict()["data"][0]["permalink"] == "/product/3/"

    def test_list_mappings_unknown_category(self, ctx):
        result = list_mappings(ctx, ListMappingsRequest(category="recipe"))
        assert result.error.code == NOT_FOUND
