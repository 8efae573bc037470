"""Tests for sequence allocation."""

from __future__ import annotations

import pytest

from seqspine.core.errors import AllocationError, ValidationError
from seqspine.core.models import PublishEvent
from seqspine.core.repositories import MappingRepository
from seqspine.sequencing.allocator import Allocator


@pytest.fixture
def allocator(engine) -> Allocator:
    return Allocator(engine, ["product", "portfolio", "event"])


class TestAllocate:
    def test_first_id_is_one(self, allocator):
        assert allocator.allocate("product", 501) == 1

    def test_consecutive_ids(self, allocator):
        ids = [allocator.allocate("product", pid) for pid in range(501, 506)]
        assert ids == [1, 2, 3, 4, 5]

    def test_categories_are_independent(self, allocator):
        assert allocator.allocate("product", 501) == 1
        assert allocator.allocate("event", 601) == 1
        assert allocator.allocate("product", 502) == 2
        assert allocator.allocate("event", 602) == 2

    def test_idempotent_per_record(self, allocator, service):
        assert allocator.allocate("product", 501) == 1
        assert allocator.allocate("product", 501) == 1
        assert allocator.allocate("product", 501) == 1
        assert service.counter_value("product") == 1

    def test_string_permanent_id(self, allocator):
        assert allocator.allocate("product", "501") == 1
        assert allocator.allocate("product", 501) == 1

    def test_existing_mapping_wins_over_event_category(self, allocator):
        assert allocator.allocate("product", 501) == 1
        result = allocator.reserve("event", 501)
        assert result.category == "product"
        assert result.sequence_id == 1
        assert result.created is False


class TestIneligible:
    def test_not_eligible_returns_none(self, allocator, service):
        assert allocator.allocate("product", 501, is_eligible=False) is None
        assert service.counter_value("product") == 0

    def test_unknown_category_returns_none(self, allocator):
        assert allocator.allocate("recipe", 501) is None

    @pytest.mark.parametrize("bad", [0, -5, "abc", "1.5", None, True])
    def test_malformed_permanent_id_raises(self, allocator, bad):
        with pytest.raises(ValidationError):
            allocator.allocate("product", bad)


class TestReserve:
    def test_reports_created(self, allocator):
        first = allocator.reserve("product", 501)
        again = allocator.reserve("product", 501)
        assert first.created is True
        assert again.created is False
        assert first.sequence_id == again.sequence_id == 1


class TestOnPublish:
    def test_published_top_level_record(self, allocator):
        result = allocator.on_publish(PublishEvent(permanent_id=501, category="product"))
        assert result.sequence_id == 1

    def test_child_record_skipped(self, allocator):
        assert allocator.on_publish(PublishEvent(permanent_id=501, category="product", parent_id=3)) is None

    def test_draft_skipped(self, allocator):
        assert allocator.on_publish(PublishEvent(permanent_id=501, category="product", status="draft")) is None

    def test_custom_publish_status(self, engine):
        allocator = Allocator(engine, ["product"], publish_status="live")
        assert allocator.on_publish(PublishEvent(permanent_id=501, category="product", status="publish")) is None
        assert allocator.on_publish(PublishEvent(permanent_id=501, category="product", status="live")) is not None


class TestGaps:
    def test_deleted_ids_are_not_reused(self, allocator, service):
        allocator.allocate("product", 501)
        allocator.allocate("product", 502)
        service.on_delete(502)
        assert allocator.allocate("product", 503) == 3

    def test_failed_insert_leaves_gap(self, allocator, service, engine):
        # A stray mapping occupying the next product id makes the insert collide
        with engine.begin() as conn:
            MappingRepository(conn).insert_mapping(999, 1, "product")

        with pytest.raises(AllocationError) as exc_info:
            allocator.allocate("product", 501)
        assert exc_info.value.context.sequence_id == 1
        assert service.counter_value("product") == 1
        assert service.lookup(501) is None

        assert allocator.allocate("product", 501) == 2
        assert service.counter_value("product") == 2


class TestLifecycleScenarios:
    def test_republish_keeps_id(self, service):
        assert service.allocate("product", 501) == 1
        assert service.allocate("product", 501) == 1
        assert service.counter_value("product") == 1

    def test_delete_leaves_gap(self, service):
        service.allocate("product", 501)
        assert service.allocate("product", 502) == 2
        assert service.resolve_by_sequence("product", 2) == 502

        service.on_delete(501)
        assert service.resolve_by_sequence("product", 1) is None
        assert service.counter_value("product") == 2
        assert service.allocate("product", 503) == 3
