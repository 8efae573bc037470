"""Tests for the deletion reconciler."""

from __future__ import annotations

from seqspine.core.models import DeleteEvent
from seqspine.sequencing.reconciler import LifecycleReconciler


class TestOnDelete:
    def test_removes_mapping(self, service):
        service.allocate("product", 501)
        assert LifecycleReconciler(service.engine).on_delete(501) is True
        assert service.lookup(501) is None
        assert service.resolve_by_sequence("product", 1) is None

    def test_counter_untouched(self, service):
        service.allocate("product", 501)
        service.on_delete(501)
        assert service.counter_value("product") == 1

    def test_unmapped_record_is_noop(self, service):
        assert service.on_delete(12345) is False

    def test_malformed_id_is_noop(self, service):
        assert LifecycleReconciler(service.engine).on_delete("abc") is False

    def test_accepts_delete_event(self, service):
        service.allocate("event", 601)
        assert service.on_delete(DeleteEvent(permanent_id=601)) is True

    def test_other_mappings_survive(self, service):
        service.allocate("product", 501)
        service.allocate("product", 502)
        service.on_delete(501)
        assert service.resolve_by_sequence("product", 2) == 502

    def test_republish_after_delete_gets_new_id(self, service):
        service.allocate("product", 501)
        service.on_delete(501)
        assert service.allocate("product", 501) == 2
