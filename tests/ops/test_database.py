"""Tests for database operations."""

from __future__ import annotations

import pytest

from seqspine.core.orm import COUNTERS_TABLE, MAPPINGS_TABLE
from seqspine.core.settings import SeqSpineSettings
from seqspine.ops.context import OperationContext
from seqspine.ops.database import check_database_health, get_table_counts, initialize_database
from seqspine.ops.requests import DatabaseInitRequest
from seqspine.sequencing.service import SequenceService


@pytest.fixture
def fresh(db_url):
    """Service on an unprovisioned database."""
    svc = SequenceService.from_settings(SeqSpineSettings(database_url=db_url))
    yield svc
    svc.dispose()


class TestInitializeDatabase:
    def test_creates_tables(self, fresh):
        result = initialize_database(OperationContext(service=fresh))
        assert result.success
        assert result.data.tables_created == [COUNTERS_TABLE, MAPPINGS_TABLE]

    def test_second_run_creates_nothing(self, fresh):
        ctx = OperationContext(service=fresh)
        initialize_database(ctx)
        assert initialize_database(ctx).data.tables_created == []

    def test_dry_run_lists_missing(self, fresh):
        ctx = OperationContext(service=fresh, dry_run=True)
        result = initialize_database(ctx)
        assert result.data.dry_run is True
        assert result.data.tables_created == [COUNTERS_TABLE, MAPPINGS_TABLE]
        assert get_table_counts(ctx).data[0].count == -1

    def test_seed_counters(self, fresh):
        result = initialize_database(OperationContext(service=fresh), DatabaseInitRequest(seed_counters=True))
        assert result.data.counters_seeded == ["product", "portfolio", "event"]
        assert [c.last_value for c in fresh.counters()] == [0, 0, 0]

    def test_seed_keeps_existing_values(self, service):
        service.allocate("product", 501)
        initialize_database(OperationContext(service=service), DatabaseInitRequest(seed_counters=True))
        assert service.counter_value("product") == 1


class TestTableCounts:
    def test_counts(self, service):
        service.allocate("product", 501)
        result = get_table_counts(OperationContext(service=service))
        counts = {t.table: t.count for t in result.data}
        assert counts == {COUNTERS_TABLE: 1, MAPPINGS_TABLE: 1}


class TestDatabaseHealth:
    def test_connected(self, service):
        result = check_database_health(OperationContext(service=service))
        assert result.data.connected is True
        assert result.data.backend == "sqlite"
        assert result.data.table_count == 2

    def test_unreachable(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing' / 'seq.db'}"
        svc = SequenceService.from_settings(SeqSpineSettings(database_url=url))
        try:
            result = check_database_health(OperationContext(service=svc))
        finally:
            svc.dispose()
        assert result.success
        assert result.data.connected is False
        assert result.warnings
