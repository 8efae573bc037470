"""
Shared pytest fixtures for seq-spine tests.

This module provides:
- A file-backed SQLite database per test (``tmp_path``)
- Provisioned ``engine`` and ``service`` fixtures
- Settings cache isolation

Usage:
    Fixtures are auto-discovered by pytest::

        def test_allocates(service):
            assert service.allocate("product", 501) == 1
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from seqspine.core.logging import configure_logging
from seqspine.core.orm import create_seq_engine
from seqspine.core.schema import provision
from seqspine.core.settings import SeqSpineSettings, clear_settings_cache
from seqspine.sequencing.service import SequenceService


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Process-wide state
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging() -> None:
    configure_logging(level="WARNING", json_format=False)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and any SEQSPINE_* variables from the environment."""
    for key in list(os.environ):
        if key.startswith("SEQSPINE_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'seq.db'}"


@pytest.fixture
def settings(db_url: str) -> SeqSpineSettings:
    return SeqSpineSettings(
        database_url=db_url,
        categories=["product", "portfolio", "event"],
        sqlite_busy_timeout_s=10.0,
    )


@pytest.fixture
def engine(db_url: str) -> Iterator[Engine]:
    """Provisioned engine on a fresh database file."""
    eng = create_seq_engine(db_url, busy_timeout_s=10.0)
    provision(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def service(settings: SeqSpineSettings) -> Iterator[SequenceService]:
    """Provisioned service with the default three categories."""
    svc = SequenceService.from_settings(settings)
    svc.provision()
    yield svc
    svc.dispose()
