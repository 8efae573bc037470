"""
Tests for the FastAPI application factory and its endpoints.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from seqspine.api.app import create_app
from seqspine.core.repositories import MappingRepository

PREFIX = "/api/v1"


@pytest.fixture
def client(service):
    with TestClient(create_app(service=service)) as c:
        yield c


def _publish(client, permanent_id, category="product", **extra):
    body = {"permanent_id": permanent_id, "category": category, **extra}
    return client.post(f"{PREFIX}/events/publish", json=body)


class TestCreateApp:
    def test_returns_fastapi_instance(self, service):
        assert isinstance(create_app(service=service), FastAPI)

    def test_openapi_under_prefix(self, service):
        app = create_app(service=service)
        assert app.openapi_url == f"{PREFIX}/openapi.json"

    def test_routes_registered(self, service):
        paths = [r.path for r in create_app(service=service).routes]
        assert "/health" in paths
        assert f"{PREFIX}/events/publish" in paths
        assert f"{PREFIX}/categories/{{category}}/sequences/{{sequence_id}}" in paths
        assert f"{PREFIX}/records/{{permanent_id}}/permalink" in paths
        assert f"{PREFIX}/route" in paths

    def test_settings_on_state(self, service):
        app = create_app(service=service)
        assert app.state.settings is service.settings
        assert app.state.owns_service is False


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["service"] == "seq-spine"
        assert body["checks"]["database"]["status"] == "healthy"

    def test_ready(self, client):
        assert client.get("/health/ready").status_code == 200

    def test_live(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}


class TestEvents:
    def test_publish(self, client):
        resp = _publish(client, 501)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["sequence_id"] == 1
        assert data["created"] is True
        assert data["permalink"] == "/product/1/"

    def test_publish_is_idempotent(self, client):
        _publish(client, 501)
        data = _publish(client, 501).json()["data"]
        assert data["sequence_id"] == 1
        assert data["created"] is False

    def test_publish_child_skipped(self, client):
        data = _publish(client, 501, parent_id=9).json()["data"]
        assert data["skipped"] is True
        assert data["sequence_id"] is None

    def test_publish_negative_parent_skipped(self, client, service):
        resp = _publish(client, 501, parent_id=-1)
        assert resp.status_code == 200
        assert resp.json()["data"]["skipped"] is True
        assert service.counter_value("product") == 0

    def test_publish_dry_run(self, client, service):
        resp = client.post(f"{PREFIX}/events/publish?dry_run=true", json={"permanent_id": 501, "category": "product"})
        assert resp.json()["data"]["dry_run"] is True
        assert service.counter_value("product") == 0

    def test_publish_rejects_non_positive_id(self, client):
        resp = _publish(client, 0)
        assert resp.status_code == 422
        assert resp.headers["content-type"].startswith("application/problem+json")
        body = resp.json()
        assert body["status"] == 422
        assert any("permanent_id" in e["field"] for e in body["errors"])

    def test_publish_allocation_failure_is_conflict(self, client, engine):
        with engine.begin() as conn:
            MappingRepository(conn).insert_mapping(999, 1, "product")
        resp = _publish(client, 501)
        assert resp.status_code == 409
        assert resp.json()["detail"] == "ALLOCATION_FAILED"

    def test_delete(self, client):
        _publish(client, 501)
        resp = client.post(f"{PREFIX}/events/delete", json={"permanent_id": 501})
        assert resp.status_code == 200
        assert resp.json()["data"]["removed"] is True
        assert client.get(f"{PREFIX}/records/501").status_code == 404


class TestCategories:
    def test_list(self, client):
        _publish(client, 501)
        data = client.get(f"{PREFIX}/categories").json()["data"]
        assert [c["category"] for c in data] == ["product", "portfolio", "event"]
        assert data[0]["last_value"] == 1

    def test_resolve_sequence(self, client):
        _publish(client, 501)
        resp = client.get(f"{PREFIX}/categories/product/sequences/1")
        assert resp.status_code == 200
        assert resp.json()["data"]["permanent_id"] == 501

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5", "42"])
    def test_resolve_sequence_miss_is_404(self, client, raw):
        _publish(client, 501)
        resp = client.get(f"{PREFIX}/categories/product/sequences/{raw}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "NOT_FOUND"

    def test_mappings(self, client):
        for pid in (501, 502, 503):
            _publish(client, pid)
        body = client.get(f"{PREFIX}/categories/product/mappings", params={"limit": 2}).json()
        assert [m["sequence_id"] for m in body["data"]] == [1, 2]
        assert body["page"] == {"total": 3, "limit": 2, "offset": 0, "has_more": True}

    def test_mappings_unknown_category(self, client):
        assert client.get(f"{PREFIX}/categories/recipe/mappings").status_code == 404


class TestRecordsAndRoutes:
    def test_record(self, client):
        _publish(client, 601, category="event")
        data = client.get(f"{PREFIX}/records/601").json()["data"]
        assert data == {"permanent_id": 601, "sequence_id": 1, "category": "event", "permalink": "/event/1/"}

    def test_permalink(self, client):
        _publish(client, 501)
        assert client.get(f"{PREFIX}/records/501/permalink").json()["data"]["permalink"] == "/product/1/"

    def test_permalink_unmapped(self, client):
        assert client.get(f"{PREFIX}/records/501/permalink").status_code == 404

    def test_route(self, client):
        _publish(client, 501)
        resp = client.get(f"{PREFIX}/route", params={"path": "/product/1/"})
        assert resp.json()["data"] == {"category": "product", "sequence_id": 1, "permanent_id": 501}

    def test_route_miss(self, client):
        assert client.get(f"{PREFIX}/route", params={"path": "/product/1/"}).status_code == 404


class TestRequestId:
    def test_generated(self, client):
        assert client.get("/health/live").headers.get("X-Request-ID")

    def test_propagated(self, client):
        resp = client.get("/health/live", headers={"X-Request-ID": "req-123"})
        assert resp.headers["X-Request-ID"] == "req-123"
