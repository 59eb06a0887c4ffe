"""Tests for the /livez, /healthz, /readyz and /api/health endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from flask import Flask

from wasteflow.app.factory import _register_health


def _make_app(container=None, base_path="/api"):
    """Create a minimal Flask app with health routes registered."""
    app = Flask("test_health")
    if container is not None:
        app.extensions["container"] = container
    with patch("wasteflow.__version__", "0.0.0-test"):
        _register_health(app, base_path)
    return app


def _make_container(db_ok=True):
    container = MagicMock()
    if db_ok:
        container.db.fetch_value.return_value = 1
    else:
        container.db.fetch_value.side_effect = RuntimeError("connection refused")
    return container


class TestLivez:
    def test_always_alive(self):
        with _make_app().test_client() as client:
            resp = client.get("/livez")
        assert resp.status_code == 200
        assert resp.get_json() == {"alive": True, "version": "0.0.0-test"}


class TestHealthz:
    def test_without_container(self):
        with _make_app().test_client() as client:
            resp = client.get("/healthz")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "ok"
        assert "checks" not in body

    def test_database_connected(self):
        with _make_app(_make_container()).test_client() as client:
            resp = client.get("/healthz")
        assert resp.status_code == 200
        assert resp.get_json()["checks"] == {"database": "connected"}

    def test_database_down(self):
        with _make_app(_make_container(db_ok=False)).test_client() as client:
            resp = client.get("/healthz")
        assert resp.status_code == 503
        body = resp.get_json()
        assert body["status"] == "degraded"
        assert body["checks"]["database"] == "disconnected"


class TestReadyz:
    def test_no_container(self):
        with _make_app().test_client() as client:
            resp = client.get("/readyz")
        assert resp.status_code == 503
        assert resp.get_json()["reason"] == "Container not initialized"

    def test_database_down(self):
        with _make_app(_make_container(db_ok=False)).test_client() as client:
            resp = client.get("/readyz")
        assert resp.status_code == 503
        assert resp.get_json()["reason"] == "Database not connected"

    def test_ready(self):
        with _make_app(_make_container()).test_client() as client:
            resp = client.get("/readyz")
        assert resp.status_code == 200
        assert resp.get_json() == {"ready": True}


class TestApiHealth:
    def test_heartbeat(self):
        with _make_app().test_client() as client:
            resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "OK"
        assert body["message"] == "WasteFlow API is running"
        assert "timestamp" in body

    def test_custom_base_path(self):
        with _make_app(base_path="/v2").test_client() as client:
            assert client.get("/v2/health").status_code == 200
            assert client.get("/api/health").status_code == 404
