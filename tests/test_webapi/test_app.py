"""Tests for FastAPI application assembly and lifespan."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from gov_watchdog.config.settings import get_settings


class TestFastAPIApp:
    """Test the FastAPI application wiring."""

    @pytest.fixture
    def app(self, isolated_db):
        """Create a fresh app against the isolated database."""
        from gov_watchdog.webapi.app import create_app

        return create_app()

    @pytest.fixture
    def client(self, app):
        with TestClient(app) as client:
            yield client

    def test_routes_are_mounted_under_api(self, app):
        paths = {route.path for route in app.routes}

        assert {
            "/api/legislators",
            "/api/bills",
            "/api/spending",
            "/api/lobbying",
            "/api/summary",
            "/api/health",
            "/api/admin/reseed",
        } <= paths

    def test_server_import_target_resolves(self):
        """Test the app string handed to uvicorn points at this package's app."""
        from uvicorn.importer import import_from_string

        from gov_watchdog.webapi import app as app_module

        assert import_from_string("gov_watchdog.webapi.app:app") is app_module.app

    def test_openapi_schema(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        assert response.json()["info"]["title"] == "Government Watchdog API"

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/bills",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_write_methods_are_not_routed(self, client):
        response = client.delete("/api/bills")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    def test_startup_does_not_seed_when_disabled(self, client):
        assert client.get("/api/legislators").json() == []


class TestLifespan:
    """Test application startup and shutdown."""

    def test_startup_seeds_all_collections(self, isolated_db, monkeypatch):
        """Test the store is populated on startup when seeding is enabled."""
        from gov_watchdog.webapi.app import create_app

        monkeypatch.setenv("SEED_ON_STARTUP", "true")
        get_settings.cache_clear()

        with TestClient(create_app()) as client:
            summary = client.get("/api/summary").json()
            bills = client.get("/api/bills", params={"bill_type": "hr", "congress": "119", "keyword": "tax"})

        assert set(summary) == {"total_members", "active_bills", "total_spending"}
        assert [b["bill_id"] for b in bills.json()] == ["hr4-119"]

    def test_startup_survives_seed_failure(self, isolated_db, monkeypatch):
        """Test a failed startup seed is logged and the API still serves."""
        from gov_watchdog.seed.loader import ReseedResult
        from gov_watchdog.webapi.app import create_app

        monkeypatch.setenv("SEED_ON_STARTUP", "true")
        get_settings.cache_clear()

        with patch(
            "gov_watchdog.webapi.app.reseed",
            return_value=ReseedResult(success=False, message="Reseed failed"),
        ) as mock_reseed:
            with TestClient(create_app()) as client:
                response = client.get("/api/health")

        mock_reseed.assert_called_once()
        assert response.status_code == 200

    def test_shutdown_disposes_engine(self, isolated_db):
        from gov_watchdog.webapi.app import create_app

        with patch("gov_watchdog.webapi.app.dispose_engine") as mock_dispose:
            with TestClient(create_app()):
                mock_dispose.assert_not_called()

        mock_dispose.assert_called_once()
