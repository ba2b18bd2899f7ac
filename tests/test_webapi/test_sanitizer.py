"""Tests for request input sanitization."""

import json

import pytest
from fastapi import Body, FastAPI, Request
from fastapi.testclient import TestClient

from gov_watchdog.webapi.sanitizer import (
    InputSanitizerMiddleware,
    max_length_for,
    sanitize_json_body,
    sanitize_params,
    sanitize_query_string,
    sanitize_value,
)


class TestSanitizeValue:
    """Test single-value sanitization."""

    def test_strips_markup_and_quote_characters(self):
        assert sanitize_value("state", "<script>'CA\"</script>") == "scriptCA/script"

    @pytest.mark.parametrize(
        "name, cap",
        [("username", 50), ("email", 100), ("password", 128), ("search", 100), ("keyword", 100), ("title", 500)],
    )
    def test_field_length_caps(self, name, cap):
        """Test identity-like fields get shorter caps than general fields."""
        assert max_length_for(name) == cap
        assert len(sanitize_value(name, "x" * 1000)) == cap

    def test_default_cap_is_configurable(self, monkeypatch):
        """Test the general cap comes from settings."""
        from gov_watchdog.config.settings import get_settings

        monkeypatch.setenv("SANITIZE_MAX_LENGTH", "20")
        get_settings.cache_clear()

        assert len(sanitize_value("anything", "y" * 50)) == 20
        assert len(sanitize_value("email", "y" * 150)) == 100

    def test_characters_removed_before_truncation(self):
        """Test stripped characters don't count toward the cap."""
        assert sanitize_value("username", "<" * 10 + "a" * 60) == "a" * 50

    def test_non_strings_pass_through(self):
        assert sanitize_value("limit", 10) == 10
        assert sanitize_value("tags", ["<a>"]) == ["<a>"]
        assert sanitize_value("flag", None) is None


class TestSanitizeMappings:
    """Test mapping, query string and body sanitization."""

    def test_sanitize_params_mutates_in_place(self):
        params = {"state": "<CA>", "limit": 5}

        result = sanitize_params(params)

        assert result is params
        assert params == {"state": "CA", "limit": 5}

    def test_query_string_keeps_order_and_repeats(self):
        raw = b"state=%3CCA%3E&keyword=o%27brien&state=TX&empty="

        assert sanitize_query_string(raw) == b"state=CA&keyword=obrien&state=TX&empty="

    def test_empty_query_string(self):
        assert sanitize_query_string(b"") == b""

    def test_json_object_body(self):
        body = json.dumps({"source": "<all>", "count": 3}).encode()

        assert json.loads(sanitize_json_body(body)) == {"source": "all", "count": 3}

    @pytest.mark.parametrize("body", [b"not json", b'["<a>"]', b""])
    def test_other_bodies_pass_through(self, body):
        assert sanitize_json_body(body) == body


class TestInputSanitizerMiddleware:
    """Test the middleware rewrites requests before routing."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(InputSanitizerMiddleware)

        @app.get("/echo")
        async def echo_query(request: Request):
            return {key: request.query_params.getlist(key) for key in request.query_params}

        @app.post("/echo")
        async def echo_body(payload: dict = Body(...)):
            return payload

        return TestClient(app)

    def test_query_parameters_are_sanitized(self, client):
        response = client.get("/echo", params={"state": "<CA>", "keyword": "x" * 150})

        assert response.status_code == 200
        assert response.json() == {"state": ["CA"], "keyword": ["x" * 100]}

    def test_json_body_is_sanitized(self, client):
        response = client.post("/echo", json={"username": "'" + "u" * 80, "note": "<b>hi</b>"})

        assert response.status_code == 200
        assert response.json() == {"username": "u" * 50, "note": "bhi/b"}

    def test_non_json_body_is_untouched(self, client):
        response = client.post(
            "/echo", content=b"<raw>", headers={"content-type": "text/plain"}
        )

        # Reaches validation unchanged, which rejects the non-object payload
        assert response.status_code == 422
