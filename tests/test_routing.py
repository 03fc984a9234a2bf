"""
Tests for request routing: preflight, health check and 404 handling.
"""

import pytest

from conftest import PROVIDER_NAMES


class TestPreflight:
    """OPTIONS requests are answered on every path."""

    def test_preflight_echoes_allowed_origin(self, client):
        response = client.options(
            "/auth/video/token",
            headers={"Origin": "https://sofia.example"}
        )

        assert response.status_code == 204
        assert response.content == b""
        pytest.assert_cors_headers(response.headers, "https://sofia.example")

    def test_preflight_on_unknown_path(self, client):
        response = client.options("/anything/at/all", headers={"Origin": "https://other.example"})

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "https://other.example"

    def test_preflight_falls_back_to_first_origin(self, client):
        response = client.options("/auth/music/token", headers={"Origin": "https://evil.example"})

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "https://sofia.example"

    def test_preflight_makes_no_upstream_call(self, client, upstream):
        client.options("/auth/social/token", headers={"Origin": "https://sofia.example"})

        assert upstream.requests == []


class TestHealth:
    """Health check endpoint."""

    def test_health_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert isinstance(data["timestamp"], int)
        assert data["timestamp"] > 1_600_000_000_000  # milliseconds, not seconds

    def test_health_has_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": "https://other.example"})

        assert response.headers["content-type"] == "application/json"
        pytest.assert_cors_headers(response.headers, "https://other.example")


class TestNotFound:
    """Unmatched routes return the JSON 404 envelope."""

    @pytest.mark.parametrize("method,path", [
        ("GET", "/nope"),
        ("GET", "/"),
        ("POST", "/health"),
        ("GET", "/auth/video/token"),
        ("PUT", "/auth/chat/token"),
        ("DELETE", "/health"),
        ("POST", "/auth/video/refresh"),
        ("GET", "/docs"),
        ("GET", "/openapi.json"),
    ])
    def test_unknown_route(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.parametrize("method", ["TRACE", "PROPFIND", "MKCOL"])
    @pytest.mark.parametrize("path", ["/nope", "/health", "/auth/video/token"])
    def test_unlisted_method(self, client, upstream, method, path):
        response = client.request(method, path, headers={"Origin": "https://sofia.example"})

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}
        pytest.assert_cors_headers(response.headers, "https://sofia.example")
        assert upstream.requests == []

    def test_unknown_provider(self, client, upstream):
        response = client.post(
            "/auth/myspace/token",
            json={"code": "abc", "redirect_uri": "https://sofia.example/callback"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}
        assert upstream.requests == []

    def test_not_found_has_cors_headers(self, client):
        response = client.get("/nope", headers={"Origin": "https://sofia.example"})

        pytest.assert_cors_headers(response.headers, "https://sofia.example")


class TestProviderRoutes:
    """Every provider has a token route."""

    @pytest.mark.parametrize("provider", PROVIDER_NAMES)
    def test_provider_route_exists(self, client, exchange_body, provider):
        response = client.post(f"/auth/{provider}/token", json=exchange_body(provider))

        assert response.status_code == 200

    def test_provider_path_is_case_sensitive(self, client, exchange_body):
        response = client.post("/auth/Video/token", json=exchange_body("video"))

        assert response.status_code == 404
