"""
Pytest configuration and shared fixtures for token proxy tests.

This module provides the proxy settings, a mocked upstream provider built on
httpx.MockTransport, and a TestClient wired to both.
"""

import pytest
from typing import Any, Dict, List
from urllib.parse import parse_qs
from unittest.mock import patch

import httpx
from fastapi.testclient import TestClient

from src.shared.oauth_models import ProviderCredentials
from src.token_proxy.config import ProxySettings
from src.token_proxy.main import create_app


PROVIDER_NAMES = ["video", "chat", "music", "social", "streaming"]
BODY_CREDENTIAL_PROVIDERS = ["video", "chat", "streaming"]
BASIC_CREDENTIAL_PROVIDERS = ["music", "social"]

ALLOWED_ORIGINS = "https://sofia.example,https://other.example"


class UpstreamProvider:
    """
    Mock identity provider token endpoint.

    Records every outbound request and answers with a configurable status
    and JSON body, or raises a configured exception.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"access_token": "abc", "token_type": "bearer"}
        self.raw_body = None
        self.error = None

    def respond(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]

    def last_form(self) -> Dict[str, str]:
        """Decoded form body of the last upstream request."""
        parsed = parse_qs(self.last_request.content.decode(), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def provider_credentials() -> Dict[str, ProviderCredentials]:
    """Distinct credentials for every provider."""
    return {
        name: ProviderCredentials(client_id=f"{name}-client-id", client_secret=f"{name}-client-secret")
        for name in PROVIDER_NAMES
    }


@pytest.fixture
def settings(provider_credentials) -> ProxySettings:
    return ProxySettings(
        credentials=provider_credentials,
        allowed_origins=ALLOWED_ORIGINS,
    )


@pytest.fixture
def upstream() -> UpstreamProvider:
    return UpstreamProvider()


@pytest.fixture
def client(settings, upstream) -> TestClient:
    """Test client for the proxy with upstream calls routed to the mock."""
    app = create_app(settings, transport=httpx.MockTransport(upstream.handler))
    return TestClient(app)


@pytest.fixture
def exchange_body():
    """Factory for a valid exchange request body for a provider."""
    def build(provider: str) -> Dict[str, str]:
        body = {
            "code": "test_authorization_code",
            "redirect_uri": "https://sofia.example/callback",
        }
        if provider == "social":
            body["code_verifier"] = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        return body
    return build


@pytest.fixture(autouse=True)
def disable_logging():
    """Disable logging during tests to reduce noise.

    OAuthLogger writes its colored output with print(), so print is patched
    as well. Tests that inspect output patch it again themselves.
    """
    import logging
    logging.disable(logging.CRITICAL)
    with patch('builtins.print'):
        yield
    logging.disable(logging.NOTSET)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "routing" in item.nodeid or "token_exchange" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


def assert_cors_headers(headers, expected_origin: str):
    """Assert the full CORS header set is present."""
    assert headers["access-control-allow-origin"] == expected_origin
    assert headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert headers["access-control-allow-headers"] == "Content-Type"
    assert headers["access-control-max-age"] == "86400"


pytest.assert_cors_headers = assert_cors_headers
