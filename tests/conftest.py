"""Pytest configuration and fixtures for test suite."""
from typing import Callable, List
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from rest_mcp.config import Settings
from rest_mcp.request import RequestResult


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        APP_NAME="rest-mcp-test",
        LOG_LEVEL="DEBUG",
        REST_API_AUTH_TOKEN="test-token",
        REQUEST_TIMEOUT=5.0,
    )


@pytest.fixture
def sample_result():
    """Sample normalized response from the request executor."""
    return RequestResult(
        data={"ok": True},
        status=201,
        status_text="Created",
        headers={"x-id": "42"},
    )


@pytest.fixture
def mock_make_request(sample_result):
    """Patch the request executor used by the tool handlers."""
    with patch("rest_mcp.tools.base.make_request", new_callable=AsyncMock) as mock:
        mock.return_value = sample_result
        yield mock


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def mock_client_factory(recorded_requests) -> Callable[..., httpx.AsyncClient]:
    """
    Build an AsyncClient backed by httpx.MockTransport.

    The given responder receives each request and returns an httpx.Response;
    every request is appended to recorded_requests.
    """
    def factory(responder: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return responder(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
