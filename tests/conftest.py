"""Global test configuration and fixtures."""
import json
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from netlayer.core.http.models import HTTPRequest, RawResponse
from netlayer.core.http.transport import HTTPTransport


def make_response(status_code: int = 200, payload: Any = None, body: Optional[bytes] = None) -> RawResponse:
    """Build a RawResponse from a JSON-serializable payload or raw bytes."""
    if body is None:
        body = json.dumps(payload).encode() if payload is not None else b""
    return RawResponse(body=body, status_code=status_code, url="https://api.example.com/test")


@pytest.fixture
def api_request():
    """Fixture for a prepared GET request"""
    return HTTPRequest(
        method="GET",
        url="https://api.example.com/test",
        headers={"Accept": "application/json"}
    )


@pytest.fixture
def mock_transport():
    """Fixture for a transport double answering 200 with an empty JSON object"""
    transport = AsyncMock(spec=HTTPTransport)
    transport.exchange.return_value = make_response(200, {})
    return transport


@pytest.fixture
def response_factory():
    """Fixture exposing the RawResponse builder"""
    return make_response
