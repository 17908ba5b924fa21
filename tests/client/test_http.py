"""Unit tests for the client HTTP layer.

1. Helper functions:
   - build_api_error: mapping error responses to exception types
   - backoff_delay: exponential backoff with a cap

2. HTTPClient / AsyncHTTPClient:
   - JSON decoding and empty bodies
   - Transport failures mapped to ConnectionError / TimeoutError
   - Retry on 502/503/504 and transport failures when enabled

Note: These tests use httpx.MockTransport to avoid real network calls.
"""

import json

import httpx
import pytest

from client import _http
from client._http import (
    DEFAULT_RETRY_BACKOFF_BASE,
    DEFAULT_RETRY_BACKOFF_MAX,
    AsyncHTTPClient,
    HTTPClient,
    backoff_delay,
    build_api_error,
)
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(_http, "backoff_delay", lambda attempt: 0)


def sequence_transport(responses):
    """Return a MockTransport answering with ``responses`` in order, and the call log."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        result = responses[min(len(calls), len(responses)) - 1]
        if isinstance(result, Exception):
            raise result
        # Fresh response per call; the last one repeats
        return httpx.Response(result.status_code, headers=result.headers, content=result.content)

    return httpx.MockTransport(handler), calls


class TestBuildApiError:
    def test_server_error_body(self):
        response = httpx.Response(
            409,
            json={
                "error": "Path Collision",
                "detail": 'An item named "a" already exists at /a',
                "type": "PathCollisionError",
                "path": "/a",
            },
        )
        error = build_api_error(response)
        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.error_type == "PathCollisionError"
        assert error.details == {"path": "/a"}
        assert error.message.startswith("An item named")

    def test_request_validation_list(self):
        response = httpx.Response(
            422,
            json={
                "detail": [
                    {"loc": ["body", "node_ids"], "msg": "Field required", "type": "missing"},
                ]
            },
        )
        error = build_api_error(response)
        assert isinstance(error, ValidationError)
        assert error.message == "node_ids: Field required"
        assert "errors" in error.details

    @pytest.mark.parametrize(
        "status_code,error_cls",
        [
            (400, ValidationError),
            (404, NotFoundError),
            (409, ConflictError),
            (422, ValidationError),
            (500, ServerError),
            (502, ServerError),
            (418, APIError),
        ],
    )
    def test_status_mapping(self, status_code, error_cls):
        error = build_api_error(httpx.Response(status_code, json={"detail": "x"}))
        assert type(error) is error_cls
        assert error.status_code == status_code

    def test_plain_text_body(self):
        error = build_api_error(httpx.Response(503, text="Service Unavailable"))
        assert error.message == "Service Unavailable"
        assert error.error_type is None

    def test_empty_body(self):
        error = build_api_error(httpx.Response(500))
        assert error.message == "HTTP 500 error"


class TestBackoff:
    def test_exponential(self):
        assert backoff_delay(0) == DEFAULT_RETRY_BACKOFF_BASE
        assert backoff_delay(1) == DEFAULT_RETRY_BACKOFF_BASE * 2
        assert backoff_delay(2) == DEFAULT_RETRY_BACKOFF_BASE * 4

    def test_capped(self):
        assert backoff_delay(20) == DEFAULT_RETRY_BACKOFF_MAX


class TestHTTPClient:
    def test_strips_trailing_slash(self):
        with HTTPClient("http://test/") as client:
            assert client.base_url == "http://test"

    def test_get_json(self):
        transport, calls = sequence_transport([httpx.Response(200, json={"ok": True})])
        with HTTPClient("http://test", transport=transport) as client:
            assert client.get("/files/listing") == {"ok": True}
        assert calls[0].method == "GET"
        assert calls[0].url.path == "/files/listing"

    def test_post_sends_json(self):
        transport, calls = sequence_transport([httpx.Response(200, json={})])
        with HTTPClient("http://test", transport=transport) as client:
            client.post("/files/search", json={"term": "doc"})
        assert calls[0].method == "POST"
        assert json.loads(calls[0].content) == {"term": "doc"}

    def test_empty_body_returns_none(self):
        transport, _ = sequence_transport([httpx.Response(204)])
        with HTTPClient("http://test", transport=transport) as client:
            assert client.post("/x") is None

    def test_error_status_raises(self):
        transport, _ = sequence_transport([httpx.Response(404, json={"detail": "gone"})])
        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(NotFoundError):
                client.get("/files/nodes/x")

    def test_connect_error(self):
        transport, _ = sequence_transport([httpx.ConnectError("refused")])
        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ConnectionError) as exc_info:
                client.get("/health")
        assert exc_info.value.url == "http://test/health"

    def test_timeout(self):
        transport, _ = sequence_transport([httpx.ReadTimeout("slow")])
        with HTTPClient("http://test", timeout=2.0, transport=transport) as client:
            with pytest.raises(TimeoutError) as exc_info:
                client.get("/health")
        assert exc_info.value.timeout == 2.0

    def test_no_retry_by_default(self):
        transport, calls = sequence_transport([httpx.Response(503), httpx.Response(200, json={})])
        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ServerError):
                client.get("/health")
        assert len(calls) == 1

    def test_retries_retryable_status(self, no_backoff):
        transport, calls = sequence_transport(
            [httpx.Response(503), httpx.Response(502), httpx.Response(200, json={"ok": 1})]
        )
        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            assert client.get("/health") == {"ok": 1}
        assert len(calls) == 3

    def test_gives_up_after_max_retries(self, no_backoff):
        transport, calls = sequence_transport([httpx.Response(504)])
        with HTTPClient(
            "http://test", retry_enabled=True, max_retries=2, transport=transport
        ) as client:
            with pytest.raises(ServerError):
                client.get("/health")
        assert len(calls) == 3

    def test_retries_connection_errors(self, no_backoff):
        transport, calls = sequence_transport(
            [httpx.ConnectError("refused"), httpx.Response(200, json={"ok": 1})]
        )
        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            assert client.get("/health") == {"ok": 1}
        assert len(calls) == 2

    def test_does_not_retry_client_errors(self, no_backoff):
        transport, calls = sequence_transport([httpx.Response(409, json={"detail": "taken"})])
        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            with pytest.raises(ConflictError):
                client.post("/files/create", json={"name": "a", "kind": "text"})
        assert len(calls) == 1


class TestAsyncHTTPClient:
    async def test_get_json(self):
        transport, _ = sequence_transport([httpx.Response(200, json={"status": "healthy"})])
        async with AsyncHTTPClient("http://test", transport=transport) as client:
            assert await client.get("/health") == {"status": "healthy"}

    async def test_error_status_raises(self):
        transport, _ = sequence_transport([httpx.Response(400, json={"detail": "bad"})])
        async with AsyncHTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ValidationError):
                await client.post("/files/create", json={"name": "", "kind": "text"})

    async def test_connect_error(self):
        transport, _ = sequence_transport([httpx.ConnectError("refused")])
        async with AsyncHTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ConnectionError):
                await client.get("/health")

    async def test_retries(self, no_backoff):
        transport, calls = sequence_transport(
            [httpx.Response(503), httpx.Response(200, json={"ok": 1})]
        )
        async with AsyncHTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            assert await client.get("/health") == {"ok": 1}
        assert len(calls) == 2
