"""Internal HTTP layer for the file manager client.

Wraps httpx (sync and async) with status-to-exception mapping and an
optional retry loop with exponential backoff for transient failures.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

HttpMethod = Literal["GET", "POST"]

# Status codes retried when retry is enabled
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

_ERROR_CLASSES: dict[int, type[APIError]] = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}

# Keys of the server error body that are not forwarded as details
_ENVELOPE_KEYS = {"error", "detail", "type"}


def build_api_error(response: httpx.Response) -> APIError:
    """Build the exception matching an error response.

    The server answers with ``{"error", "detail", "type", ...}``; request
    validation failures from FastAPI itself carry a list under ``detail``.

    Args:
        response: An HTTP response with a 4xx or 5xx status.

    Returns:
        The APIError subclass instance for the status code.
    """
    try:
        body: Any = response.json()
    except ValueError:
        body = response.text

    error_type = None
    details = None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, list):
            message = "; ".join(
                f"{err.get('loc', ['body'])[-1]}: {err.get('msg', 'invalid')}"
                for err in detail
            )
            error_type = "RequestValidationError"
            details = {"errors": detail}
        else:
            message = detail or body.get("error") or f"HTTP {response.status_code} error"
            error_type = body.get("type")
            details = {k: v for k, v in body.items() if k not in _ENVELOPE_KEYS} or None
    else:
        message = str(body).strip() or f"HTTP {response.status_code} error"

    status_code = response.status_code
    error_cls = _ERROR_CLASSES.get(status_code)
    if error_cls is None:
        error_cls = ServerError if status_code >= 500 else APIError
    return error_cls(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=body,
    )


def backoff_delay(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Return the delay before retry ``attempt`` (0-indexed), capped."""
    return min(base * (2**attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _decode(response: httpx.Response) -> Any:
    if not response.is_success:
        raise build_api_error(response)
    return response.json() if response.content else None


class _RetryingTransport:
    """Settings and bookkeeping shared by the sync and async clients."""

    def __init__(self, base_url: str, timeout: float, retry_enabled: bool, max_retries: int):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def _should_retry(self, attempt: int) -> bool:
        return self.retry_enabled and attempt < self.attempts - 1

    def _transport_error(self, exc: httpx.TransportError, path: str) -> Exception:
        url = f"{self.base_url}{path}"
        if isinstance(exc, httpx.TimeoutException):
            return TimeoutError(f"Request to {url} timed out", timeout=self.timeout, url=url)
        return ConnectionError(f"Failed to connect to {url}", url=url, cause=exc)


class HTTPClient(_RetryingTransport):
    """Synchronous HTTP client for the file manager API.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g. a MockTransport in tests).
        """
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        for attempt in range(self.attempts):
            try:
                response = self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                if not self._should_retry(attempt):
                    raise self._transport_error(e, path) from e
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES or not self._should_retry(attempt):
                    return _decode(response)
            time.sleep(backoff_delay(attempt))
        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str) -> Any:
        """Send a GET request."""
        return self.request("GET", path)

    def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Send a POST request."""
        return self.request("POST", path, json=json)


class AsyncHTTPClient(_RetryingTransport):
    """Asynchronous HTTP client for the file manager API.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g. httpx.ASGITransport for testing).
        """
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        for attempt in range(self.attempts):
            try:
                response = await self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                if not self._should_retry(attempt):
                    raise self._transport_error(e, path) from e
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES or not self._should_retry(attempt):
                    return _decode(response)
            await asyncio.sleep(backoff_delay(attempt))
        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str) -> Any:
        """Send a GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Send a POST request."""
        return await self.request("POST", path, json=json)
