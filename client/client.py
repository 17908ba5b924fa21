"""Main file manager client classes.

- FileManagerClient: Synchronous client for the file manager REST API
- AsyncFileManagerClient: Asynchronous client for the file manager REST API

Both clients expose the endpoints through namespaced sub-clients
(``client.files`` and ``client.suggestions``).

Example:
    Synchronous usage::

        from client import FileManagerClient

        with FileManagerClient(base_url="http://localhost:8000") as client:
            client.files.change_directory("/Documents")
            client.files.create("drafts", "folder")

    Asynchronous usage::

        from client import AsyncFileManagerClient

        async with AsyncFileManagerClient() as client:
            listing = await client.files.listing()
"""

from typing import Any

from client._files import AsyncFilesClient, FilesClient
from client._http import AsyncHTTPClient, HTTPClient
from client._suggestions import AsyncSuggestionsClient, SuggestionsClient
from client.models import HealthResponse


class FileManagerClient:
    """Synchronous client for the file manager REST API.

    Attributes:
        files: Sub-client for /files endpoints.
        suggestions: Sub-client for /suggestions endpoints.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on connection errors, timeouts and
                HTTP 502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g. a MockTransport for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self.files = FilesClient(self._http)
        self.suggestions = SuggestionsClient(self._http)

    def __enter__(self) -> "FileManagerClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    def health(self) -> HealthResponse:
        """Check server health."""
        return HealthResponse(**self._http.get("/health"))


class AsyncFileManagerClient:
    """Asynchronous client for the file manager REST API.

    Attributes:
        files: Sub-client for /files endpoints.
        suggestions: Sub-client for /suggestions endpoints.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the async client.

        Args:
            base_url: The base URL of the server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom async transport (e.g. httpx.ASGITransport for testing).
        """
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self.files = AsyncFilesClient(self._http)
        self.suggestions = AsyncSuggestionsClient(self._http)

    async def __aenter__(self) -> "AsyncFileManagerClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    async def health(self) -> HealthResponse:
        """Check server health."""
        return HealthResponse(**await self._http.get("/health"))
