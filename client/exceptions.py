"""Exception hierarchy for the file manager API client.

Exception Hierarchy:
    FileManagerClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 400, 422)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409: path collision, cyclic move)
        └── ServerError (HTTP 5xx)

Example:
    Handling a rejected rename::

        try:
            client.files.rename(node_id, "notes.txt")
        except ConflictError as e:
            print(f"{e.error_type}: {e.message}")
"""

from typing import Any


class FileManagerClientError(Exception):
    """Base exception for all file manager client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(FileManagerClientError):
    """Failed to connect to the file manager server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (url: {self.url})" if self.url else self.message


class TimeoutError(FileManagerClientError):
    """Request took longer than the configured timeout.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.timeout is None:
            return self.message
        return f"{self.message} (timeout: {self.timeout}s)"


class APIError(FileManagerClientError):
    """Server returned an error response.

    Attributes:
        status_code: HTTP status code from the server.
        error_type: Server-side exception class name, e.g. ``PathCollisionError``.
        details: Extra fields from the error body (path, node_id, ...).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """Request was rejected as invalid (HTTP 400 or 422).

    Covers both malformed request bodies and rejected node names.
    """


class NotFoundError(APIError):
    """Node or folder does not exist (HTTP 404)."""


class ConflictError(APIError):
    """Operation conflicts with the current tree (HTTP 409).

    Raised for path collisions and for moving a folder into its own subtree.
    """


class ServerError(APIError):
    """Server-side failure (HTTP 5xx), including suggestion service errors."""
