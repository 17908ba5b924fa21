"""File manager API client library.

A typed Python client for the virtual file manager REST API, usable both
synchronously and asynchronously.

Example:
    Synchronous usage::

        from client import FileManagerClient

        with FileManagerClient(base_url="http://localhost:8000") as client:
            client.files.change_directory("/Projects")
            client.files.create("notes.txt", "text")

Exports:
    FileManagerClient: Synchronous client.
    AsyncFileManagerClient: Asynchronous client.

    Exceptions:
        FileManagerClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Invalid request or name (HTTP 400/422).
        NotFoundError: Node or folder not found (HTTP 404).
        ConflictError: Path collision or cyclic move (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._files import AsyncFilesClient, FilesClient
from client._suggestions import AsyncSuggestionsClient, SuggestionsClient
from client.client import AsyncFileManagerClient, FileManagerClient
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    FileManagerClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    DeleteResponse,
    FileManagerStateResponse,
    FileNode,
    HealthResponse,
    ListingResponse,
    NodeActionResponse,
    SelectionResponse,
    SuggestFileLocationOutput,
    UploadPayloadResponse,
)

__all__ = [
    # Main clients
    "FileManagerClient",
    "AsyncFileManagerClient",
    # Sub-clients
    "FilesClient",
    "AsyncFilesClient",
    "SuggestionsClient",
    "AsyncSuggestionsClient",
    # Exceptions
    "FileManagerClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    # Models
    "DeleteResponse",
    "FileManagerStateResponse",
    "FileNode",
    "HealthResponse",
    "ListingResponse",
    "NodeActionResponse",
    "SelectionResponse",
    "SuggestFileLocationOutput",
    "UploadPayloadResponse",
]
