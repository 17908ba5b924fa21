"""Client response models for the file manager API client.

This module re-exports the response models of the API layer and defines the
few client-side models that have no API-layer counterpart.
"""

from pydantic import BaseModel, Field

from api.models import (
    BreadcrumbEntry,
    DeleteResponse,
    ErrorResponse,
    FileManagerStateResponse,
    FolderPathsResponse,
    ListingResponse,
    NodeActionResponse,
    SelectionResponse,
)
from models.file_node import FileNode
from models.projection import SortConfig
from models.suggestion import SuggestFileLocationOutput

__all__ = [
    "BreadcrumbEntry",
    "DeleteResponse",
    "ErrorResponse",
    "FileManagerStateResponse",
    "FileNode",
    "FolderPathsResponse",
    "ListingResponse",
    "NodeActionResponse",
    "SelectionResponse",
    "SortConfig",
    "SuggestFileLocationOutput",
    "HealthResponse",
    "UploadPayloadResponse",
]


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status string (e.g. "healthy").
    """

    status: str = Field(..., description="Health status")


class UploadPayloadResponse(BaseModel):
    """Response model for delivering an upload payload.

    Attributes:
        applied: False when the node was deleted before the payload arrived.
        node: The updated node, if it still exists.
    """

    applied: bool
    node: FileNode | None = None
