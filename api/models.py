"""Shared request and response models for API endpoints.

Request models that belong to a single route live next to that route; the
models here are reused by several routes and re-exported by the client.
"""

from typing import Optional

from pydantic import BaseModel, Field

from models.file_node import FileNode
from models.projection import SortConfig


class NodeActionResponse(BaseModel):
    """Response model for mutations that produce or change a single node.

    Attributes:
        message: Human-readable description of the result.
        node: The node after the operation.
    """

    message: str
    node: FileNode


class BreadcrumbEntry(BaseModel):
    """One segment of the path leading to the current directory.

    Attributes:
        name: Segment name.
        path: Absolute path up to and including this segment.
    """

    name: str
    path: str


class ListingResponse(BaseModel):
    """Response model for the projected listing of the current directory.

    Attributes:
        current_path: Directory being browsed.
        search_term: Active name filter.
        sort_config: Active sort configuration.
        breadcrumbs: Segments leading to the current directory.
        files: Folder-first, filtered, sorted children.
        count: Number of entries in ``files``.
        is_loading: Whether the store is still being loaded.
    """

    current_path: str
    search_term: str
    sort_config: SortConfig
    breadcrumbs: list[BreadcrumbEntry]
    files: list[FileNode]
    count: int
    is_loading: bool = False


class FolderPathsResponse(BaseModel):
    """Response model for the list of possible move destinations.

    Attributes:
        folder_paths: ``/`` and every folder path, sorted.
    """

    folder_paths: list[str]


class DeleteResponse(BaseModel):
    """Response model for batch deletes.

    Attributes:
        removed_ids: Every removed id, including folder descendants.
        removed_count: Number of removed nodes.
        message: Human-readable summary.
    """

    removed_ids: list[str]
    removed_count: int
    message: str


class SelectionResponse(BaseModel):
    """Response model for selection endpoints.

    Attributes:
        selected_ids: Selected ids in the order they were added.
        count: Number of selected ids.
        changed: Whether the last operation changed the selection.
    """

    selected_ids: list[str]
    count: int
    changed: bool = True


class FileManagerStateResponse(BaseModel):
    """Response model for the full store and view state.

    Attributes:
        nodes: Every node in the store.
        node_count: Total number of nodes.
        folder_count: Number of folders.
        file_count: Number of non-folder nodes.
        current_path: Directory being browsed.
        search_term: Active name filter.
        sort_config: Active sort configuration.
        selected_ids: Selected ids.
        is_loading: Whether the store is still being loaded.
    """

    nodes: list[FileNode]
    node_count: int
    folder_count: int
    file_count: int
    current_path: str
    search_term: str
    sort_config: SortConfig
    selected_ids: list[str]
    is_loading: bool


class ErrorResponse(BaseModel):
    """Standard error response body.

    Attributes:
        error: Short error title.
        detail: Human-readable description.
        type: Exception class name.
    """

    error: str
    detail: str
    type: Optional[str] = None
    path: Optional[str] = Field(default=None, description="Offending path, if any")
    node_id: Optional[str] = Field(default=None, description="Offending node id, if any")
