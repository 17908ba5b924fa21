"""File manager endpoints.

Provides REST API endpoints for browsing the virtual file system (listing,
search, sort, directory changes), editing it (create, upload, rename, move,
delete) and managing the multi-item selection.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import FileManagerDep
from api.models import (
    BreadcrumbEntry,
    DeleteResponse,
    FileManagerStateResponse,
    FolderPathsResponse,
    ListingResponse,
    NodeActionResponse,
    SelectionResponse,
)
from models.file_manager import FileManager
from models.file_node import FileKind, FileNode
from models.projection import SortDirection, SortKey
from models.uploads import UploadedFile

router = APIRouter(
    prefix="/files",
    tags=["files"],
)


# ============================================================================
# Request Models
# ============================================================================


class ChangeDirectoryRequest(BaseModel):
    """Request model for changing the current directory.

    Attributes:
        path: ``/`` or the path of an existing folder.
    """

    path: str = Field(description="Directory to browse")


class SearchRequest(BaseModel):
    """Request model for setting the name filter.

    Attributes:
        term: Case-insensitive substring; empty clears the filter.
    """

    term: str = Field(default="", description="Name filter")


class SortRequest(BaseModel):
    """Request model for setting the sort configuration.

    Attributes:
        key: name, modified_at or size.
        direction: ascending or descending.
    """

    key: SortKey = Field(default="name", description="Field to sort by")
    direction: SortDirection = Field(default="ascending", description="Sort direction")


class CreateNodeRequest(BaseModel):
    """Request model for creating a file or folder in the current directory.

    Attributes:
        name: Name of the new node.
        kind: Kind of the new node.
    """

    name: str = Field(description="Name of the new node")
    kind: FileKind = Field(description="Kind of the new node")


class UploadRequest(BaseModel):
    """Request model for registering an uploaded file in the current directory.

    Attributes:
        name: Original file name.
        mime_type: MIME type reported by the browser.
        size: Size in bytes.
        last_modified: Modification time of the file (defaults to now).
    """

    name: str = Field(description="Original file name")
    mime_type: str = Field(default="application/octet-stream", description="MIME type")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    last_modified: datetime | None = Field(default=None, description="File modification time")


class UploadPayloadRequest(BaseModel):
    """Request model for delivering a decoded upload payload.

    Attributes:
        data_url: ``data:`` URL with the file content.
    """

    data_url: str = Field(description="data: URL with the file content")


class RenameRequest(BaseModel):
    """Request model for renaming a node.

    Attributes:
        node_id: Node to rename.
        new_name: New name.
    """

    node_id: str = Field(description="Node to rename")
    new_name: str = Field(description="New name")


class MoveRequest(BaseModel):
    """Request model for moving a node.

    Attributes:
        node_id: Node to move.
        destination_path: ``/`` or the path of an existing folder.
    """

    node_id: str = Field(description="Node to move")
    destination_path: str = Field(description="Destination folder")


class NodeIdsRequest(BaseModel):
    """Request model for operations on a batch of node ids.

    Attributes:
        node_ids: Ids to act on.
    """

    node_ids: list[str] = Field(description="Node ids")


class ToggleSelectionRequest(BaseModel):
    """Request model for toggling one id in the selection.

    Attributes:
        node_id: Id to toggle.
    """

    node_id: str = Field(description="Node id to toggle")


class SelectRangeRequest(BaseModel):
    """Request model for range selection.

    Either pass ``node_ids`` directly, or ``anchor_id`` and ``target_id`` to
    select the contiguous run between them in the current listing.

    Attributes:
        node_ids: Ids to add.
        anchor_id: Previously clicked id.
        target_id: Id just clicked.
    """

    node_ids: list[str] = Field(default_factory=list, description="Ids to add")
    anchor_id: str | None = Field(default=None, description="Range anchor id")
    target_id: str | None = Field(default=None, description="Range target id")


# ============================================================================
# Helpers
# ============================================================================


def _listing(manager: FileManager) -> ListingResponse:
    files = manager.current_files()
    return ListingResponse(
        current_path=manager.current_path,
        search_term=manager.search_term,
        sort_config=manager.sort_config,
        breadcrumbs=[BreadcrumbEntry(name=n, path=p) for n, p in manager.breadcrumbs()],
        files=files,
        count=len(files),
        is_loading=manager.is_loading(),
    )


def _selection(manager: FileManager, changed: bool = True) -> SelectionResponse:
    selected = manager.selected_ids()
    return SelectionResponse(selected_ids=selected, count=len(selected), changed=changed)


# ============================================================================
# Read Endpoints
# ============================================================================


@router.get("/state", response_model=FileManagerStateResponse)
async def get_state(manager: FileManagerDep):
    """Return every node plus the current view state."""
    return FileManagerStateResponse(**manager.get_snapshot())


@router.get("/listing", response_model=ListingResponse)
async def get_listing(manager: FileManagerDep):
    """Return the projected listing of the current directory."""
    return _listing(manager)


@router.get("/folders", response_model=FolderPathsResponse)
async def get_folders(manager: FileManagerDep):
    """Return ``/`` and every folder path for move destination choices."""
    return FolderPathsResponse(folder_paths=manager.folder_paths())


@router.get("/nodes/{node_id}", response_model=FileNode)
async def get_node(node_id: str, manager: FileManagerDep):
    """Return a single node by id."""
    return manager.get_node(node_id)


# ============================================================================
# View State Endpoints
# ============================================================================


@router.post("/directory", response_model=ListingResponse)
async def change_directory(request: ChangeDirectoryRequest, manager: FileManagerDep):
    """Browse into a directory; clears the search term and selection."""
    manager.change_directory(request.path)
    return _listing(manager)


@router.post("/search", response_model=ListingResponse)
async def search(request: SearchRequest, manager: FileManagerDep):
    """Set the name filter of the current listing."""
    manager.search(request.term)
    return _listing(manager)


@router.post("/sort", response_model=ListingResponse)
async def set_sort(request: SortRequest, manager: FileManagerDep):
    """Set the sort configuration of the current listing."""
    manager.set_sort_config(request.key, request.direction)
    return _listing(manager)


@router.post("/reset", response_model=ListingResponse)
async def reset(manager: FileManagerDep):
    """Re-seed the store and reset the view state."""
    manager.load()
    return _listing(manager)


# ============================================================================
# Mutation Endpoints
# ============================================================================


@router.post("/create", response_model=NodeActionResponse)
async def create_node(request: CreateNodeRequest, manager: FileManagerDep):
    """Create an empty file or folder in the current directory."""
    node = manager.create_node(request.name, request.kind)
    return NodeActionResponse(message=f'"{node.name}" has been created.', node=node)


@router.post("/upload", response_model=NodeActionResponse)
async def upload(request: UploadRequest, manager: FileManagerDep):
    """Register an uploaded file in the current directory."""
    node = manager.upload_node(
        UploadedFile(
            name=request.name,
            mime_type=request.mime_type,
            size=request.size,
            last_modified=request.last_modified or datetime.now(timezone.utc),
        )
    )
    return NodeActionResponse(message=f'"{node.name}" has been uploaded.', node=node)


@router.post("/upload/{node_id}/payload")
async def complete_upload(
    node_id: str, request: UploadPayloadRequest, manager: FileManagerDep
):
    """Attach decoded content to an uploaded node.

    A payload for a node that has since been deleted is dropped and reported
    with ``applied: false``.
    """
    node = manager.complete_upload(node_id, request.data_url)
    return {
        "applied": node is not None,
        "node": node.model_dump(mode="json") if node is not None else None,
    }


@router.post("/rename", response_model=NodeActionResponse)
async def rename_node(request: RenameRequest, manager: FileManagerDep):
    """Rename a node; folder renames cascade to every descendant."""
    old_name = manager.get_node(request.node_id).name
    node = manager.rename_node(request.node_id, request.new_name)
    return NodeActionResponse(
        message=f'"{old_name}" was renamed to "{node.name}".', node=node
    )


@router.post("/move", response_model=NodeActionResponse)
async def move_node(request: MoveRequest, manager: FileManagerDep):
    """Move a node into another folder; folder moves cascade to descendants."""
    node = manager.move_node(request.node_id, request.destination_path)
    return NodeActionResponse(
        message=f'"{node.name}" moved to {request.destination_path}.', node=node
    )


@router.post("/delete", response_model=DeleteResponse)
async def delete_nodes(request: NodeIdsRequest, manager: FileManagerDep):
    """Delete nodes and folder subtrees; missing ids are ignored."""
    removed = manager.delete_nodes(request.node_ids)
    return DeleteResponse(
        removed_ids=sorted(removed),
        removed_count=len(removed),
        message=f"{len(removed)} item(s) deleted.",
    )


# ============================================================================
# Selection Endpoints
# ============================================================================


@router.get("/selection", response_model=SelectionResponse)
async def get_selection(manager: FileManagerDep):
    """Return the selected ids."""
    return _selection(manager, changed=False)


@router.post("/selection/toggle", response_model=SelectionResponse)
async def toggle_selection(request: ToggleSelectionRequest, manager: FileManagerDep):
    """Add an id to the selection, or remove it if already selected."""
    manager.toggle_selection(request.node_id)
    return _selection(manager)


@router.post("/selection/range", response_model=SelectionResponse)
async def select_range(request: SelectRangeRequest, manager: FileManagerDep):
    """Add a range of ids to the selection."""
    before = manager.selected_ids()
    if request.anchor_id is not None and request.target_id is not None:
        manager.select_between(request.anchor_id, request.target_id)
    manager.select_range(request.node_ids)
    return _selection(manager, changed=manager.selected_ids() != before)


@router.post("/selection/clear", response_model=SelectionResponse)
async def clear_selection(manager: FileManagerDep):
    """Empty the selection."""
    changed = manager.clear_selection()
    return _selection(manager, changed=changed)
