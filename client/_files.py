"""File manager sub-client for the /files endpoints.

This module provides FilesClient and AsyncFilesClient for browsing and
editing the virtual file system and managing the selection.

This is an internal module. Import from `client` instead.
"""

from datetime import datetime
from typing import Any

from client._base import AsyncBaseClient, BaseClient
from client.models import (
    DeleteResponse,
    FileManagerStateResponse,
    FileNode,
    ListingResponse,
    NodeActionResponse,
    SelectionResponse,
    UploadPayloadResponse,
)


def _upload_body(
    name: str, mime_type: str, size: int, last_modified: datetime | None
) -> dict[str, Any]:
    body: dict[str, Any] = {"name": name, "mime_type": mime_type, "size": size}
    if last_modified is not None:
        body["last_modified"] = last_modified.isoformat()
    return body


def _range_body(
    node_ids: list[str] | None, anchor_id: str | None, target_id: str | None
) -> dict[str, Any]:
    return {"node_ids": node_ids or [], "anchor_id": anchor_id, "target_id": target_id}


class FilesClient(BaseClient):
    """Synchronous client for the file manager endpoints (/files/*).

    Example:
        with FileManagerClient() as client:
            client.files.change_directory("/Documents")
            created = client.files.create("drafts", "folder")
            client.files.move(created.node.id, "/Projects")
            listing = client.files.listing()
            print([node.name for node in listing.files])
    """

    _BASE_PATH = "/files"

    def get_state(self) -> FileManagerStateResponse:
        """Get every node plus the current view state."""
        return FileManagerStateResponse(**self._get("/state"))

    def listing(self) -> ListingResponse:
        """Get the projected listing of the current directory."""
        return ListingResponse(**self._get("/listing"))

    def folders(self) -> list[str]:
        """Get ``/`` and every folder path."""
        return self._get("/folders")["folder_paths"]

    def get_node(self, node_id: str) -> FileNode:
        """Get a single node.

        Raises:
            NotFoundError: If the node does not exist.
        """
        return FileNode(**self._get(f"/nodes/{node_id}"))

    def change_directory(self, path: str) -> ListingResponse:
        """Browse into ``path``; clears the search term and selection.

        Raises:
            NotFoundError: If ``path`` is not a folder.
        """
        return ListingResponse(**self._post("/directory", json={"path": path}))

    def search(self, term: str) -> ListingResponse:
        """Filter the current listing by name."""
        return ListingResponse(**self._post("/search", json={"term": term}))

    def sort(self, key: str = "name", direction: str = "ascending") -> ListingResponse:
        """Set the sort key and direction of the current listing."""
        return ListingResponse(
            **self._post("/sort", json={"key": key, "direction": direction})
        )

    def reset(self) -> ListingResponse:
        """Re-seed the store and reset the view state."""
        return ListingResponse(**self._post("/reset"))

    def create(self, name: str, kind: str) -> NodeActionResponse:
        """Create an empty file or folder in the current directory.

        Raises:
            ValidationError: If the name is invalid.
            ConflictError: If the name is taken.
        """
        return NodeActionResponse(**self._post("/create", json={"name": name, "kind": kind}))

    def upload(
        self,
        name: str,
        mime_type: str = "application/octet-stream",
        size: int = 0,
        last_modified: datetime | None = None,
    ) -> NodeActionResponse:
        """Register an uploaded file in the current directory."""
        return NodeActionResponse(
            **self._post("/upload", json=_upload_body(name, mime_type, size, last_modified))
        )

    def complete_upload(self, node_id: str, data_url: str) -> UploadPayloadResponse:
        """Deliver the ``data:`` URL payload of an uploaded file."""
        return UploadPayloadResponse(
            **self._post(f"/upload/{node_id}/payload", json={"data_url": data_url})
        )

    def rename(self, node_id: str, new_name: str) -> NodeActionResponse:
        """Rename a node.

        Raises:
            ValidationError: If the name is invalid.
            ConflictError: If a sibling already has the name.
            NotFoundError: If the node does not exist.
        """
        return NodeActionResponse(
            **self._post("/rename", json={"node_id": node_id, "new_name": new_name})
        )

    def move(self, node_id: str, destination_path: str) -> NodeActionResponse:
        """Move a node into another folder.

        Raises:
            ConflictError: On a name collision or a move into the node's own subtree.
            NotFoundError: If the node or destination does not exist.
        """
        return NodeActionResponse(
            **self._post(
                "/move", json={"node_id": node_id, "destination_path": destination_path}
            )
        )

    def delete(self, node_ids: list[str]) -> DeleteResponse:
        """Delete nodes and folder subtrees; missing ids are ignored."""
        return DeleteResponse(**self._post("/delete", json={"node_ids": node_ids}))

    def get_selection(self) -> SelectionResponse:
        """Get the selected ids."""
        return SelectionResponse(**self._get("/selection"))

    def toggle_selection(self, node_id: str) -> SelectionResponse:
        """Toggle one id in the selection."""
        return SelectionResponse(**self._post("/selection/toggle", json={"node_id": node_id}))

    def select_range(
        self,
        node_ids: list[str] | None = None,
        anchor_id: str | None = None,
        target_id: str | None = None,
    ) -> SelectionResponse:
        """Add ids, or the run between ``anchor_id`` and ``target_id``, to the selection."""
        return SelectionResponse(
            **self._post("/selection/range", json=_range_body(node_ids, anchor_id, target_id))
        )

    def clear_selection(self) -> SelectionResponse:
        """Empty the selection."""
        return SelectionResponse(**self._post("/selection/clear"))


class AsyncFilesClient(AsyncBaseClient):
    """Asynchronous client for the file manager endpoints (/files/*).

    Example:
        async with AsyncFileManagerClient() as client:
            await client.files.change_directory("/Images")
            listing = await client.files.search("logo")
    """

    _BASE_PATH = "/files"

    async def get_state(self) -> FileManagerStateResponse:
        """Get every node plus the current view state."""
        return FileManagerStateResponse(**await self._get("/state"))

    async def listing(self) -> ListingResponse:
        """Get the projected listing of the current directory."""
        return ListingResponse(**await self._get("/listing"))

    async def folders(self) -> list[str]:
        """Get ``/`` and every folder path."""
        return (await self._get("/folders"))["folder_paths"]

    async def get_node(self, node_id: str) -> FileNode:
        """Get a single node."""
        return FileNode(**await self._get(f"/nodes/{node_id}"))

    async def change_directory(self, path: str) -> ListingResponse:
        """Browse into ``path``; clears the search term and selection."""
        return ListingResponse(**await self._post("/directory", json={"path": path}))

    async def search(self, term: str) -> ListingResponse:
        """Filter the current listing by name."""
        return ListingResponse(**await self._post("/search", json={"term": term}))

    async def sort(self, key: str = "name", direction: str = "ascending") -> ListingResponse:
        """Set the sort key and direction of the current listing."""
        return ListingResponse(
            **await self._post("/sort", json={"key": key, "direction": direction})
        )

    async def reset(self) -> ListingResponse:
        """Re-seed the store and reset the view state."""
        return ListingResponse(**await self._post("/reset"))

    async def create(self, name: str, kind: str) -> NodeActionResponse:
        """Create an empty file or folder in the current directory."""
        return NodeActionResponse(
            **await self._post("/create", json={"name": name, "kind": kind})
        )

    async def upload(
        self,
        name: str,
        mime_type: str = "application/octet-stream",
        size: int = 0,
        last_modified: datetime | None = None,
    ) -> NodeActionResponse:
        """Register an uploaded file in the current directory."""
        return NodeActionResponse(
            **await self._post(
                "/upload", json=_upload_body(name, mime_type, size, last_modified)
            )
        )

    async def complete_upload(self, node_id: str, data_url: str) -> UploadPayloadResponse:
        """Deliver the ``data:`` URL payload of an uploaded file."""
        return UploadPayloadResponse(
            **await self._post(f"/upload/{node_id}/payload", json={"data_url": data_url})
        )

    async def rename(self, node_id: str, new_name: str) -> NodeActionResponse:
        """Rename a node."""
        return NodeActionResponse(
            **await self._post("/rename", json={"node_id": node_id, "new_name": new_name})
        )

    async def move(self, node_id: str, destination_path: str) -> NodeActionResponse:
        """Move a node into another folder."""
        return NodeActionResponse(
            **await self._post(
                "/move", json={"node_id": node_id, "destination_path": destination_path}
            )
        )

    async def delete(self, node_ids: list[str]) -> DeleteResponse:
        """Delete nodes and folder subtrees; missing ids are ignored."""
        return DeleteResponse(**await self._post("/delete", json={"node_ids": node_ids}))

    async def get_selection(self) -> SelectionResponse:
        """Get the selected ids."""
        return SelectionResponse(**await self._get("/selection"))

    async def toggle_selection(self, node_id: str) -> SelectionResponse:
        """Toggle one id in the selection."""
        return SelectionResponse(
            **await self._post("/selection/toggle", json={"node_id": node_id})
        )

    async def select_range(
        self,
        node_ids: list[str] | None = None,
        anchor_id: str | None = None,
        target_id: str | None = None,
    ) -> SelectionResponse:
        """Add ids, or the run between ``anchor_id`` and ``target_id``, to the selection."""
        return SelectionResponse(
            **await self._post(
                "/selection/range", json=_range_body(node_ids, anchor_id, target_id)
            )
        )

    async def clear_selection(self) -> SelectionResponse:
        """Empty the selection."""
        return SelectionResponse(**await self._post("/selection/clear"))
