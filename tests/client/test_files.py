"""Unit tests for the files and suggestions sub-clients.

The shared HTTP client is replaced with a mock so these tests check request
paths, bodies and response parsing without a server.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from client._files import AsyncFilesClient, FilesClient
from client._suggestions import AsyncSuggestionsClient, SuggestionsClient

NODE = {
    "id": "n1",
    "name": "notes",
    "kind": "text",
    "path": "/docs/notes",
    "parent_id": "docs",
    "modified_at": "2025-01-01T12:00:00Z",
    "size": 0,
    "content": "",
    "url": None,
}

LISTING = {
    "current_path": "/docs",
    "search_term": "",
    "sort_config": {"key": "name", "direction": "ascending"},
    "breadcrumbs": [{"name": "docs", "path": "/docs"}],
    "files": [NODE],
    "count": 1,
    "is_loading": False,
}

SELECTION = {"selected_ids": ["n1"], "count": 1, "changed": True}


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def files(http):
    return FilesClient(http)


class TestFilesClient:
    def test_listing(self, files, http):
        http.get.return_value = LISTING
        listing = files.listing()
        http.get.assert_called_once_with("/files/listing")
        assert listing.files[0].path == "/docs/notes"
        assert listing.breadcrumbs[0].name == "docs"

    def test_folders(self, files, http):
        http.get.return_value = {"folder_paths": ["/", "/docs"]}
        assert files.folders() == ["/", "/docs"]

    def test_get_node(self, files, http):
        http.get.return_value = NODE
        node = files.get_node("n1")
        http.get.assert_called_once_with("/files/nodes/n1")
        assert node.modified_at == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_change_directory(self, files, http):
        http.post.return_value = LISTING
        files.change_directory("/docs")
        http.post.assert_called_once_with("/files/directory", json={"path": "/docs"})

    def test_search(self, files, http):
        http.post.return_value = LISTING
        files.search("not")
        http.post.assert_called_once_with("/files/search", json={"term": "not"})

    def test_sort(self, files, http):
        http.post.return_value = LISTING
        files.sort("size", "descending")
        http.post.assert_called_once_with(
            "/files/sort", json={"key": "size", "direction": "descending"}
        )

    def test_create(self, files, http):
        http.post.return_value = {"message": "created", "node": NODE}
        result = files.create("notes", "text")
        http.post.assert_called_once_with("/files/create", json={"name": "notes", "kind": "text"})
        assert result.node.id == "n1"

    def test_upload_serializes_timestamp(self, files, http):
        http.post.return_value = {"message": "uploaded", "node": NODE}
        files.upload("a.txt", "text/plain", 3, datetime(2024, 1, 1, tzinfo=timezone.utc))
        http.post.assert_called_once_with(
            "/files/upload",
            json={
                "name": "a.txt",
                "mime_type": "text/plain",
                "size": 3,
                "last_modified": "2024-01-01T00:00:00+00:00",
            },
        )

    def test_upload_without_timestamp(self, files, http):
        http.post.return_value = {"message": "uploaded", "node": NODE}
        files.upload("a.txt")
        assert "last_modified" not in http.post.call_args.kwargs["json"]

    def test_complete_upload(self, files, http):
        http.post.return_value = {"applied": False, "node": None}
        result = files.complete_upload("n1", "data:,x")
        http.post.assert_called_once_with("/files/upload/n1/payload", json={"data_url": "data:,x"})
        assert result.applied is False

    def test_rename(self, files, http):
        http.post.return_value = {"message": "renamed", "node": NODE}
        files.rename("n1", "notes")
        http.post.assert_called_once_with("/files/rename", json={"node_id": "n1", "new_name": "notes"})

    def test_move(self, files, http):
        http.post.return_value = {"message": "moved", "node": NODE}
        files.move("n1", "/docs")
        http.post.assert_called_once_with(
            "/files/move", json={"node_id": "n1", "destination_path": "/docs"}
        )

    def test_delete(self, files, http):
        http.post.return_value = {"removed_ids": ["n1"], "removed_count": 1, "message": "1 item(s) deleted."}
        result = files.delete(["n1"])
        http.post.assert_called_once_with("/files/delete", json={"node_ids": ["n1"]})
        assert result.removed_count == 1

    def test_selection_calls(self, files, http):
        http.get.return_value = SELECTION
        http.post.return_value = SELECTION
        assert files.get_selection().selected_ids == ["n1"]
        files.toggle_selection("n1")
        http.post.assert_called_with("/files/selection/toggle", json={"node_id": "n1"})
        files.select_range(anchor_id="a", target_id="b")
        http.post.assert_called_with(
            "/files/selection/range",
            json={"node_ids": [], "anchor_id": "a", "target_id": "b"},
        )
        files.clear_selection()
        http.post.assert_called_with("/files/selection/clear", json=None)


class TestAsyncFilesClient:
    async def test_listing(self):
        http = MagicMock()
        http.get = AsyncMock(return_value=LISTING)
        listing = await AsyncFilesClient(http).listing()
        http.get.assert_awaited_once_with("/files/listing")
        assert listing.count == 1

    async def test_move(self):
        http = MagicMock()
        http.post = AsyncMock(return_value={"message": "moved", "node": NODE})
        result = await AsyncFilesClient(http).move("n1", "/docs")
        http.post.assert_awaited_once_with(
            "/files/move", json={"node_id": "n1", "destination_path": "/docs"}
        )
        assert result.node.parent_id == "docs"


class TestSuggestionsClient:
    def test_sends_camel_case(self, http):
        http.post.return_value = {"suggestedLocation": "/docs", "reasoning": "Fits."}
        result = SuggestionsClient(http).suggest_location("a.txt", "text", "notes")
        http.post.assert_called_once_with(
            "/suggestions/location",
            json={"fileName": "a.txt", "fileType": "text", "fileDescription": "notes"},
        )
        assert result.suggested_location == "/docs"

    async def test_async(self):
        http = MagicMock()
        http.post = AsyncMock(return_value={"suggestedLocation": "/", "reasoning": "Top."})
        result = await AsyncSuggestionsClient(http).suggest_location(
            "a.txt", "text", "notes", current_location="/docs"
        )
        assert http.post.await_args.kwargs["json"]["currentLocation"] == "/docs"
        assert result.reasoning == "Top."
