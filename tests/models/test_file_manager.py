"""Unit tests for the FileManager façade.

GENERAL PATTERN TESTS:
    - Lifecycle: load, is_loading
    - State access: get_snapshot, validate

FILE_MANAGER-SPECIFIC TESTS:
    - View state: change_directory, search, sort
    - Mutations act on the current directory and swap the snapshot on success
    - Current directory follows renames and moves of itself or an ancestor
    - Delete clears the selection and falls back to the root
"""

import base64
import threading
from datetime import datetime, timezone

import pytest

from models.errors import (
    CyclicMoveError,
    NodeNotFoundError,
    NodeValidationError,
    PathCollisionError,
)
from models.file_manager import FileManager
from models.uploads import UploadedFile


def names(nodes):
    return [n.name for n in nodes]


class TestLifecycle:
    def test_loading_until_load(self):
        manager = FileManager()
        assert manager.is_loading()
        manager.load()
        assert not manager.is_loading()
        assert len(manager.store) > 0

    def test_load_resets_view_state(self, file_manager):
        file_manager.change_directory("/docs")
        file_manager.search("read")
        file_manager.toggle_selection("docs.readme.txt")
        file_manager.load()
        assert file_manager.current_path == "/"
        assert file_manager.search_term == ""
        assert file_manager.selected_ids() == []

    def test_seeded_documents_listing(self, seeded_manager):
        seeded_manager.change_directory("/Documents")
        assert names(seeded_manager.current_files()) == ["Reports", "notes.txt", "resume.pdf"]


class TestViewState:
    def test_change_directory_clears_search_and_selection(self, file_manager):
        file_manager.search("doc")
        file_manager.toggle_selection("docs")
        file_manager.change_directory("/docs")
        assert file_manager.current_path == "/docs"
        assert file_manager.search_term == ""
        assert file_manager.selected_ids() == []

    def test_change_directory_to_missing_folder(self, file_manager):
        with pytest.raises(NodeNotFoundError):
            file_manager.change_directory("/nowhere")
        assert file_manager.current_path == "/"

    def test_change_directory_to_file(self, file_manager):
        with pytest.raises(NodeNotFoundError):
            file_manager.change_directory("/todo.txt")

    def test_search_filters_listing(self, file_manager):
        file_manager.search("IMG")
        assert file_manager.current_files() == []
        file_manager.search("ima")
        assert names(file_manager.current_files()) == ["images"]

    def test_set_sort_config(self, file_manager):
        file_manager.set_sort_config("name", "descending")
        assert names(file_manager.current_files()) == ["images", "docs2", "docs", "todo.txt"]

    def test_breadcrumbs(self, file_manager):
        file_manager.change_directory("/docs/reports")
        assert file_manager.breadcrumbs() == [("docs", "/docs"), ("reports", "/docs/reports")]

    def test_folder_paths(self, file_manager):
        assert file_manager.folder_paths()[0] == "/"
        assert "/docs/reports/archive" in file_manager.folder_paths()


class TestMutations:
    def test_create_in_current_directory(self, file_manager):
        file_manager.change_directory("/docs")
        node = file_manager.create_node("notes", "text")
        assert node.path == "/docs/notes"
        assert "notes" in names(file_manager.current_files())

    def test_failed_create_keeps_snapshot(self, file_manager):
        before = file_manager.store
        with pytest.raises(PathCollisionError):
            file_manager.create_node("docs", "folder")
        assert file_manager.store is before

    def test_invalid_name(self, file_manager):
        with pytest.raises(NodeValidationError):
            file_manager.create_node("", "folder")

    def test_rename(self, file_manager):
        node = file_manager.rename_node("todo.txt", "done.txt")
        assert node.path == "/done.txt"
        assert file_manager.get_node("todo.txt").name == "done.txt"

    def test_rename_current_directory_is_followed(self, file_manager):
        file_manager.change_directory("/docs/reports")
        file_manager.rename_node("docs", "papers")
        assert file_manager.current_path == "/papers/reports"
        assert names(file_manager.current_files()) == ["archive", "q1.pdf"]

    def test_move_current_directory_is_followed(self, file_manager):
        file_manager.change_directory("/docs/reports")
        file_manager.move_node("docs.reports", "/images")
        assert file_manager.current_path == "/images/reports"
        assert file_manager.validate() == []

    def test_prefix_sibling_directory_is_not_followed(self, file_manager):
        file_manager.change_directory("/docs2")
        file_manager.rename_node("docs", "papers")
        assert file_manager.current_path == "/docs2"

    def test_cyclic_move(self, file_manager):
        with pytest.raises(CyclicMoveError):
            file_manager.move_node("docs", "/docs/reports")

    def test_default_move_destination(self, file_manager):
        assert file_manager.default_move_destination("docs.reports.q1.pdf") == "/docs/reports"
        assert file_manager.default_move_destination("todo.txt") == "/"

    def test_delete_clears_selection(self, file_manager):
        file_manager.toggle_selection("todo.txt")
        file_manager.toggle_selection("images")
        removed = file_manager.delete_nodes(file_manager.selected_ids())
        assert removed == {"todo.txt", "images", "images.cat.png"}
        assert file_manager.selected_ids() == []

    def test_delete_current_directory_falls_back_to_root(self, file_manager):
        file_manager.change_directory("/docs/reports")
        file_manager.delete_nodes(["docs"])
        assert file_manager.current_path == "/"
        assert file_manager.validate() == []

    def test_delete_missing_ids(self, file_manager):
        assert file_manager.delete_nodes(["nope"]) == set()


class TestUploads:
    def test_upload_then_complete(self, file_manager):
        file_manager.change_directory("/docs")
        node = file_manager.upload_node(
            UploadedFile(
                name="hello.txt",
                mime_type="text/plain",
                size=5,
                last_modified=datetime(2024, 5, 1, tzinfo=timezone.utc),
            )
        )
        assert node.path == "/docs/hello.txt"
        assert node.kind == "text"

        payload = "data:text/plain;base64," + base64.b64encode(b"hello").decode("ascii")
        updated = file_manager.complete_upload(node.id, payload)
        assert updated.content == "hello"

    def test_payload_for_deleted_node_is_dropped(self, file_manager):
        node = file_manager.upload_node(
            UploadedFile(name="a.png", mime_type="image/png", last_modified=datetime.now(timezone.utc))
        )
        file_manager.delete_nodes([node.id])
        before = file_manager.store
        assert file_manager.complete_upload(node.id, "data:image/png;base64,AA==") is None
        assert file_manager.store is before

    def test_upload_collision(self, file_manager):
        with pytest.raises(PathCollisionError):
            file_manager.upload_node(
                UploadedFile(name="todo.txt", mime_type="text/plain", last_modified=datetime.now(timezone.utc))
            )

    @pytest.mark.parametrize("bad_name", ["", "   "])
    def test_upload_rejects_empty_name(self, file_manager, caplog, bad_name):
        before = file_manager.store
        with caplog.at_level("WARNING", logger="models.file_manager"):
            with pytest.raises(NodeValidationError):
                file_manager.upload_node(
                    UploadedFile(name=bad_name, mime_type="text/plain", last_modified=datetime.now(timezone.utc))
                )
        assert file_manager.store is before
        assert "upload rejected" in caplog.text


class TestSelection:
    def test_toggle(self, file_manager):
        assert file_manager.toggle_selection("docs") is True
        assert file_manager.toggle_selection("docs") is False

    def test_select_between_uses_current_listing(self, file_manager):
        added = file_manager.select_between("docs", "images")
        assert added == ["docs", "docs2", "images"]
        assert file_manager.selected_ids() == ["docs", "docs2", "images"]

    def test_clear(self, file_manager):
        file_manager.select_range(["docs", "todo.txt"])
        assert file_manager.clear_selection() is True
        assert file_manager.clear_selection() is False


class TestLocking:
    @pytest.mark.parametrize(
        "call",
        [
            lambda m: m.search("doc"),
            lambda m: m.set_sort_config("size", "descending"),
            lambda m: m.toggle_selection("docs"),
            lambda m: m.select_range(["docs"]),
            lambda m: m.select_between("docs", "images"),
            lambda m: m.clear_selection(),
        ],
    )
    def test_view_and_selection_changes_wait_for_lock(self, file_manager, call):
        done = threading.Event()

        def worker():
            call(file_manager)
            done.set()

        with file_manager._operation_lock:
            thread = threading.Thread(target=worker)
            thread.start()
            assert not done.wait(0.1)
        thread.join(timeout=2)
        assert done.is_set()


class TestSnapshot:
    def test_get_snapshot(self, file_manager):
        file_manager.change_directory("/docs")
        snapshot = file_manager.get_snapshot()
        assert snapshot["current_path"] == "/docs"
        assert snapshot["node_count"] == 11
        assert snapshot["sort_config"] == {"key": "name", "direction": "ascending"}
        assert snapshot["is_loading"] is False

    def test_validate_flags_stale_current_path(self, file_manager):
        file_manager.current_path = "/ghost"
        assert any("/ghost" in e for e in file_manager.validate())
