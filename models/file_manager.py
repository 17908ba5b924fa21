"""File manager façade over the node store.

The FileManager holds the current store snapshot together with the view
state (current directory, search term, sort configuration, selection) and
exposes the operations a presentation layer calls. Every mutation is
delegated to models.mutations and the resulting snapshot is swapped in only
on success.
"""

import logging
import threading
import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field

from models.errors import FileSystemError
from models.file_node import (
    ROOT_PATH,
    FileKind,
    FileNode,
    is_within,
    parent_path,
    rebase_path,
    split_breadcrumbs,
)
from models.mutations import (
    apply_upload_payload,
    create_node,
    delete_nodes,
    insert_node,
    move_node,
    rename_node,
)
from models.node_store import NodeStore
from models.projection import SortConfig, SortDirection, SortKey, project_directory
from models.seed import build_seed_store
from models.selection import Selection
from models.uploads import UploadedFile, build_upload_node, payload_for

logger = logging.getLogger(__name__)


class FileManager(BaseModel):
    """Stateful entry point for browsing and editing the virtual file system.

    Responsibilities:
    - Own the current NodeStore snapshot and swap it after each mutation
    - Track the current directory, search term and sort configuration
    - Track the multi-item selection and clear it on directory change
    - Derive the current listing and folder choices on demand

    Attributes:
        store: Current node store snapshot.
        current_path: Directory being browsed (``/`` for the virtual root).
        search_term: Active name filter, empty for none.
        sort_config: Active sort configuration.
        selection: Selected node ids.
        loading: True until ``load()`` has installed a store.
        manager_id: Unique identifier for this manager instance.

    Example:
        >>> manager = FileManager()
        >>> manager.load()
        >>> manager.change_directory("/Documents")
        >>> [node.name for node in manager.current_files()]
        ['Reports', 'notes.txt', 'resume.pdf']
    """

    store: NodeStore = Field(default_factory=NodeStore)
    current_path: str = ROOT_PATH
    search_term: str = ""
    sort_config: SortConfig = Field(default_factory=SortConfig)
    selection: Selection = Field(default_factory=Selection)
    loading: bool = True
    manager_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    def __init__(self, **data):
        """Initialize with private attributes."""
        super().__init__(**data)
        self._operation_lock = threading.RLock()

    # ===== Lifecycle =====

    def load(self, store: Optional[NodeStore] = None) -> None:
        """Install a store and reset the view state.

        Args:
            store: Store to install (defaults to a fresh seed store).
        """
        with self._operation_lock:
            self.store = store if store is not None else build_seed_store()
            self.current_path = ROOT_PATH
            self.search_term = ""
            self.selection.clear()
            self.loading = False
        logger.info(f"File manager {self.manager_id} loaded {len(self.store)} nodes")

    def is_loading(self) -> bool:
        """Return True until a store has been loaded."""
        return self.loading

    def _swap(self, new_store: NodeStore, operation: str) -> None:
        self.store = new_store
        logger.debug(f"{operation}: store now holds {len(new_store)} nodes")

    def _rejected(self, operation: str, error: FileSystemError) -> None:
        logger.warning(f"{operation} rejected: {error.message}")

    def _follow(self, old_path: str, new_path: str) -> None:
        # Keep browsing the same folder when it or an ancestor was renamed or moved.
        if self.current_path == old_path or is_within(self.current_path, old_path):
            self.current_path = rebase_path(self.current_path, old_path, new_path)

    # ===== View state =====

    def change_directory(self, path: str) -> None:
        """Browse into ``path``, clearing the search term and selection.

        Raises:
            NodeNotFoundError: If ``path`` is neither ``/`` nor a folder.
        """
        with self._operation_lock:
            self.store.directory_id(path)
            self.current_path = path
            self.search_term = ""
            self.selection.clear()
        logger.debug(f"Changed directory to {path}")

    def search(self, term: str) -> None:
        """Set the name filter for the current listing."""
        with self._operation_lock:
            self.search_term = term or ""

    def set_sort_config(self, key: SortKey, direction: SortDirection) -> None:
        """Set the sort key and direction for the current listing."""
        with self._operation_lock:
            self.sort_config = SortConfig(key=key, direction=direction)

    # ===== Mutations =====

    def create_node(self, name: str, kind: FileKind) -> FileNode:
        """Create an empty file or folder in the current directory.

        Returns:
            The created node.

        Raises:
            NodeValidationError, PathCollisionError, NodeNotFoundError.
        """
        with self._operation_lock:
            try:
                new_store, node = create_node(self.store, self.current_path, name, kind)
            except FileSystemError as e:
                self._rejected("create", e)
                raise
            self._swap(new_store, "create")
        logger.info(f"Created {node.kind} {node.path}")
        return node

    def upload_node(self, upload: UploadedFile) -> FileNode:
        """Insert an uploaded file's node into the current directory.

        The decoded content arrives later through ``complete_upload``.

        Returns:
            The inserted node.
        """
        with self._operation_lock:
            try:
                new_store, node = insert_node(
                    self.store, self.current_path, build_upload_node(upload)
                )
            except FileSystemError as e:
                self._rejected("upload", e)
                raise
            self._swap(new_store, "upload")
        logger.info(f"Uploaded {node.kind} {node.path} ({node.size} bytes)")
        return node

    def complete_upload(self, node_id: str, data_url: str) -> Optional[FileNode]:
        """Attach a decoded upload payload to a node.

        If the node has been deleted in the meantime the payload is dropped.

        Args:
            node_id: Node the payload belongs to.
            data_url: The ``data:`` URL produced by the decoder.

        Returns:
            The updated node, or None if it no longer exists.

        Raises:
            NodeValidationError: If the payload cannot be decoded.
        """
        with self._operation_lock:
            node = self.store.get(node_id)
            if node is None:
                logger.debug(f"Dropping upload payload for deleted node {node_id}")
                return None
            fields = payload_for(node.kind, data_url)
            self._swap(apply_upload_payload(self.store, node_id, **fields), "complete_upload")
            return self.store.get(node_id)

    def rename_node(self, node_id: str, new_name: str) -> FileNode:
        """Rename a node, cascading the path change to its descendants.

        Returns:
            The renamed node.
        """
        with self._operation_lock:
            try:
                new_store = rename_node(self.store, node_id, new_name)
            except FileSystemError as e:
                self._rejected("rename", e)
                raise
            old_path = self.store.require(node_id).path
            self._swap(new_store, "rename")
            node = new_store.require(node_id)
            self._follow(old_path, node.path)
        logger.info(f"Renamed {old_path} to {node.path}")
        return node

    def move_node(self, node_id: str, destination_path: str) -> FileNode:
        """Move a node into ``destination_path``, cascading the path change.

        Returns:
            The moved node.
        """
        with self._operation_lock:
            try:
                new_store = move_node(self.store, node_id, destination_path)
            except FileSystemError as e:
                self._rejected("move", e)
                raise
            old_path = self.store.require(node_id).path
            self._swap(new_store, "move")
            node = new_store.require(node_id)
            self._follow(old_path, node.path)
        logger.info(f"Moved {old_path} to {node.path}")
        return node

    def delete_nodes(self, node_ids: list[str]) -> set[str]:
        """Delete nodes (and folder subtrees) and clear the selection.

        Missing ids are ignored. If the current directory was removed the
        view falls back to the root.

        Returns:
            Ids of every removed node.
        """
        with self._operation_lock:
            new_store, removed = delete_nodes(self.store, node_ids)
            self._swap(new_store, "delete")
            self.selection.clear()
            if self.current_path != ROOT_PATH and new_store.find_by_path(self.current_path) is None:
                self.current_path = ROOT_PATH
                self.search_term = ""
        logger.info(f"Deleted {len(removed)} nodes ({len(node_ids)} requested)")
        return removed

    # ===== Selection =====

    def toggle_selection(self, node_id: str) -> bool:
        """Toggle ``node_id`` in the selection; return whether it is now selected."""
        with self._operation_lock:
            return self.selection.toggle(node_id)

    def select_range(self, node_ids: list[str]) -> None:
        """Add every id in ``node_ids`` to the selection."""
        with self._operation_lock:
            self.selection.select_range(node_ids)

    def select_between(self, anchor_id: str, target_id: str) -> list[str]:
        """Select the contiguous run between two entries of the current listing.

        Returns:
            The ids that were added.
        """
        with self._operation_lock:
            run = Selection.range_between(self.current_files(), anchor_id, target_id)
            self.selection.select_range(run)
        return run

    def clear_selection(self) -> bool:
        """Clear the selection; return whether anything was removed."""
        with self._operation_lock:
            return self.selection.clear()

    def selected_ids(self) -> list[str]:
        """Return selected ids in the order they were added."""
        return list(self.selection.selected)

    # ===== Read accessors =====

    def current_files(self) -> list[FileNode]:
        """Return the projected listing of the current directory."""
        return project_directory(
            self.store, self.current_path, self.search_term, self.sort_config
        )

    def folder_paths(self) -> list[str]:
        """Return ``/`` and every folder path, sorted, for move destinations."""
        return self.store.list_folder_paths()

    def breadcrumbs(self) -> list[tuple[str, str]]:
        """Return ``(name, path)`` pairs leading to the current directory."""
        return split_breadcrumbs(self.current_path)

    def default_move_destination(self, node_id: str) -> str:
        """Return the folder a move dialog should preselect (the node's parent)."""
        return parent_path(self.store.require(node_id).path)

    def get_node(self, node_id: str) -> FileNode:
        """Return a node by id.

        Raises:
            NodeNotFoundError: If it does not exist.
        """
        return self.store.require(node_id)

    def get_snapshot(self) -> dict[str, Any]:
        """Return store contents plus the view state for API responses."""
        return {
            **self.store.get_snapshot(),
            "current_path": self.current_path,
            "search_term": self.search_term,
            "sort_config": self.sort_config.model_dump(),
            "selected_ids": self.selected_ids(),
            "is_loading": self.loading,
        }

    def validate(self) -> list[str]:
        """Return store invariant violations plus view state problems."""
        errors = self.store.validate_state()
        if self.current_path != ROOT_PATH:
            node = self.store.find_by_path(self.current_path)
            if node is None or not node.is_folder:
                errors.append(f"current_path {self.current_path} is not a folder")
        return errors
