"""Mutation engine for the node store.

Each operation takes the current ``NodeStore`` and returns a new snapshot, or
raises a ``FileSystemError`` subclass without touching its input. The new
mapping is built completely before it is wrapped in a store.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from models.errors import (
    CyclicMoveError,
    NodeValidationError,
    PathCollisionError,
)
from models.file_node import (
    FileKind,
    FileNode,
    is_within,
    join_path,
    parent_path,
    rebase_path,
)
from models.node_store import NodeStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_name(name: str) -> str:
    """Check that ``name`` can be used as a path segment.

    Args:
        name: Proposed node name.

    Returns:
        The name with surrounding whitespace removed.

    Raises:
        NodeValidationError: If the name is empty or contains a separator.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise NodeValidationError("Name cannot be empty.", name=name)
    if "/" in cleaned:
        raise NodeValidationError(f"Name cannot contain '/': {name!r}", name=name)
    if cleaned in (".", ".."):
        raise NodeValidationError(f"Name is reserved: {name!r}", name=name)
    return cleaned


def _cascade(
    nodes: dict[str, FileNode], folder: FileNode, new_path: str
) -> None:
    """Rewrite the path of every node below ``folder`` to sit under ``new_path``.

    Operates on the working copy ``nodes``; visits every depth, not just
    direct children.
    """
    old_path = folder.path
    for node_id, node in nodes.items():
        if node_id != folder.id and is_within(node.path, old_path):
            nodes[node_id] = node.model_copy(
                update={"path": rebase_path(node.path, old_path, new_path)}
            )


def create_node(
    store: NodeStore,
    directory_path: str,
    name: str,
    kind: FileKind,
    *,
    now: Optional[datetime] = None,
    node_id: Optional[str] = None,
) -> tuple[NodeStore, FileNode]:
    """Create an empty file or folder inside ``directory_path``.

    Args:
        store: Current snapshot.
        directory_path: ``/`` or the path of an existing folder.
        name: Name of the new node.
        kind: Kind of the new node.
        now: Creation timestamp (defaults to current UTC time).
        node_id: Identifier to assign (defaults to a fresh UUID).

    Returns:
        Tuple of (new snapshot, created node).

    Raises:
        NodeValidationError: If ``name`` is empty or invalid.
        NodeNotFoundError: If ``directory_path`` is not a folder.
        PathCollisionError: If the target path is already occupied.
    """
    name = validate_name(name)
    parent_id = store.directory_id(directory_path)
    path = join_path(directory_path, name)
    if store.find_by_path(path) is not None:
        raise PathCollisionError(path)

    node = FileNode(
        id=node_id or str(uuid4()),
        name=name,
        kind=kind,
        path=path,
        parent_id=parent_id,
        modified_at=now or _utcnow(),
        size=0,
        content="" if kind == "text" else None,
    )
    nodes = dict(store.nodes)
    nodes[node.id] = node
    return store.with_nodes(nodes), node


def insert_node(
    store: NodeStore, directory_path: str, node: FileNode
) -> tuple[NodeStore, FileNode]:
    """Insert a pre-built node (from the upload collaborator) into ``directory_path``.

    The node keeps its id, kind, size and timestamp; its ``path`` and
    ``parent_id`` are recomputed from the directory. Validation and collision
    rules are the same as for ``create_node``.

    Raises:
        NodeValidationError: If the node's name is invalid or its id is taken.
        NodeNotFoundError: If ``directory_path`` is not a folder.
        PathCollisionError: If the target path is already occupied.
    """
    name = validate_name(node.name)
    if node.id in store:
        raise NodeValidationError(f"Node id '{node.id}' is already in use", name=name)
    parent_id = store.directory_id(directory_path)
    path = join_path(directory_path, name)
    if store.find_by_path(path) is not None:
        raise PathCollisionError(path)

    placed = node.model_copy(update={"name": name, "path": path, "parent_id": parent_id})
    nodes = dict(store.nodes)
    nodes[placed.id] = placed
    return store.with_nodes(nodes), placed


def rename_node(
    store: NodeStore,
    node_id: str,
    new_name: str,
    *,
    now: Optional[datetime] = None,
) -> NodeStore:
    """Rename a node in place and cascade the new path to its descendants.

    Args:
        store: Current snapshot.
        node_id: Node to rename.
        new_name: New last path segment.
        now: Modification timestamp (defaults to current UTC time).

    Returns:
        The new snapshot.

    Raises:
        NodeValidationError: If ``new_name`` is empty or invalid.
        NodeNotFoundError: If ``node_id`` does not exist.
        PathCollisionError: If another node already has the new path.
    """
    new_name = validate_name(new_name)
    node = store.require(node_id)
    new_path = join_path(parent_path(node.path), new_name)
    occupant = store.find_by_path(new_path)
    if occupant is not None and occupant.id != node.id:
        raise PathCollisionError(new_path)

    nodes = dict(store.nodes)
    if node.is_folder:
        _cascade(nodes, node, new_path)
    nodes[node.id] = node.model_copy(
        update={"name": new_name, "path": new_path, "modified_at": now or _utcnow()}
    )
    return store.with_nodes(nodes)


def move_node(
    store: NodeStore,
    node_id: str,
    destination_path: str,
    *,
    now: Optional[datetime] = None,
) -> NodeStore:
    """Move a node into another folder, cascading the path change.

    Args:
        store: Current snapshot.
        node_id: Node to move.
        destination_path: ``/`` or the path of an existing folder.
        now: Modification timestamp (defaults to current UTC time).

    Returns:
        The new snapshot.

    Raises:
        NodeNotFoundError: If the node or the destination folder is missing.
        CyclicMoveError: If a folder would land inside itself.
        PathCollisionError: If the destination already holds that name.
    """
    node = store.require(node_id)
    destination_id = store.directory_id(destination_path)

    if node.is_folder and (
        destination_path == node.path or is_within(destination_path, node.path)
    ):
        raise CyclicMoveError(node.path, destination_path)

    new_path = join_path(destination_path, node.name)
    if store.find_by_path(new_path) is not None:
        raise PathCollisionError(new_path)

    nodes = dict(store.nodes)
    if node.is_folder:
        _cascade(nodes, node, new_path)
    nodes[node.id] = node.model_copy(
        update={
            "path": new_path,
            "parent_id": destination_id,
            "modified_at": now or _utcnow(),
        }
    )
    return store.with_nodes(nodes)


def delete_nodes(
    store: NodeStore, node_ids: list[str]
) -> tuple[NodeStore, set[str]]:
    """Remove nodes and, for folders, their whole subtree in a single step.

    Ids that are not present are skipped so a batch delete tolerates items
    that were already removed.

    Args:
        store: Current snapshot.
        node_ids: Ids to delete.

    Returns:
        Tuple of (new snapshot, ids actually removed). When nothing was
        removed the input snapshot is returned as-is.
    """
    removed: set[str] = set()
    for node_id in node_ids:
        if node_id in store and node_id not in removed:
            removed.update(store.subtree_ids(node_id))

    if not removed:
        return store, removed

    nodes = {nid: n for nid, n in store.nodes.items() if nid not in removed}
    return store.with_nodes(nodes), removed


def apply_upload_payload(
    store: NodeStore,
    node_id: str,
    *,
    content: Optional[str] = None,
    url: Optional[str] = None,
    now: Optional[datetime] = None,
) -> NodeStore:
    """Attach decoded upload content to a node.

    If the node was deleted while its payload was being decoded, the update
    is dropped and the input snapshot is returned unchanged.

    Args:
        store: Current snapshot.
        node_id: Node that the payload belongs to.
        content: Decoded text payload.
        url: Inline binary reference (data URL).
        now: Modification timestamp (defaults to current UTC time).

    Returns:
        The new snapshot, or ``store`` itself if the node is gone.
    """
    node = store.get(node_id)
    if node is None:
        return store

    update: dict[str, object] = {"modified_at": now or _utcnow()}
    if content is not None:
        update["content"] = content
    if url is not None:
        update["url"] = url

    nodes = dict(store.nodes)
    nodes[node_id] = node.model_copy(update=update)
    return store.with_nodes(nodes)
