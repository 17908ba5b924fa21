"""Node store snapshot and path resolver."""

from collections.abc import Iterable
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from models.errors import NodeNotFoundError
from models.file_node import ROOT_PATH, FileNode, is_within, join_path, path_segments


class NodeStore(BaseModel):
    """Immutable snapshot of every file and folder record.

    The store is the single owner of node data. ``parent_id`` is only a
    lookup key; children and descendants are derived from a secondary index
    built when the snapshot is created. Mutations never edit a snapshot in
    place: the mutation engine builds a new mapping and wraps it with
    ``with_nodes()``, so anyone holding an older snapshot keeps a consistent
    view.

    Args:
        nodes: All nodes indexed by id, in insertion order.

    Example:
        >>> store = NodeStore.from_nodes([docs, readme])
        >>> store.find_by_path("/docs").id == docs.id
        True
        >>> store.list_folder_paths()
        ['/', '/docs']
    """

    model_config = ConfigDict(frozen=True)

    nodes: dict[str, FileNode] = Field(
        default_factory=dict, description="All nodes indexed by id"
    )

    _by_path: dict[str, str] = PrivateAttr(default_factory=dict)
    _children: dict[Optional[str], list[str]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        """Build the path and parent indexes for this snapshot.

        Args:
            __context: Pydantic context (unused).
        """
        by_path: dict[str, str] = {}
        children: dict[Optional[str], list[str]] = {}
        for node_id, node in self.nodes.items():
            by_path.setdefault(node.path, node_id)
            children.setdefault(node.parent_id, []).append(node_id)
        self._by_path = by_path
        self._children = children

    @classmethod
    def from_nodes(cls, nodes: Iterable[FileNode]) -> "NodeStore":
        """Create a store from an iterable of nodes, keyed by their ids."""
        return cls(nodes={node.id: node for node in nodes})

    def with_nodes(self, nodes: dict[str, FileNode]) -> "NodeStore":
        """Return a new snapshot holding ``nodes``; this snapshot is unchanged."""
        return NodeStore(nodes=nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def all_nodes(self) -> list[FileNode]:
        """Return every node in insertion order."""
        return list(self.nodes.values())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def get(self, node_id: str) -> Optional[FileNode]:
        """Return the node with ``node_id`` or None."""
        return self.nodes.get(node_id)

    def require(self, node_id: str) -> FileNode:
        """Return the node with ``node_id``.

        Raises:
            NodeNotFoundError: If no such node exists.
        """
        node = self.nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id=node_id)
        return node

    def find_by_path(self, path: str) -> Optional[FileNode]:
        """Return the node whose path equals ``path``.

        The virtual root ``/`` never resolves to a node.
        """
        if path == ROOT_PATH:
            return None
        node_id = self._by_path.get(path)
        if node_id is None:
            return None
        return self.nodes[node_id]

    def directory_id(self, path: str) -> Optional[str]:
        """Resolve a folder path to the id used as ``parent_id`` by its children.

        Args:
            path: ``/`` or the path of an existing folder.

        Returns:
            The folder's id, or None for the virtual root.

        Raises:
            NodeNotFoundError: If ``path`` is not the root and not a folder.
        """
        if path == ROOT_PATH:
            return None
        node = self.find_by_path(path)
        if node is None or not node.is_folder:
            raise NodeNotFoundError(path=path)
        return node.id

    def list_folder_paths(self) -> list[str]:
        """Return ``/`` plus every folder path, sorted lexicographically."""
        return sorted([ROOT_PATH] + [n.path for n in self.nodes.values() if n.is_folder])

    def children_of(self, parent_id: Optional[str]) -> list[FileNode]:
        """Return nodes whose ``parent_id`` equals ``parent_id`` (None for root)."""
        return [self.nodes[child_id] for child_id in self._children.get(parent_id, [])]

    def descendants_of(self, node_id: str) -> list[FileNode]:
        """Return every node reachable by following ``parent_id`` links down from ``node_id``."""
        found: list[FileNode] = []
        pending = list(self._children.get(node_id, []))
        seen: set[str] = set()
        while pending:
            child_id = pending.pop()
            if child_id in seen:
                continue
            seen.add(child_id)
            found.append(self.nodes[child_id])
            pending.extend(self._children.get(child_id, []))
        return found

    def subtree_ids(self, node_id: str) -> set[str]:
        """Return ``node_id`` plus the ids of every node below it by path prefix."""
        node = self.require(node_id)
        ids = {node.id}
        if node.is_folder:
            ids.update(n.id for n in self.nodes.values() if is_within(n.path, node.path))
        return ids

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the store for API responses."""
        folder_count = sum(1 for n in self.nodes.values() if n.is_folder)
        return {
            "nodes": [n.model_dump(mode="json") for n in self.nodes.values()],
            "node_count": len(self.nodes),
            "folder_count": folder_count,
            "file_count": len(self.nodes) - folder_count,
        }

    def validate_state(self) -> list[str]:
        """Check the structural invariants and return any violations.

        Checks:
        - every path is unique
        - every path equals the parent's path joined with the node's name
        - ``parent_id`` is None exactly for single-segment paths
        - parents exist and are folders
        - descendants by path prefix match descendants by parent links
        - no node is its own ancestor

        Returns:
            List of violation messages (empty list if consistent).
        """
        errors: list[str] = []

        seen_paths: dict[str, str] = {}
        for node in self.nodes.values():
            if node.path in seen_paths:
                errors.append(
                    f"Duplicate path {node.path} on nodes {seen_paths[node.path]} and {node.id}"
                )
            else:
                seen_paths[node.path] = node.id

        for node in self.nodes.values():
            if "/" in node.name:
                errors.append(f"Node {node.id} name contains a separator: {node.name!r}")
            top_level = len(path_segments(node.path)) == 1
            if (node.parent_id is None) != top_level:
                errors.append(
                    f"Node {node.id} parent_id {node.parent_id!r} disagrees with path {node.path}"
                )
            if node.parent_id is None:
                expected = join_path(ROOT_PATH, node.name)
            else:
                parent = self.nodes.get(node.parent_id)
                if parent is None:
                    errors.append(f"Node {node.id} references missing parent {node.parent_id}")
                    continue
                if not parent.is_folder:
                    errors.append(f"Node {node.id} parent {parent.id} is not a folder")
                expected = join_path(parent.path, node.name)
            if node.path != expected:
                errors.append(f"Node {node.id} path {node.path} should be {expected}")

        for node in self.nodes.values():
            ancestor_id = node.parent_id
            visited = {node.id}
            while ancestor_id is not None:
                if ancestor_id in visited:
                    errors.append(f"Node {node.id} is its own ancestor")
                    break
                visited.add(ancestor_id)
                ancestor = self.nodes.get(ancestor_id)
                if ancestor is None:
                    break
                ancestor_id = ancestor.parent_id

        for folder in (n for n in self.nodes.values() if n.is_folder):
            by_prefix = {n.id for n in self.nodes.values() if is_within(n.path, folder.path)}
            by_links = {n.id for n in self.descendants_of(folder.id)}
            if by_prefix != by_links:
                errors.append(
                    f"Folder {folder.path} descendants diverge: "
                    f"prefix-only {sorted(by_prefix - by_links)}, "
                    f"link-only {sorted(by_links - by_prefix)}"
                )

        return errors
