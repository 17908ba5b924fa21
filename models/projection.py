"""Directory listing projection: membership, search and sort."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from models.file_node import FileNode
from models.node_store import NodeStore

SortKey = Literal["name", "modified_at", "size"]
SortDirection = Literal["ascending", "descending"]


class SortConfig(BaseModel):
    """Column sort configuration for directory listings.

    Args:
        key: Field to compare within the folder and file groups.
        direction: ascending or descending.
    """

    key: SortKey = Field(default="name", description="Field to sort by")
    direction: SortDirection = Field(default="ascending", description="Sort direction")


def _sort_value(node: FileNode, key: SortKey):
    if key == "name":
        return node.name.lower()
    if key == "modified_at":
        return node.modified_at.timestamp()
    return node.size


def sort_nodes(nodes: list[FileNode], sort_config: SortConfig) -> list[FileNode]:
    """Sort nodes with folders first, then by the configured key.

    Direction applies only inside the folder and file groups. Ties keep their
    incoming order in both directions.

    Args:
        nodes: Nodes to sort.
        sort_config: Key and direction.

    Returns:
        A new sorted list.
    """
    folders = [n for n in nodes if n.is_folder]
    files = [n for n in nodes if not n.is_folder]
    # Python's sort is stable with reverse=True as well, so equal keys never swap.
    reverse = sort_config.direction == "descending"
    key = sort_config.key
    folders.sort(key=lambda n: _sort_value(n, key), reverse=reverse)
    files.sort(key=lambda n: _sort_value(n, key), reverse=reverse)
    return folders + files


def filter_by_name(nodes: list[FileNode], search_term: str) -> list[FileNode]:
    """Keep nodes whose name contains ``search_term`` (case-insensitive).

    The term is matched as given; only the empty string disables the filter.
    """
    if not search_term:
        return list(nodes)
    term = search_term.lower()
    return [n for n in nodes if term in n.name.lower()]


def project_directory(
    store: NodeStore,
    directory_path: str,
    search_term: str = "",
    sort_config: Optional[SortConfig] = None,
) -> list[FileNode]:
    """Derive the visible listing of a directory.

    Args:
        store: Snapshot to read from.
        directory_path: ``/`` or an existing folder path.
        search_term: Optional case-insensitive name filter.
        sort_config: Sort configuration (defaults to name ascending).

    Returns:
        Folder-first, filtered, sorted children of ``directory_path``.

    Raises:
        NodeNotFoundError: If ``directory_path`` is not a folder.
    """
    parent_id = store.directory_id(directory_path)
    members = store.children_of(parent_id)
    return sort_nodes(filter_by_name(members, search_term), sort_config or SortConfig())
