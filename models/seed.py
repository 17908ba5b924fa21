"""Initial dataset the store is populated from on load."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from models.file_node import ROOT_PATH, FileKind, FileNode, join_path
from models.node_store import NodeStore

# (parent path, name, kind, size in bytes, age in days, text content)
SEED_ENTRIES: list[tuple[str, str, FileKind, int, int, Optional[str]]] = [
    ("/", "Documents", "folder", 0, 30, None),
    ("/", "Images", "folder", 0, 28, None),
    ("/", "Projects", "folder", 0, 20, None),
    ("/", "readme.txt", "text", 154, 2, "Welcome to your virtual file manager.\n"),
    ("/", "archive.zip", "other", 5_242_880, 45, None),
    ("/Documents", "Reports", "folder", 0, 14, None),
    ("/Documents", "resume.pdf", "pdf", 248_320, 60, None),
    ("/Documents", "notes.txt", "text", 96, 1, "Buy milk.\nCall the bank.\n"),
    ("/Documents/Reports", "q1-summary.pdf", "pdf", 1_048_576, 10, None),
    ("/Documents/Reports", "q2-draft.txt", "text", 512, 3, "Q2 draft: revenue up 4%.\n"),
    ("/Images", "vacation.jpg", "image", 2_457_600, 90, None),
    ("/Images", "logo.png", "image", 40_960, 12, None),
    ("/Projects", "website", "folder", 0, 7, None),
    ("/Projects/website", "index.html", "text", 2_048, 5, "<h1>Hello</h1>\n"),
    ("/Projects/website", "assets", "folder", 0, 5, None),
    ("/Projects/website/assets", "banner.png", "image", 120_000, 5, None),
]


def build_seed_nodes(now: Optional[datetime] = None) -> list[FileNode]:
    """Build the seed nodes with fresh ids and consistent paths.

    Args:
        now: Reference time; ages in ``SEED_ENTRIES`` are subtracted from it.

    Returns:
        Nodes in an order where every parent precedes its children.
    """
    now = now or datetime.now(timezone.utc)
    ids_by_path: dict[str, str] = {}
    nodes: list[FileNode] = []
    for parent, name, kind, size, age_days, content in SEED_ENTRIES:
        path = join_path(parent, name)
        node = FileNode(
            id=str(uuid4()),
            name=name,
            kind=kind,
            path=path,
            parent_id=None if parent == ROOT_PATH else ids_by_path[parent],
            modified_at=now - timedelta(days=age_days),
            size=size,
            content=content,
        )
        ids_by_path[path] = node.id
        nodes.append(node)
    return nodes


def build_seed_store(now: Optional[datetime] = None) -> NodeStore:
    """Return a fresh store populated from the seed list."""
    return NodeStore.from_nodes(build_seed_nodes(now))
