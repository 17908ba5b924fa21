"""File node model and path helpers."""

from datetime import datetime
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

ROOT_PATH = "/"

FileKind = Literal["folder", "image", "pdf", "text", "other"]

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


class FileNode(BaseModel):
    """A single file or folder record in the node store.

    Nodes are immutable; structural edits produce updated copies through
    ``model_copy(update=...)`` so an older store snapshot never changes
    underneath a reader.

    Args:
        id: Opaque unique identifier, fixed for the node's lifetime.
        name: Display name, the last path segment.
        kind: One of folder, image, pdf, text, other.
        path: Absolute materialized path from the virtual root.
        parent_id: Id of the containing folder, None for top-level nodes.
        modified_at: When the node was created, renamed, moved or filled.
        size: Byte count, 0 for folders and new empty files.
        content: Inline text payload for previewable text nodes.
        url: Inline binary reference for previewable image/pdf nodes.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: str(uuid4()), description="Unique node identifier"
    )
    name: str = Field(min_length=1, description="Last path segment")
    kind: FileKind = Field(description="Node kind")
    path: str = Field(description="Absolute materialized path")
    parent_id: Optional[str] = Field(
        default=None, description="Containing folder id, None at root"
    )
    modified_at: datetime = Field(description="Last structural or content change")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    content: Optional[str] = Field(default=None, description="Inline text payload")
    url: Optional[str] = Field(default=None, description="Inline binary reference")

    @property
    def is_folder(self) -> bool:
        """Return True if this node is a folder."""
        return self.kind == "folder"

    @property
    def depth(self) -> int:
        """Number of path segments (1 for top-level nodes)."""
        return len(path_segments(self.path))


def join_path(directory: str, name: str) -> str:
    """Build the path of ``name`` inside ``directory``.

    Args:
        directory: Absolute folder path, ``/`` for the virtual root.
        name: Child name.

    Returns:
        ``/name`` at the root, ``directory/name`` elsewhere.
    """
    if directory == ROOT_PATH:
        return f"/{name}"
    return f"{directory}/{name}"


def parent_path(path: str) -> str:
    """Return the path of the folder containing ``path`` (``/`` for top-level)."""
    head = path[: path.rfind("/")]
    return head or ROOT_PATH


def path_segments(path: str) -> list[str]:
    """Split an absolute path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def is_within(path: str, ancestor: str) -> bool:
    """Check whether ``path`` lies strictly below ``ancestor``.

    Matching requires a separating slash, so ``/docs2`` is not within
    ``/docs``. Everything is within the virtual root.

    Args:
        path: Candidate descendant path.
        ancestor: Candidate ancestor folder path.

    Returns:
        True if ``path`` starts with ``ancestor + "/"``.
    """
    if ancestor == ROOT_PATH:
        return path != ROOT_PATH
    return path.startswith(ancestor + "/")


def rebase_path(path: str, old_prefix: str, new_prefix: str) -> str:
    """Replace the ``old_prefix`` folder at the head of ``path`` with ``new_prefix``."""
    return new_prefix + path[len(old_prefix):]


def split_breadcrumbs(path: str) -> list[tuple[str, str]]:
    """Return ``(name, path)`` pairs from the first segment down to ``path``.

    Example:
        >>> split_breadcrumbs("/docs/reports")
        [('docs', '/docs'), ('reports', '/docs/reports')]
    """
    crumbs = []
    current = ROOT_PATH
    for segment in path_segments(path):
        current = join_path(current, segment)
        crumbs.append((segment, current))
    return crumbs


def format_size(num_bytes: int) -> str:
    """Render a byte count as a short human-readable string (base 1024)."""
    if num_bytes <= 0:
        return "0 B"
    index = 0
    while num_bytes >= 1024 ** (index + 1) and index < len(_SIZE_UNITS) - 1:
        index += 1
    value = round(num_bytes / (1024**index), 2)
    return f"{value:g} {_SIZE_UNITS[index]}"


def kind_from_mime_type(mime_type: str) -> FileKind:
    """Map an upload MIME type to a node kind."""
    if mime_type.startswith("image/"):
        return "image"
    if mime_type == "application/pdf":
        return "pdf"
    if mime_type.startswith("text/"):
        return "text"
    return "other"
