"""Virtual file manager data models package.

This package contains the node model, the immutable node store, the mutation
engine that keeps materialized paths consistent, the directory projection,
selection state, and the FileManager façade that ties them together.
"""

from models.errors import (
    CyclicMoveError,
    FileSystemError,
    NodeNotFoundError,
    NodeValidationError,
    PathCollisionError,
    SuggestionError,
)
from models.file_node import ROOT_PATH, FileKind, FileNode
from models.node_store import NodeStore
from models.projection import SortConfig
from models.selection import Selection
from models.file_manager import FileManager

__all__ = [
    "CyclicMoveError",
    "FileSystemError",
    "NodeNotFoundError",
    "NodeValidationError",
    "PathCollisionError",
    "SuggestionError",
    "ROOT_PATH",
    "FileKind",
    "FileNode",
    "NodeStore",
    "SortConfig",
    "Selection",
    "FileManager",
]
