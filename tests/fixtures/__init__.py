"""Shared test fixtures and factories."""

from tests.fixtures.nodes import (
    BASIC_TREE,
    FIXED_TIME,
    create_file_node,
    create_store,
    node_id_for,
)
from tests.fixtures.manager import create_file_manager

__all__ = [
    "BASIC_TREE",
    "FIXED_TIME",
    "create_file_node",
    "create_store",
    "node_id_for",
    "create_file_manager",
]
