"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared FileManager and the location suggester.
"""

from typing import Annotated

from fastapi import Depends

from models.file_manager import FileManager
from models.node_store import NodeStore
from models.suggestion import LocationSuggester


# Global state
# One FileManager per process, seeded on startup and held for the session
_file_manager: FileManager | None = None
_location_suggester: LocationSuggester | None = None


def get_file_manager() -> FileManager:
    """Get the shared FileManager instance.

    Returns:
        The shared FileManager instance.

    Raises:
        RuntimeError: If the manager hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(manager: FileManagerDep):
            return {"path": manager.current_path}
    """
    if _file_manager is None:
        raise RuntimeError(
            "FileManager not initialized. Call initialize_file_manager() first."
        )

    return _file_manager


def initialize_file_manager(store: NodeStore | None = None) -> FileManager:
    """Initialize the shared FileManager instance.

    This should be called once when the FastAPI app starts up. The manager
    is loaded from the seed dataset unless a store is given.

    Args:
        store: Optional store to load instead of the seed dataset.

    Returns:
        The newly created FileManager instance.
    """
    global _file_manager

    manager = FileManager()
    manager.load(store)
    _file_manager = manager

    return _file_manager


def shutdown_file_manager() -> None:
    """Drop the shared FileManager and suggester.

    This should be called when the FastAPI app shuts down.
    """
    global _file_manager, _location_suggester

    _file_manager = None
    _location_suggester = None


def get_location_suggester() -> LocationSuggester:
    """Get the shared LocationSuggester, creating it from the environment on first use.

    Returns:
        The shared LocationSuggester instance.
    """
    global _location_suggester

    if _location_suggester is None:
        _location_suggester = LocationSuggester()

    return _location_suggester


# Type aliases for dependency injection
FileManagerDep = Annotated[FileManager, Depends(get_file_manager)]
LocationSuggesterDep = Annotated[LocationSuggester, Depends(get_location_suggester)]
