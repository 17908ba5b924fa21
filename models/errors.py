"""Error taxonomy for the virtual file system.

Every mutation either succeeds with a new snapshot or raises one of these
errors with the previous snapshot untouched. The API layer maps each class
to an HTTP status in api/exceptions.py.
"""


class FileSystemError(Exception):
    """Base class for all virtual file system errors.

    Args:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NodeValidationError(FileSystemError):
    """Raised when a supplied name or payload is invalid.

    Args:
        message: Description of the validation failure.
        name: The offending name, if any.
    """

    def __init__(self, message: str, name: str | None = None):
        self.name = name
        super().__init__(message)


class PathCollisionError(FileSystemError):
    """Raised when the target path of a create, rename or move is occupied.

    Args:
        path: The occupied path.
    """

    def __init__(self, path: str):
        self.path = path
        name = path.rsplit("/", 1)[-1]
        super().__init__(f'An item named "{name}" already exists at {path}')


class NodeNotFoundError(FileSystemError):
    """Raised when a node id or folder path does not resolve.

    Args:
        node_id: The missing node id, if the lookup was by id.
        path: The missing folder path, if the lookup was by path.
    """

    def __init__(self, node_id: str | None = None, path: str | None = None):
        self.node_id = node_id
        self.path = path
        if node_id is not None:
            message = f"Node '{node_id}' not found"
        else:
            message = f"Folder '{path}' does not exist"
        super().__init__(message)


class CyclicMoveError(FileSystemError):
    """Raised when a folder would be moved into itself or its own subtree.

    Args:
        source_path: Path of the folder being moved.
        destination_path: Requested destination folder.
    """

    def __init__(self, source_path: str, destination_path: str):
        self.source_path = source_path
        self.destination_path = destination_path
        super().__init__(
            f"Cannot move folder '{source_path}' into itself or one of its "
            f"subfolders ('{destination_path}')"
        )


class SuggestionError(FileSystemError):
    """Raised when the location suggestion service fails.

    Args:
        message: Description of the failure.
        status_code: HTTP status returned by the service, if any.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
