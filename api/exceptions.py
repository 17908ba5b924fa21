"""Exception handlers for the file manager FastAPI application.

This module converts the virtual file system error taxonomy and generic
Python exceptions into consistent JSON responses of the form
``{"error": ..., "detail": ..., "type": ...}``.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import (
    CyclicMoveError,
    FileSystemError,
    NodeNotFoundError,
    NodeValidationError,
    PathCollisionError,
    SuggestionError,
)

logger = logging.getLogger(__name__)


# Status code and title for each domain error, most specific first
_FILE_SYSTEM_ERRORS: list[tuple[type[FileSystemError], int, str]] = [
    (NodeValidationError, status.HTTP_400_BAD_REQUEST, "Invalid Name"),
    (NodeNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (PathCollisionError, status.HTTP_409_CONFLICT, "Path Collision"),
    (CyclicMoveError, status.HTTP_409_CONFLICT, "Cyclic Move"),
    (SuggestionError, status.HTTP_502_BAD_GATEWAY, "Suggestion Failed"),
]


async def file_system_error_handler(request: Request, exc: FileSystemError):
    """Handle FileSystemError and its subclasses.

    Maps each error class to its status code; attributes such as the
    offending path or node id are included when present.

    Args:
        request: The incoming request that triggered the error.
        exc: The FileSystemError exception.

    Returns:
        JSONResponse with the mapped status and error details.
    """
    status_code, title = status.HTTP_400_BAD_REQUEST, "File System Error"
    for error_cls, code, name in _FILE_SYSTEM_ERRORS:
        if isinstance(exc, error_cls):
            status_code, title = code, name
            break

    content = {
        "error": title,
        "detail": exc.message,
        "type": type(exc).__name__,
    }
    for attribute in ("path", "node_id", "source_path", "destination_path"):
        value = getattr(exc, attribute, None)
        if value is not None:
            content[attribute] = value

    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised inside route handlers.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions without exposing stack traces.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
