"""Main entry point for the virtual file manager FastAPI application.

This module creates and configures the FastAPI app instance that serves the REST API
for browsing and editing an in-memory file tree.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_file_manager, shutdown_file_manager
from api.exceptions import (
    file_system_error_handler,
    generic_exception_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import files as files_routes
from api.routes import suggestions as suggestions_routes
from models.errors import FileSystemError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Seeds the shared FileManager at startup and drops it at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    print("🚀 Starting file manager - seeding the virtual file system...")
    manager = initialize_file_manager()
    print(f"✅ FileManager ready with {len(manager.store)} nodes")

    yield

    print("🛑 Shutting down file manager...")
    shutdown_file_manager()
    print("✅ Shutdown complete")


app = FastAPI(
    title="Virtual File Manager",
    description="API for browsing and editing an in-memory hierarchical file system",
    version="0.1.0",
    lifespan=lifespan,
)

# Specific exceptions before general ones
app.add_exception_handler(FileSystemError, file_system_error_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(files_routes.router)
app.include_router(suggestions_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Virtual File Manager API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
