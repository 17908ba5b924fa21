"""Shared fixtures for API integration tests.

This module provides TestClient setup with FileManager and LocationSuggester
dependency injection.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_file_manager, get_location_suggester
from main import app
from models.suggestion import LocationSuggester


@pytest.fixture
def client_with_manager(file_manager):
    """Provide a TestClient with a fresh FileManager injected.

    Uses FastAPI's dependency override system to inject the test manager
    (loaded with the BASIC_TREE store) instead of the global one.

    Yields:
        A tuple of (TestClient, FileManager) for testing.

    Example:
        def test_something(client_with_manager):
            client, manager = client_with_manager
            response = client.get("/files/listing")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_file_manager] = lambda: file_manager
    client = TestClient(app)

    yield client, file_manager

    app.dependency_overrides.clear()


@pytest.fixture
def client_with_suggester():
    """Provide a TestClient with a configured LocationSuggester injected.

    Yields:
        A tuple of (TestClient, LocationSuggester); patch ``requests.post``
        to control the service response.
    """
    suggester = LocationSuggester(api_url="https://suggest.test/v1", api_key="test-key")
    app.dependency_overrides[get_location_suggester] = lambda: suggester
    client = TestClient(app)

    yield client, suggester

    app.dependency_overrides.clear()
