"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# so suggestion service settings are available before fixtures are created
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from the fixture modules
pytest_plugins = [
    "tests.fixtures.nodes",
    "tests.fixtures.manager",
    "tests.fixtures.api",
]
