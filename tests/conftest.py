# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any application imports
# - Provides a fresh MetadataStore, an in-memory repository, a logger and
#   a TestClient over the full application
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from lib.logger import LoggerService
from lib.repository import InMemoryRepository
from swagger_docs import MetadataStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty metadata store for classes declared inside a test."""
    return MetadataStore()


@pytest.fixture
def repository():
    """Empty in-memory users repository."""
    repo = InMemoryRepository("users")
    yield repo
    repo.clean()


@pytest.fixture
def logger():
    """Logger service used by services under test."""
    return LoggerService("tests")


@pytest.fixture
def app(repository):
    """Full application backed by the in-memory repository."""
    from app.main import create_app

    return create_app(repository=repository)


@pytest.fixture
def client(app):
    """HTTP client; the lifespan (connect/disconnect) runs around each test."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_user_data():
    """Valid CreateUserDto payload (camelCase, as sent by clients)."""
    return {
        "email": "user@example.com",
        "name": "John Doe",
        "password": "password123",
        "age": 25,
        "isActive": True,
    }
