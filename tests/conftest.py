"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import APIConfig
from api.main import create_app
from catalog.database import CatalogStore
from catalog.seed import load_books
from catalog.tokens import TokenIssuer
from catalog.users import CredentialRegistry


@pytest.fixture
def api_settings():
    """API settings with the bundled dataset and default token policy."""
    return APIConfig(
        books_file=None,
        jwt_secret="access",
        access_token_ttl_seconds=3600,
        session_secret="test-session-secret"
    )


@pytest.fixture
def client(api_settings):
    """Test client with the application lifespan running."""
    with TestClient(create_app(api_settings)) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client):
    """Test client whose session belongs to alice."""
    client.post("/register", json={"username": "alice", "password": "pw1"})
    response = client.post("/login", json={"username": "alice", "password": "pw1"})
    assert response.status_code == 200
    return client


@pytest.fixture
def catalog_store():
    """Catalog store seeded with the bundled dataset."""
    return CatalogStore(load_books())


@pytest.fixture
def registry():
    """Empty credential registry."""
    return CredentialRegistry()


@pytest.fixture
def token_issuer():
    """Issuer with the default secret and a one-hour TTL."""
    return TokenIssuer(secret="access", ttl_seconds=3600)
