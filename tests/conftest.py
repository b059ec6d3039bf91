"""
Shared pytest fixtures for Authsession tests.

This module provides common fixtures including:
- Credential stores (memory, file, Redis mock)
- Identity client mocks with canned responses
- Navigation recorder
- Mock identity backend served over httpx's ASGI transport
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from authsession.errors import IdentityFetchError
from authsession.modules.backend import MockIdentityBackend, create_mock_backend_app
from authsession.modules.credentials import FileCredentialStore, MemoryCredentialStore
from authsession.modules.identity import IdentityClient
from authsession.modules.navigation import RecordingNavigator
from authsession.modules.session import SessionManager

BACKEND_URL = "http://backend.test"


# =============================================================================
# Collaborators
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory credential store."""
    return MemoryCredentialStore()


@pytest.fixture
def file_store(tmp_path):
    """File credential store inside the test's temp directory."""
    return FileCredentialStore(str(tmp_path / "auth" / "token.json"))


@pytest.fixture
def navigator():
    """Navigator recording every intent."""
    return RecordingNavigator()


@pytest.fixture
def identity():
    """
    Identity client mock.

    Defaults: login issues "xyz", every token resolves to bob,
    registration succeeds.
    """
    client = AsyncMock()
    client.login = AsyncMock(return_value="xyz")
    client.fetch_identity = AsyncMock(return_value={"name": "bob"})
    client.register = AsyncMock(return_value=None)
    return client


@pytest.fixture
def failing_identity(identity):
    """Identity mock rejecting every token."""
    identity.fetch_identity = AsyncMock(side_effect=IdentityFetchError("Failed to fetch user data"))
    return identity


@pytest.fixture
def manager(store, identity, navigator):
    """Session manager over mocks."""
    return SessionManager(store, identity, navigator=navigator)


@pytest.fixture
def mock_redis_with_data():
    """
    Synchronous Redis mock with in-memory data storage.

    Values are returned as bytes, like a client without decode_responses.
    """
    storage = {}
    redis = MagicMock()

    def mock_set(key, value, *args, **kwargs):
        storage[key] = value.encode("utf-8") if isinstance(value, str) else value
        return True

    def mock_get(key):
        return storage.get(key)

    def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in storage:
                del storage[key]
                count += 1
        return count

    redis.set = MagicMock(side_effect=mock_set)
    redis.get = MagicMock(side_effect=mock_get)
    redis.delete = MagicMock(side_effect=mock_delete)
    redis._storage = storage  # Expose for test assertions

    return redis


# =============================================================================
# Mock backend over ASGI
# =============================================================================

@pytest.fixture
def backend():
    """Mock identity backend with one registered user (alice / wonderland)."""
    provider = MockIdentityBackend(secret="test-secret-for-the-mock-identity-backend")
    provider.register({"username": "alice", "password": "wonderland", "name": "Alice"})
    return provider


@pytest_asyncio.fixture
async def backend_client(backend):
    """IdentityClient talking to the mock backend in-process."""
    app = create_mock_backend_app(backend)
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
    client = IdentityClient(BACKEND_URL, http_client=http_client)
    yield client
    await http_client.aclose()


def json_transport(routes):
    """
    Build an httpx.MockTransport from {(method, path): response_or_callable}.

    Unknown routes answer 404.
    """
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        route = routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        return route

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Tests running the full HTTP stack against the mock backend"
    )
