from unittest.mock import MagicMock, patch

import pytest

from authsession.config import ClientConfig, StaticConfigProvider
from authsession.factory import SessionFactory
from authsession.modules.credentials import (
    FileCredentialStore,
    MemoryCredentialStore,
    RedisCredentialStore,
)
from authsession.modules.identity import IdentityClient
from authsession.modules.navigation import RecordingNavigator
from authsession.modules.session import SessionManager


def test_build_memory_stack():
    navigator = RecordingNavigator()
    config = ClientConfig(backend_url="http://auth.test", credential_backend="memory", request_timeout=3)

    manager = SessionFactory.build(StaticConfigProvider(config), navigator=navigator)

    assert isinstance(manager, SessionManager)
    assert isinstance(manager.store, MemoryCredentialStore)
    assert isinstance(manager.identity, IdentityClient)
    assert manager.identity.base_url == "http://auth.test"
    assert manager.identity.timeout == 3
    assert manager.navigator is navigator


def test_file_store_uses_resolved_path(tmp_path):
    config = ClientConfig(token_path=str(tmp_path / "token.json"))

    store = SessionFactory.build_credential_store(config)

    assert isinstance(store, FileCredentialStore)
    assert store.path == str(tmp_path / "token.json")


def test_redis_store_from_url():
    config = ClientConfig(credential_backend="redis", redis_url="redis://cache:6379/2", token_key="k")
    client = MagicMock()

    with patch("authsession.factory.redis.Redis.from_url", return_value=client) as from_url:
        store = SessionFactory.build_credential_store(config)

    from_url.assert_called_once_with("redis://cache:6379/2", decode_responses=True)
    assert isinstance(store, RedisCredentialStore)
    assert store.redis is client
    assert store.key == "k"


@pytest.mark.asyncio
async def test_built_manager_initializes_offline(tmp_path):
    """No token on disk means no network access during initialize"""
    config = ClientConfig(backend_url="http://unreachable.invalid", token_path=str(tmp_path / "t.json"))
    manager = SessionFactory.build(StaticConfigProvider(config))

    state = await manager.initialize()
    await manager.aclose()

    assert state.is_authenticated is False
