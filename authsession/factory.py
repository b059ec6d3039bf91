"""
Session Factory following Black Box Design principles.

This factory:
- Constructs the session stack based on configuration
- Wires dependencies together
- Returns only the session manager facade
"""

import logging
from typing import Optional

import redis

from .config.provider import ClientConfig, ConfigProvider
from .modules.credentials import (
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
    RedisCredentialStore,
)
from .modules.identity import IdentityClient
from .modules.navigation import NavigationSink
from .modules.session import SessionManager, SessionRoutes

logger = logging.getLogger(__name__)


class SessionFactory:
    """
    Factory for building the session stack.

    This is the composition root that:
    - Creates the credential store, identity client and state cell
    - Wires them together via dependency injection
    - Returns the session manager
    """

    @staticmethod
    def build_credential_store(config: ClientConfig) -> CredentialStore:
        """
        Select the credential store backend.

        Args:
            config: Client configuration

        Returns:
            Store for the configured backend
        """
        if config.credential_backend == "memory":
            logger.info("Using in-memory credential store")
            return MemoryCredentialStore()

        if config.credential_backend == "redis":
            logger.info(f"Using Redis credential store (key {config.token_key})")
            client = redis.Redis.from_url(config.redis_url, decode_responses=True)
            return RedisCredentialStore(client, key=config.token_key)

        path = config.resolved_token_path
        logger.info(f"Using file credential store at {path}")
        return FileCredentialStore(path)

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        navigator: Optional[NavigationSink] = None,
        routes: Optional[SessionRoutes] = None,
    ) -> SessionManager:
        """
        Build the complete session stack.

        Args:
            config_provider: Configuration provider
            navigator: Router adapter receiving navigation intents

        Returns:
            SessionManager (call ``initialize()`` once before use)
        """
        config = config_provider.get_client_config()

        store = SessionFactory.build_credential_store(config)
        identity = IdentityClient(config.backend_url, timeout=config.request_timeout)

        return SessionManager(store, identity, navigator=navigator, routes=routes)
