"""
Session manager.

The only writer of session state. Reconciles three facts: the token in
the credential store, the identity the backend reports for it, and the
in-memory state observed by consumers.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...errors import IdentityFetchError, LoginError, RegisterError
from ..credentials import CredentialStore
from ..identity import IdentityProvider
from ..navigation import Destination, NavigationSink, NullNavigator
from ..state import Authenticated, SessionState, SessionStateCell, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionRoutes:
    """Navigation destinations used by session operations."""

    root: str = Destination.ROOT
    profile: str = Destination.PROFILE
    success: str = Destination.SUCCESS


class SessionManager:
    """
    Orchestrates login, logout, registration and startup reconciliation.

    All public operations are coroutines serialized through one lock in
    arrival order. An operation finishes every step, including identity
    resolution after a login, before the next one starts, so a logout
    queued behind a login always has the final word.
    """

    def __init__(
        self,
        store: CredentialStore,
        identity: IdentityProvider,
        navigator: Optional[NavigationSink] = None,
        state: Optional[SessionStateCell] = None,
        routes: Optional[SessionRoutes] = None,
    ):
        """
        Initialize session manager.

        Args:
            store: Credential token store
            identity: Identity backend client
            navigator: Sink for navigation intents (intents dropped if None)
            state: State cell to publish into (a fresh one if None)
            routes: Navigation destinations
        """
        self.store = store
        self.identity = identity
        self.navigator = navigator or NullNavigator()
        self.state = state or SessionStateCell()
        self.routes = routes or SessionRoutes()

        self._lock = asyncio.Lock()
        self._initialized = False

    @property
    def current(self) -> SessionState:
        return self.state.current

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.state.user

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> SessionState:
        """
        Reconcile the persisted token with the backend at startup.

        Without a token the network is not contacted. A token the backend
        rejects (or that cannot be checked) is discarded silently.

        Returns:
            The resulting session state
        """
        async with self._lock:
            if self._initialized:
                logger.warning("Session manager already initialized; ignoring")
                return self.state.current

            try:
                token = self.store.get()
            except Exception as e:
                # Left uninitialized so a later call can retry
                logger.warning(f"Could not read persisted credential token: {e}")
                self.state._publish(Unauthenticated())
                return self.state.current

            if not token:
                logger.debug("No persisted credential token")
                self.state._publish(Unauthenticated())
            elif await self._resolve_identity(token) is None:
                self._clear_store()
                logger.warning("Discarded persisted credential token that could not be resolved")

            self._initialized = True
            return self.state.current

    async def login(self, username: str, password: str) -> Optional[str]:
        """
        Log in and resolve the identity of the new session.

        Returns:
            Error message for display on failure, None otherwise
        """
        async with self._lock:
            try:
                token = await self.identity.login(username, password)
            except LoginError as e:
                logger.warning(f"Login failed for '{username}': {e.message}")
                return e.message

            try:
                self.store.set(token)
            except Exception as e:
                logger.warning(f"Could not persist credential token: {e}")

            # The token stays persisted even when resolution fails here;
            # only startup reconciliation discards it.
            if await self._resolve_identity(token) is None:
                logger.warning(f"Identity resolution failed after login for '{username}'")
                return None

            logger.info(f"User '{username}' logged in")
            self.navigator.navigate(self.routes.profile)
            return None

    async def logout(self) -> None:
        """Clear the token and state and navigate to the root. Never fails."""
        async with self._lock:
            self._clear_store()
            self.state._publish(Unauthenticated())
            logger.info("Logged out")
            self.navigator.navigate(self.routes.root)

    async def register(self, profile: Dict[str, Any]) -> Optional[str]:
        """
        Register a new account. Does not log the user in.

        Returns:
            Transport error message when the backend could not be reached,
            None on success and on backend rejection
        """
        async with self._lock:
            try:
                await self.identity.register(profile)
            except RegisterError as e:
                if e.message is None:
                    logger.warning(f"Registration rejected (HTTP {e.status_code})")
                else:
                    logger.warning(f"Registration request failed: {e.message}")
                return e.message

            self.navigator.navigate(self.routes.success)
            return None

    async def aclose(self) -> None:
        """Release the identity client if it holds network resources."""
        close = getattr(self.identity, "aclose", None)
        if close is not None:
            await close()

    async def _resolve_identity(self, token: str) -> Optional[Dict[str, Any]]:
        """Fetch the profile for ``token`` and publish the resulting state."""
        try:
            user = await self.identity.fetch_identity(token)
        except IdentityFetchError as e:
            logger.debug(f"Identity resolution failed: {e}")
            self.state._publish(Unauthenticated())
            return None

        self.state._publish(Authenticated(user))
        return user

    def _clear_store(self) -> None:
        """Clear the persisted token; a failing medium is logged, not raised."""
        try:
            self.store.clear()
        except Exception as e:
            logger.warning(f"Could not clear persisted credential token: {e}")
