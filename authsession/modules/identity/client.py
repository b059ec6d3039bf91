"""
HTTP client for the identity backend.

Endpoints (JSON over a configured base URL):
- GET  /user/me   (Bearer token)      -> {"user": {...}}
- POST /login     {username, password} -> {"token": "..."} | {"message": "..."}
- POST /register  {profile...}         -> 2xx on success, body ignored
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from ...errors import IdentityFetchError, LoginError, RegisterError
from ..api.models import ErrorResponse, IdentityResponse, LoginRequest, TokenResponse, UserProfile

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Protocol for identity backends consumed by the session manager."""

    async def fetch_identity(self, token: str) -> UserProfile:
        ...

    async def login(self, username: str, password: str) -> str:
        ...

    async def register(self, profile: Dict[str, Any]) -> None:
        ...


class IdentityClient:
    """
    Identity backend client built on httpx.

    Can be used as an async context manager. An injected client is never
    closed by this class; a client it created itself is.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize identity client.

        Args:
            base_url: Backend base URL (e.g., http://localhost:3000)
            timeout: Request timeout in seconds
            http_client: Optional preconfigured client (custom transport, tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "IdentityClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def fetch_identity(self, token: str) -> UserProfile:
        """
        Exchange a token for the profile of its owner.

        Args:
            token: Bearer token

        Returns:
            User profile dictionary

        Raises:
            IdentityFetchError: Token rejected, backend unreachable or
                response malformed. No further distinction is made.
        """
        try:
            response = await self.client.get(
                self._url("/user/me"),
                headers={"Authorization": f"Bearer {token}"},
            )
        except (httpx.HTTPError, UnicodeEncodeError) as e:
            # Header values must be ASCII; a token that is not cannot be sent
            logger.debug(f"Identity request failed: {e}")
            raise IdentityFetchError(f"Identity request failed: {e}") from e

        if not response.is_success:
            raise IdentityFetchError(f"Failed to fetch user data (HTTP {response.status_code})")

        try:
            return IdentityResponse.model_validate(response.json()).user
        except (ValueError, ValidationError) as e:
            raise IdentityFetchError("Malformed identity response") from e

    async def login(self, username: str, password: str) -> str:
        """
        Log in with username and password.

        Returns:
            Credential token issued by the backend

        Raises:
            LoginError: With the backend message on rejection, or the
                transport error text when the request could not be made.
        """
        body = LoginRequest(username=username, password=password).model_dump()

        try:
            response = await self.client.post(self._url("/login"), json=body)
        except httpx.HTTPError as e:
            logger.debug(f"Login request failed: {e}")
            raise LoginError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise LoginError(self._error_message(response, f"Login failed (HTTP {response.status_code})"))

        try:
            return TokenResponse.model_validate(response.json()).token
        except (ValueError, ValidationError) as e:
            raise LoginError("Malformed login response") from e

    async def register(self, profile: Dict[str, Any]) -> None:
        """
        Register a new account.

        Raises:
            RegisterError: ``message`` set for transport failures only;
                backend rejections carry just the status code.
        """
        try:
            response = await self.client.post(self._url("/register"), json=profile)
        except httpx.HTTPError as e:
            logger.debug(f"Register request failed: {e}")
            raise RegisterError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.debug(f"Register rejected: {response.text[:200]}")
            raise RegisterError(status_code=response.status_code)

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            error = ErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            return default
        return error.message or default
