"""
Mock Identity Backend for Development and Testing

This module provides an in-memory backend that speaks the same protocol
the identity client expects, so the full session flow can run without
the real service.
"""

import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Request rejected by the mock backend."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MockIdentityBackend:
    """
    In-memory identity backend.

    Supports:
    - Account registration with unique usernames
    - Password login issuing HS256 JWT tokens
    - Profile lookup by bearer token
    """

    def __init__(self, secret: Optional[str] = None, token_ttl: int = 3600):
        """Initialize the mock backend."""
        self.secret = secret or secrets.token_urlsafe(32)
        self.token_ttl = token_ttl
        self.issuer = "authsession-mock"

        # username -> {"password_hash": ..., "profile": {...}}
        self.users: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def _hash_password(password: str) -> str:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()

    def register(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        """Create an account from a profile containing username and password."""
        username = profile.get("username")
        password = profile.get("password")
        if not isinstance(username, str) or not username or not isinstance(password, str) or not password:
            raise BackendError(400, "username and password are required")
        if username in self.users:
            raise BackendError(409, "Username already taken")

        public_profile = {k: v for k, v in profile.items() if k != "password"}
        self.users[username] = {
            "password_hash": self._hash_password(password),
            "profile": public_profile,
        }
        logger.info(f"Registered user '{username}'")
        return public_profile

    def login(self, username: str, password: str) -> str:
        """Check credentials and issue a token."""
        user = self.users.get(username)
        if not user or not secrets.compare_digest(
            user["password_hash"], self._hash_password(password)
        ):
            raise BackendError(401, "Invalid credentials")
        return self.create_token(username)

    def create_token(self, username: str, expires_in: Optional[int] = None) -> str:
        """Create a signed token for ``username``."""
        now = datetime.now(UTC)
        exp = now + timedelta(seconds=self.token_ttl if expires_in is None else expires_in)
        claims = {
            "iss": self.issuer,
            "sub": username,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(claims, self.secret, algorithm="HS256")

    def get_user(self, token: str) -> Dict[str, Any]:
        """Resolve a token into the owner's public profile."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=["HS256"],
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise BackendError(401, "Token expired") from None
        except jwt.InvalidTokenError as e:
            raise BackendError(401, f"Invalid token: {e}") from None

        user = self.users.get(claims["sub"])
        if not user:
            raise BackendError(401, "Unknown user")
        return user["profile"]


def create_mock_backend_app(backend: Optional[MockIdentityBackend] = None) -> FastAPI:
    """Create a FastAPI app serving the mock identity backend."""
    app = FastAPI(title="Mock Identity Backend")
    provider = backend or MockIdentityBackend()
    app.state.backend = provider

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError):
        """Render rejections as {"message": ...}."""
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    async def read_json(request: Request) -> Dict[str, Any]:
        try:
            body = await request.json()
        except ValueError:
            raise BackendError(400, "Request body must be JSON") from None
        if not isinstance(body, dict):
            raise BackendError(400, "Request body must be a JSON object")
        return body

    @app.post("/register", status_code=201)
    async def register(request: Request):
        """Register a new account."""
        profile = await read_json(request)
        return {"user": provider.register(profile)}

    @app.post("/login")
    async def login(request: Request):
        """Exchange credentials for a token."""
        body = await read_json(request)
        token = provider.login(str(body.get("username", "")), str(body.get("password", "")))
        return {"token": token}

    @app.get("/user/me")
    async def me(request: Request):
        """Profile of the bearer token owner."""
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise BackendError(401, "Missing or invalid authorization header")
        return {"user": provider.get_user(auth_header[7:])}

    return app
