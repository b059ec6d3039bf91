"""
Authsession wire models.

These models define the JSON bodies exchanged with the identity
backend. The user profile itself is opaque to the session core and is
kept as a plain dictionary.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

UserProfile = Dict[str, Any]


# Request Models


class LoginRequest(BaseModel):
    """Credentials posted to ``/login``."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password")


# Response Models


class TokenResponse(BaseModel):
    """Successful ``/login`` response."""

    token: str = Field(..., min_length=1, description="Opaque bearer token")


class IdentityResponse(BaseModel):
    """Successful ``/user/me`` response."""

    user: UserProfile = Field(..., description="Profile of the token owner")


class ErrorResponse(BaseModel):
    """Error body returned by the backend on non-2xx responses."""

    message: Optional[str] = Field(None, description="Human readable error")
