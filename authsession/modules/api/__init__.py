"""
API Module - Wire models

Purpose: Define the JSON bodies exchanged with the identity backend
Interface: LoginRequest, TokenResponse, IdentityResponse, ErrorResponse
"""

from .models import ErrorResponse, IdentityResponse, LoginRequest, TokenResponse, UserProfile

__all__ = [
    "ErrorResponse",
    "IdentityResponse",
    "LoginRequest",
    "TokenResponse",
    "UserProfile",
]
