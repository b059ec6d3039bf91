"""Error taxonomy shared by the identity client and the session manager."""

from typing import Optional


class AuthSessionError(Exception):
    """Base class for all authsession errors."""


class IdentityFetchError(AuthSessionError):
    """Resolving a token into a user profile failed (rejected or unreachable)."""


class LoginError(AuthSessionError):
    """Login was rejected by the backend or the request could not be made."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RegisterError(AuthSessionError):
    """
    Registration failed.

    ``message`` is only set for transport failures. Backend rejections
    carry the HTTP status but no message for the caller.
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or f"Registration rejected (HTTP {status_code})")
        self.message = message
        self.status_code = status_code
