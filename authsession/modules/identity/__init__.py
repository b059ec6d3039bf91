"""
Identity Module - Black Box Interface

Purpose: Talk to the identity backend
Interface: login(), register(), fetch_identity()
Hidden: HTTP transport, endpoint paths, response parsing

Every failure collapses into one of IdentityFetchError, LoginError or
RegisterError so callers never see transport exceptions.
"""

from .client import IdentityClient, IdentityProvider

__all__ = ["IdentityClient", "IdentityProvider"]
