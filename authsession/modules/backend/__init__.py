"""
Backend Module - Development identity backend

Purpose: Serve /register, /login and /user/me for local development
Interface: create_mock_backend_app(), MockIdentityBackend
Hidden: User registry, token signing
"""

from .mock_backend import MockIdentityBackend, create_mock_backend_app

__all__ = ["MockIdentityBackend", "create_mock_backend_app"]
