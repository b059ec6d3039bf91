"""
Session Module - Black Box Interface

Purpose: Orchestrate the authentication session lifecycle
Interface: initialize(), login(), logout(), register()
Hidden: Reconciliation of persisted token, backend identity and state,
        operation serialization, navigation side effects
"""

from .manager import SessionManager, SessionRoutes

__all__ = ["SessionManager", "SessionRoutes"]
