"""
State Module - Black Box Interface

Purpose: Hold the single reconciled session state and notify observers
Interface: current, subscribe(), wait_for()
Hidden: Observer bookkeeping, waiter futures
"""

from .state import Authenticated, SessionState, SessionStateCell, Unauthenticated

__all__ = ["Authenticated", "SessionState", "SessionStateCell", "Unauthenticated"]
