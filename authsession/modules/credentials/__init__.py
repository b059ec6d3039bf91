"""
Credentials Module - Black Box Interface

Purpose: Persist a single credential token across process restarts
Interface: get(), set(), clear()
Hidden: Backing medium (memory, file, Redis), serialization, locking

Replaceable with any medium (OS keychain, encrypted store) without
affecting the session module.
"""

from .store import (
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
    RedisCredentialStore,
)

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "RedisCredentialStore",
]
