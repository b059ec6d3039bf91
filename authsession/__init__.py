"""
Authsession - Client-side Authentication Session Manager

Tracks whether the current process is authenticated, persists the
credential token across restarts and reconciles it with the backend.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are replaceable (storage medium, transport, router)
- The session module is the only writer of session state

Modules:
- credentials: Durable token persistence
- identity: Backend client (login, register, identity resolution)
- state: Observable session state cell
- navigation: Navigation intent sinks
- session: Session orchestration
- api: Wire models
- backend: Development backend
"""

__version__ = "1.0.0"
