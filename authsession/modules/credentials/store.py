"""
Credential token persistence.

Every store holds at most one opaque token. Operations are synchronous
and idempotent: ``set`` overwrites unconditionally and ``clear`` on an
empty store is a no-op. An empty string is never a valid token and reads
back as absent.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import UTC, datetime
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Protocol for credential token stores."""

    def get(self) -> Optional[str]:
        """Return the persisted token, or None when absent."""
        ...

    def set(self, token: str) -> None:
        """Persist the token, replacing any previous one."""
        ...

    def clear(self) -> None:
        """Remove the persisted token if present."""
        ...


class MemoryCredentialStore:
    """Process-local store. Survives manager re-creation, not process exit."""

    def __init__(self, token: Optional[str] = None):
        self._lock = threading.Lock()
        self._token = token or None

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token or None

    def clear(self) -> None:
        with self._lock:
            self._token = None


class FileCredentialStore:
    """
    File-backed store.

    The token is kept in a small JSON document written atomically
    (temp file in the same directory, then rename) and readable by the
    owner only.
    """

    def __init__(self, path: str):
        """
        Initialize file store.

        Args:
            path: Location of the token document (``~`` is expanded)
        """
        self.path = os.path.expanduser(path)
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            return self._read()

    def set(self, token: str) -> None:
        if not token:
            self.clear()
            return

        document = {"token": token, "saved_at": datetime.now(UTC).isoformat()}
        directory = os.path.dirname(self.path) or "."

        with self._lock:
            os.makedirs(directory, mode=0o700, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".token-", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle)
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise

        logger.debug(f"Credential token persisted to {self.path}")

    def clear(self) -> None:
        with self._lock:
            try:
                os.unlink(self.path)
            except FileNotFoundError:
                return
        logger.debug(f"Credential token removed from {self.path}")

    def _read(self) -> Optional[str]:
        try:
            with open(self.path, encoding="utf-8") as handle:
                document = json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return None

        token = document.get("token") if isinstance(document, dict) else None
        if not isinstance(token, str) or not token:
            logger.warning(f"Ignoring malformed credential file {self.path}")
            return None
        return token


class RedisCredentialStore:
    """Store keeping the token under a single Redis key."""

    def __init__(self, redis_client, key: str = "authsession:token"):
        """
        Initialize Redis store.

        Args:
            redis_client: Synchronous Redis client (``redis.Redis``)
            key: Key holding the token
        """
        self.redis = redis_client
        self.key = key
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            value = self.redis.get(self.key)
        if not value:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def set(self, token: str) -> None:
        with self._lock:
            if token:
                self.redis.set(self.key, token)
            else:
                self.redis.delete(self.key)

    def clear(self) -> None:
        with self._lock:
            self.redis.delete(self.key)
