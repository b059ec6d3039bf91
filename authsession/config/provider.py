"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Protocol, Tuple

CREDENTIAL_BACKENDS: Tuple[str, ...] = ("file", "memory", "redis")

DEFAULT_BACKEND_URL = "http://localhost:3000"
DEFAULT_TOKEN_PATH = os.path.join("~", ".authsession", "token.json")


@dataclass
class ClientConfig:
    """Session client configuration."""
    backend_url: str = DEFAULT_BACKEND_URL
    request_timeout: float = 10.0
    credential_backend: str = "file"
    token_path: str = DEFAULT_TOKEN_PATH
    redis_url: str = "redis://localhost:6379/0"
    token_key: str = "authsession:token"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.credential_backend not in CREDENTIAL_BACKENDS:
            raise ValueError(
                f"Unknown credential backend '{self.credential_backend}'. "
                f"Expected one of: {', '.join(CREDENTIAL_BACKENDS)}"
            )
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be a positive number of seconds")
        self.backend_url = self.backend_url.rstrip("/")

    @property
    def resolved_token_path(self) -> str:
        """Token path with ``~`` and environment variables expanded."""
        return os.path.expanduser(os.path.expandvars(self.token_path))


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_client_config(self) -> ClientConfig:
        """Get session client configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_client_config(self) -> ClientConfig:
        """Get session client configuration from environment variables."""
        timeout_env = os.getenv("AUTH_REQUEST_TIMEOUT", "10")
        try:
            timeout = float(timeout_env)
        except ValueError:
            raise ValueError(
                f"AUTH_REQUEST_TIMEOUT must be a number of seconds, got '{timeout_env}'"
            ) from None

        return ClientConfig(
            backend_url=os.getenv("AUTH_BACKEND_URL", DEFAULT_BACKEND_URL),
            request_timeout=timeout,
            credential_backend=os.getenv("AUTH_CREDENTIAL_BACKEND", "file").lower(),
            token_path=os.getenv("AUTH_TOKEN_PATH", DEFAULT_TOKEN_PATH),
            redis_url=os.getenv("AUTH_REDIS_URL", "redis://localhost:6379/0"),
            token_key=os.getenv("AUTH_TOKEN_KEY", "authsession:token"),
            log_level=os.getenv("AUTH_LOG_LEVEL", "INFO").upper(),
        )


class StaticConfigProvider:
    """Provider wrapping an explicit configuration (embedding, tests)."""

    def __init__(self, config: ClientConfig):
        self._config = config

    def get_client_config(self) -> ClientConfig:
        return self._config
