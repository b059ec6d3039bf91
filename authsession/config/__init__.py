"""
Config Module - Black Box Interface

Purpose: Client configuration
Interface: ConfigProvider, EnvConfigProvider, StaticConfigProvider
Hidden: Config sources, validation, environment parsing
"""

from .provider import (
    CREDENTIAL_BACKENDS,
    ClientConfig,
    ConfigProvider,
    EnvConfigProvider,
    StaticConfigProvider,
)

__all__ = [
    "CREDENTIAL_BACKENDS",
    "ClientConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "StaticConfigProvider",
]
