"""Application configuration helpers."""

from __future__ import annotations

from cloudback_sync.common.logging import configure_logging

from .cloudback import DEFAULT_CLOUDBACK_ENDPOINT, CloudbackConfig, get_cloudback_config
from .env import float_env_var, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_CLOUDBACK_ENDPOINT",
    "CloudbackConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ResilienceConfig",
    "StorageConfig",
    "configure_logging",
    "float_env_var",
    "get_cloudback_config",
    "get_database_config",
    "get_storage_config",
    "optional_env_var",
]
