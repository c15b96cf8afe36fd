"""Application configuration helpers."""

from __future__ import annotations

from availsync.domain.availability import DEFAULT_PAGE_SIZE

from .env import env_positive_int, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidServerDefinitionError, MissingConfigurationError
from .fulfillment import (
    FulfillmentServerConfig,
    get_radarr_servers,
    get_sonarr_servers,
    load_servers,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .media_server import MediaServerConfig, get_media_server_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config


def get_page_size() -> int:
    return env_positive_int("AVAILSYNC_PAGE_SIZE", default=DEFAULT_PAGE_SIZE)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "FulfillmentServerConfig",
    "InvalidServerDefinitionError",
    "MediaServerConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_positive_int",
    "get_database_config",
    "get_media_server_config",
    "get_page_size",
    "get_radarr_servers",
    "get_sonarr_servers",
    "get_storage_config",
    "load_servers",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
