"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogConfig, get_catalog_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, level_from_environment, log_context
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import (
    PRODUCT_SETS_SYNC_THROTTLE_KEY,
    PRODUCT_SETS_SYNC_THROTTLE_TTL_SECONDS,
    SyncConfig,
    get_sync_config,
)

__all__ = [
    "PRODUCT_SETS_SYNC_THROTTLE_KEY",
    "PRODUCT_SETS_SYNC_THROTTLE_TTL_SECONDS",
    "CatalogConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_catalog_config",
    "get_database_config",
    "get_storage_config",
    "get_sync_config",
    "level_from_environment",
    "log_context",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
