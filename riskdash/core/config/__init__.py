"""Configuration management module."""

from riskdash.core.config.settings import (
    CacheConfig,
    ConfigManager,
    DashboardConfig,
    LoggingConfig,
    ProviderConfig,
    StorageConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "DashboardConfig",
    "CacheConfig",
    "ProviderConfig",
    "StorageConfig",
    "LoggingConfig",
    "get_default_config",
    "load_config_from_env",
]
