"""Configuration management for the riskdash service."""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_CONFIG_PATH = Path.home() / ".riskdash" / "config.toml"


@dataclass
class CacheConfig:
    """Result cache settings."""

    enabled: bool = True
    max_size: int = 256
    history_ttl: int = 43200
    latest_ttl: int = 60
    window_ttl: int = 43200


@dataclass
class ProviderConfig:
    """Data provider settings."""

    timeout: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    fred_api_key: str | None = None
    fred_base_url: str = "https://api.stlouisfed.org/fred/series/observations"
    cboe_archive_url: str = "https://cdn.cboe.com/resources/options/volume_and_call_put_ratios/{dataset}.csv"
    cboe_daily_url: str = "https://www.cboe.com/us/options/market_statistics/daily/?dt={date}"
    statestreet_url: str = (
        "https://www.ssga.com/library-content/products/fund-data/etfs/us/{dataset}-us-en-{ticker}.xlsx"
    )
    multpl_url: str = "https://www.multpl.com/s-p-500-earnings/table/by-month"
    ycharts_url: str = "https://ycharts.com/indicators/cboe_spx_put_call_ratio"


@dataclass
class StorageConfig:
    """DuckDB storage settings."""

    database_path: str = str(Path.home() / ".riskdash" / "riskdash.duckdb")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class DashboardConfig:
    """riskdash main configuration."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    providers: ProviderConfig = field(default_factory=ProviderConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "DashboardConfig":
        """Build a configuration from a nested dictionary."""
        return cls(
            cache=CacheConfig(**config_dict.get("cache", {})),
            providers=ProviderConfig(**config_dict.get("providers", {})),
            storage=StorageConfig(**config_dict.get("storage", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary."""
        return {
            "cache": asdict(self.cache),
            "providers": asdict(self.providers),
            "storage": asdict(self.storage),
            "logging": asdict(self.logging),
        }


def _deep_update(target: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict):
            target[key] = _deep_update(target.get(key, {}), value)
        else:
            target[key] = value
    return target


class ConfigManager:
    """Loads configuration from a TOML file and the environment."""

    def __init__(self, config_path: Path | None = None, environ: dict[str, str] | None = None):
        """Initialise the manager.

        Args:
            config_path: TOML file path, defaults to ``~/.riskdash/config.toml``
            environ: environment mapping, defaults to ``os.environ``
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._environ = environ if environ is not None else dict(os.environ)
        self.config = self._load_config()

    def _load_config(self) -> DashboardConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        _deep_update(config_dict, load_config_from_env(self._environ))
        return DashboardConfig.from_dict(config_dict)

    def get_config(self) -> DashboardConfig:
        """Return the current configuration."""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Apply nested updates, e.g. ``update_config(cache={"enabled": False})``."""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = DashboardConfig.from_dict(config_dict)


def get_default_config() -> DashboardConfig:
    """Return the built-in defaults."""
    return DashboardConfig()


def load_config_from_env(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Read ``RISKDASH_*`` overrides (and ``FRED_API_KEY``) from the environment."""
    env = environ if environ is not None else dict(os.environ)
    config: dict[str, Any] = {}

    cache_config: dict[str, Any] = {}
    if (value := env.get("RISKDASH_CACHE_ENABLED")) is not None:
        cache_config["enabled"] = value.lower() == "true"
    if (value := env.get("RISKDASH_CACHE_HISTORY_TTL")) is not None:
        cache_config["history_ttl"] = int(value)
    if (value := env.get("RISKDASH_CACHE_LATEST_TTL")) is not None:
        cache_config["latest_ttl"] = int(value)
    if cache_config:
        config["cache"] = cache_config

    provider_config: dict[str, Any] = {}
    fred_key = env.get("RISKDASH_FRED_API_KEY") or env.get("FRED_API_KEY")
    if fred_key:
        provider_config["fred_api_key"] = fred_key
    if (value := env.get("RISKDASH_PROVIDER_TIMEOUT")) is not None:
        provider_config["timeout"] = float(value)
    if provider_config:
        config["providers"] = provider_config

    if (value := env.get("RISKDASH_DATABASE_PATH")) is not None:
        config["storage"] = {"database_path": value}

    logging_config: dict[str, Any] = {}
    if (value := env.get("RISKDASH_LOG_LEVEL")) is not None:
        logging_config["level"] = value
    if (value := env.get("RISKDASH_LOG_FILE")) is not None:
        logging_config["file"] = value
    if logging_config:
        config["logging"] = logging_config

    return config
