"""Environment configuration for adpulse.

Settings are read from ``ADPULSE_*`` environment variables or a ``.env`` file
via pydantic-settings. Paths default to the registries bundled with the
package.

Usage:
    from adpulse.settings import get_settings

    settings = get_settings()
    ttl = settings.cache_ttl_seconds
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path(__file__).parent / "config"
DEFAULT_ACCOUNTS_PATH = CONFIG_DIR / "accounts.yaml"
DEFAULT_BENCHMARKS_PATH = CONFIG_DIR / "benchmarks.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        cache_ttl_seconds: Lifetime of cached account snapshots.
        significance_threshold: Minimum absolute % change for a significant trend.
        forecast_days: Default spend forecast horizon.
        snapshot_dir: Directory of ``<account_id>.json`` snapshots (optional).
        accounts_path: Account registry YAML.
        benchmarks_path: Industry benchmark table YAML.
        log_level: Root log level used by ``configure_logging``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    cache_ttl_seconds: float = 300.0
    significance_threshold: float = 5.0
    forecast_days: int = 7
    snapshot_dir: Path | None = None
    accounts_path: Path = DEFAULT_ACCOUNTS_PATH
    benchmarks_path: Path = DEFAULT_BENCHMARKS_PATH
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Set up a basic log format at the configured level."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
