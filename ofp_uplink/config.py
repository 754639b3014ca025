"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
- SimBrief API endpoint and timeout
- Navigation data file locations
- Uplink behaviour (whether procedures are uplinked)
- Logging

Configuration can be overridden via environment variables:
- OFPU_SIMBRIEF_TIMEOUT_SECONDS=20
- OFPU_NAVDATA_DATA_DIR=/path/to/navdata
- OFPU_UPLINK_UPLINK_PROCEDURES=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimBriefConfig(BaseSettings):
    """SimBrief API configuration.

    Environment variables prefixed with OFPU_SIMBRIEF_.
    """

    model_config = SettingsConfigDict(env_prefix="OFPU_SIMBRIEF_")

    api_url: str = "https://www.simbrief.com/api/xml.fetcher.php?json=1"
    timeout_seconds: float = 10.0


class NavDataConfig(BaseSettings):
    """Navigation database configuration.

    Environment variables prefixed with OFPU_NAVDATA_.
    """

    model_config = SettingsConfigDict(env_prefix="OFPU_NAVDATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "navdata"
    )
    fixes_file: str = "fixes.csv"
    airways_file: str = "airways.csv"
    procedures_file: str = "procedures.csv"

    @property
    def fixes_path(self) -> Path:
        """Full path to fixes CSV file."""
        return self.data_dir / self.fixes_file

    @property
    def airways_path(self) -> Path:
        """Full path to airways CSV file."""
        return self.data_dir / self.airways_file

    @property
    def procedures_path(self) -> Path:
        """Full path to procedures CSV file."""
        return self.data_dir / self.procedures_file


class UplinkConfig(BaseSettings):
    """Uplink behaviour configuration.

    Environment variables prefixed with OFPU_UPLINK_.
    """

    model_config = SettingsConfigDict(env_prefix="OFPU_UPLINK_")

    uplink_procedures: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with OFPU_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="OFPU_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.simbrief.api_url)
        print(config.navdata.fixes_path)

    Environment variables prefixed with OFPU_.
    """

    model_config = SettingsConfigDict(env_prefix="OFPU_")

    simbrief: SimBriefConfig = Field(default_factory=SimBriefConfig)
    navdata: NavDataConfig = Field(default_factory=NavDataConfig)
    uplink: UplinkConfig = Field(default_factory=UplinkConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
