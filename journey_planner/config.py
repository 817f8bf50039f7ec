"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
where the static topology lives, how and how often each ephemeral
feed is polled, planner behaviour, and logging.

Configuration can be overridden via environment variables:
- JP_TOPOLOGY_DATA_DIR=/path/to/data
- JP_TRIPWIRE_BASE_URL=https://tripwire.example.com
- JP_EVESCOUT_POLL_INTERVAL_SECONDS=600
- JP_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TopologyConfig(BaseSettings):
    """Static topology configuration.

    Environment variables prefixed with JP_TOPOLOGY_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_TOPOLOGY_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    topology_file: str = "topology.json"

    @property
    def topology_path(self) -> Path:
        """Full path to the topology JSON document."""
        return self.data_dir / self.topology_file


class TripwireConfig(BaseSettings):
    """Stateful ephemeral feed configuration.

    Environment variables prefixed with JP_TRIPWIRE_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_TRIPWIRE_")

    enabled: bool = True
    base_url: str = "http://localhost"
    system_id: int = 30000142
    system_name: str = "Jita"
    poll_interval_seconds: float = Field(default=60.0, gt=0)
    timeout_seconds: float = Field(default=10.0, gt=0)


class EveScoutConfig(BaseSettings):
    """Stateless ephemeral feed configuration.

    Environment variables prefixed with JP_EVESCOUT_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_EVESCOUT_")

    enabled: bool = True
    url: str = "https://api.eve-scout.com/v2/public/signatures"
    poll_interval_seconds: float = Field(default=300.0, gt=0)
    timeout_seconds: float = Field(default=10.0, gt=0)


class PlannerConfig(BaseSettings):
    """Route planning configuration.

    Environment variables prefixed with JP_PLANNER_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_PLANNER_")

    wait_for_feeds: bool = True  # Report "loading" until every feed answered once
    search_limit: int = Field(default=20, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with JP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.tripwire.base_url)
        print(config.topology.topology_path)

    Environment variables prefixed with JP_.
    """

    model_config = SettingsConfigDict(env_prefix="JP_")

    topology: TopologyConfig = Field(default_factory=TopologyConfig)
    tripwire: TripwireConfig = Field(default_factory=TripwireConfig)
    eve_scout: EveScoutConfig = Field(default_factory=EveScoutConfig)
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
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
