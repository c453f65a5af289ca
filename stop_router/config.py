"""Centralized configuration using Pydantic Settings.

Data-source locations and routing costs are read from here instead of
being baked into the ingestion code, so tests can point the feed
repository at temporary fixtures.

Configuration can be overridden via environment variables:
- SR_FEED_DATA_DIR=/path/to/gtfs
- SR_ROUTING_RELAXATION_POLICY=first_enqueue
- SR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .graph import RelaxationPolicy


class FeedConfig(BaseSettings):
    """Transit feed file locations.

    Environment variables prefixed with SR_FEED_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_FEED_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stops_file: str = "stops.txt"
    stop_times_file: str = "stop_times.txt"
    transfers_file: str = "transfers.txt"

    @property
    def stops_path(self) -> Path:
        """Full path to the stops file."""
        return self.data_dir / self.stops_file

    @property
    def stop_times_path(self) -> Path:
        """Full path to the stop-times file."""
        return self.data_dir / self.stop_times_file

    @property
    def transfers_path(self) -> Path:
        """Full path to the transfers file."""
        return self.data_dir / self.transfers_file


class RoutingConfig(BaseSettings):
    """Edge costs and shortest-path behavior.

    Environment variables prefixed with SR_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_ROUTING_")

    relaxation_policy: Literal["finalize_on_pop", "first_enqueue"] = "finalize_on_pop"
    hop_cost: float = Field(default=1.0, ge=0)
    fixed_transfer_cost: float = Field(default=2.0, ge=0)
    timed_transfer_divisor: float = Field(default=100.0, gt=0)

    @property
    def policy(self) -> RelaxationPolicy:
        return RelaxationPolicy(self.relaxation_policy)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with SR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.feed.stops_path)
        print(config.routing.policy)

    Environment variables prefixed with SR_.
    """

    model_config = SettingsConfigDict(env_prefix="SR_")

    feed: FeedConfig = Field(default_factory=FeedConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
