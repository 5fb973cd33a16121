"""Discovery scheduler defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Final

from .env import env_float
from .errors import ConfigurationError

DEFAULT_IDENTIFIER_PREFIX: Final[str] = "is.workflow.actions."
DEFAULT_KNOWN_LOCATIONS: Final[tuple[str, ...]] = (
    "/System/Library/Frameworks",
    "/System/Library/PrivateFrameworks",
    "/System/Applications/Shortcuts.app",
)
DEFAULT_UPDATE_INTERVAL_HOURS = 24.0
DEFAULT_TICK_INTERVAL_MINUTES = 60.0
DEFAULT_PHASE_TIMEOUT_SECONDS = 120.0
DEFAULT_COMMAND_TIMEOUT_SECONDS = 30.0
DEFAULT_SAMPLE_SIZE = 100
DEFAULT_FILES_PER_LOCATION = 10


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    update_interval: timedelta = timedelta(hours=DEFAULT_UPDATE_INTERVAL_HOURS)
    tick_interval: timedelta = timedelta(minutes=DEFAULT_TICK_INTERVAL_MINUTES)
    phase_timeout_seconds: float = DEFAULT_PHASE_TIMEOUT_SECONDS
    command_timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS
    sample_size: int = DEFAULT_SAMPLE_SIZE
    identifier_prefix: str = DEFAULT_IDENTIFIER_PREFIX
    known_locations: tuple[str, ...] = DEFAULT_KNOWN_LOCATIONS
    files_per_location: int = DEFAULT_FILES_PER_LOCATION

    def __post_init__(self) -> None:
        if self.sample_size < 0:
            raise ConfigurationError("Discovery sample size must be non-negative")
        if not self.identifier_prefix.endswith("."):
            raise ConfigurationError("Identifier prefix must end with a namespace separator")


def get_discovery_config() -> DiscoveryConfig:
    return DiscoveryConfig(
        update_interval=timedelta(
            hours=env_float("ACTIONCATALOG_UPDATE_INTERVAL_HOURS", DEFAULT_UPDATE_INTERVAL_HOURS)
        ),
        tick_interval=timedelta(
            minutes=env_float("ACTIONCATALOG_TICK_INTERVAL_MINUTES", DEFAULT_TICK_INTERVAL_MINUTES)
        ),
        phase_timeout_seconds=env_float(
            "ACTIONCATALOG_PHASE_TIMEOUT_SECONDS", DEFAULT_PHASE_TIMEOUT_SECONDS
        ),
    )
