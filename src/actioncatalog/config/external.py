"""External-resource probe configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_list, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

EXTERNAL_URLS_ENV = "ACTIONCATALOG_EXTERNAL_URLS"
EXTERNAL_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class BreakerConfig:
    failure_threshold: int = 3
    recovery_timeout_seconds: float = 30.0


@dataclass(frozen=True, slots=True)
class ExternalResourceConfig:
    """Listing URLs scanned by the external-resource discovery phase."""

    urls: tuple[str, ...]
    resilience: ResilienceConfig
    breaker: BreakerConfig = BreakerConfig()


def get_external_resource_config(
    *, resilience: ResilienceConfig | None = None
) -> ExternalResourceConfig:
    require_env_vars((EXTERNAL_URLS_ENV,))
    return ExternalResourceConfig(
        urls=env_list(EXTERNAL_URLS_ENV),
        resilience=resilience
        or ResilienceConfig(
            name="external-resources",
            timeout_seconds=EXTERNAL_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            cache=CacheConfig(),
        ),
    )
