"""Settings for the resilient HTTP client behind the external-resource probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

RETRY_STATUSES: Final[frozenset[int]] = frozenset({408, 429, 500, 502, 503, 504})
DEFAULT_HEADERS: Final[tuple[tuple[str, str], ...]] = (
    ("Accept", "text/plain, text/html, application/json"),
    ("User-Agent", "actioncatalog"),
)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries for read-only requests; ``attempts`` counts retries after the first try."""

    attempts: int = 2
    backoff_factor: float = 0.5
    max_backoff_seconds: float = 10.0
    retry_statuses: frozenset[int] = RETRY_STATUSES
    honour_retry_after: bool = True

    def __post_init__(self) -> None:
        if self.attempts < 0:
            raise ConfigurationError("Retry attempts must be non-negative")


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Response cache; without a ``path`` entries live in memory for the process."""

    ttl_seconds: float | None = 3600.0
    path: Path | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
