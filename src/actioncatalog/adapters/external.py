"""External-resource probe that fetches identifier listings over HTTP."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from .circuit_breaker import CircuitBreaker
from .http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from actioncatalog.config import ExternalResourceConfig, ResilienceConfig
    from actioncatalog.domain.discovery import PhaseDeadline

log = logging.getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _breaker_for(config: ExternalResourceConfig) -> CircuitBreaker:
    return CircuitBreaker(
        name=config.resilience.name,
        failure_threshold=config.breaker.failure_threshold,
        recovery_timeout_seconds=config.breaker.recovery_timeout_seconds,
    )


@dataclass(slots=True)
class HttpExternalResourceProbe:
    """Fetch each configured URL and return the response bodies as text blobs.

    Every request goes through the circuit breaker; a failing or short-circuited
    URL contributes an empty blob instead of failing the phase. URLs left when the
    phase deadline passes are not requested.
    """

    config: ExternalResourceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    breaker: CircuitBreaker | None = None
    _breaker: CircuitBreaker = field(init=False)

    def __post_init__(self) -> None:
        self._breaker = self.breaker or _breaker_for(self.config)

    def __call__(self, *, deadline: PhaseDeadline | None = None) -> Sequence[str]:
        return asyncio.run(self._fetch_all(deadline))

    async def _fetch_all(self, deadline: PhaseDeadline | None) -> list[str]:
        blobs: list[str] = []
        async with self.client_factory(self.config.resilience) as client:
            for url in self.config.urls:
                if deadline is not None and deadline.expired:
                    log.info("Phase deadline reached; skipping remaining external resources")
                    break
                blobs.append(await self._fetch_one(client, url))
        log.info("Fetched %s external resource(s)", len(blobs))
        return blobs

    async def _fetch_one(self, client: ResilientClient, url: str) -> str:
        async def fetch() -> str:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

        async def empty() -> str:
            return ""

        try:
            return await self._breaker.acall(fetch, fallback=empty)
        except httpx.HTTPError as exc:
            log.warning("Could not fetch external resource %s: %s", url, exc)
            return ""
