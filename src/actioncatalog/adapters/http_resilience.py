"""Async httpx client with retries, an optional rate limit and an optional response cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes

    from actioncatalog.config import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

log = logging.getLogger(__name__)

RETRY_ON_EXCEPTIONS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes


class AsyncClientOptions(TypedDict, total=False):
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport
    follow_redirects: bool


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_seconds,
        respect_retry_after_header=policy.honour_retry_after,
        allowed_methods=("GET", "HEAD"),
        status_forcelist=tuple(sorted(policy.retry_statuses)),
        retry_on_exceptions=RETRY_ON_EXCEPTIONS,
    )


class ResilientClient:
    """Read-only HTTP client for fetching identifier listings.

    ``transport`` replaces the network layer underneath the retry transport,
    which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = _limiter_for(config.ratelimit)
        options: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "headers": dict(config.headers),
            "transport": RetryTransport(transport=transport, retry=build_retry(config.retry)),
            "follow_redirects": True,
        }
        if config.cache is None:
            self._client = httpx.AsyncClient(**options)
        else:
            self._client = AsyncCacheClient(**options, storage=_cache_storage(config.cache))
        log.debug(
            "HTTP client %s: retries=%s, rate_limited=%s, cached=%s",
            config.name,
            config.retry.attempts,
            self._limiter is not None,
            config.cache is not None,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(url, **kwargs)
        async with self._limiter:
            return await self._client.get(url, **kwargs)


def _limiter_for(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


def _cache_storage(config: CacheConfig) -> AsyncSqliteStorage:
    database_path = str(config.path) if config.path is not None else ":memory:"
    return AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)
