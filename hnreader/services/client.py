"""
ServiceClient - Async HTTP client with timeout, retry and read-through caching.

Combines:
- A hard per-request timeout (one cancellation scope per request)
- Failure classification (400/404 fail fast, everything else is retried)
- Exponential backoff between attempts
- TTLCache for successful responses
"""

import asyncio
from typing import Any, Awaitable, Callable

import httpx
from loguru import logger

from hnreader.services.cache import TTLCache
from hnreader.services.errors import (
    HttpStatusError,
    InvalidResponseError,
    RequestTimeoutError,
    RetriesExhaustedError,
    ServiceError,
)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# Cached values may legitimately be None (JSON null), so misses need their own marker.
_MISSING = object()


class ServiceClient:
    """
    HTTP client for a single JSON backend.

    Usage:
        async with ServiceClient(cache=TTLCache()) as client:
            # One timed request, no retry, no cache
            data = await client.fetch_json(url)

            # Cache first, then up to `max_retries` timed attempts
            data = await client.request(url, cache_key="item_8863")
    """

    def __init__(
        self,
        cache: TTLCache,
        service_id: str = "hackernews",
        timeout: float = 10.0,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self._cache = cache
        self._service_id = service_id
        self._timeout = timeout
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._sleep = sleep

        # HTTP client (lazy initialization unless injected)
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def cache(self) -> TTLCache:
        return self._cache

    @property
    def service_id(self) -> str:
        return self._service_id

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._http_client

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-based)."""
        return min(self._base_delay * 2 ** (attempt - 1), self._max_delay)

    async def fetch_json(self, url: str) -> Any:
        """
        Execute one GET request and decode its JSON body.

        Raises:
            RequestTimeoutError: If the request takes longer than the timeout
            HttpStatusError: For non-2xx responses
            InvalidResponseError: If the body is not JSON
            ServiceError: For other transport failures
        """
        client = await self._get_http_client()

        try:
            async with asyncio.timeout(self._timeout):
                response = await client.get(url, headers=DEFAULT_HEADERS)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(self._service_id, self._timeout) from e
        except httpx.RequestError as e:
            raise ServiceError(str(e), service_id=self._service_id) from e

        if not response.is_success:
            raise HttpStatusError(
                self._service_id, response.status_code, response.reason_phrase
            )

        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Invalid JSON from {url}: {e}", service_id=self._service_id
            ) from e

    async def request(self, url: str, cache_key: str) -> Any:
        """
        Return the JSON body for `url`, from cache when possible.

        A cache hit never touches the network. On a miss the request is tried
        up to `max_retries` times and the first success is cached. 400 and 404
        responses are raised after a single attempt.

        Raises:
            HttpStatusError: For a 400/404 response
            RetriesExhaustedError: When every attempt failed
        """
        cached = await self._cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            return cached

        last_error: ServiceError | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                logger.debug(
                    f"GET {url} (attempt {attempt}/{self._max_retries})"
                )
                data = await self.fetch_json(url)
            except HttpStatusError as e:
                if e.is_client_error:
                    logger.debug(f"{url} answered {e.status_code}, not retrying")
                    raise
                last_error = e
            except ServiceError as e:
                last_error = e
            else:
                await self._cache.set(cache_key, data)
                return data

            if attempt < self._max_retries:
                delay = self.backoff_delay(attempt)
                logger.debug(f"Retrying {url} in {delay}s after: {last_error}")
                await self._sleep(delay)

        raise RetriesExhaustedError(
            self._service_id, self._max_retries, last_error
        ) from last_error

    async def clear_cache(self) -> None:
        await self._cache.clear()

    def cache_size(self) -> int:
        return self._cache.size()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ServiceClient closed")

    async def __aenter__(self) -> "ServiceClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
