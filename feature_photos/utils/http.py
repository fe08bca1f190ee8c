"""
HTTP utilities for the photo providers.

Provides the shared JSON fetch client with a per-URL response cache,
optional retry on transient transport failures, and error types used by the
source adapters.
"""

from typing import Any

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from feature_photos.config import HTTPSettings, settings
from feature_photos.utils.cache import MemoryCache


class HTTPError(Exception):
    """Custom HTTP error with status code."""

    def __init__(self, message: str, status_code: int = None, response: httpx.Response = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class RateLimitError(HTTPError):
    """Raised when rate limited by a provider."""
    pass


class InvalidResponseError(HTTPError):
    """Raised when a provider answers with an unexpected JSON shape."""
    pass


class JsonFetcher:
    """
    Async JSON fetch client with a response cache.

    Successful responses are cached by URL for ``cache_ttl`` seconds, so
    resolving the same feature twice does not repeat network work.

    Usage:
        async with JsonFetcher() as fetcher:
            data = await fetcher.fetch_json(url)
            fetcher.remove_fetch_cache(url)
    """

    def __init__(
        self,
        config: HTTPSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        cache: MemoryCache | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            config: HTTP settings (defaults to the global settings)
            http_client: Optional shared HTTP client
            cache: Optional response cache
        """
        self.config = config or settings.http
        self.cache = cache or MemoryCache(
            max_size=self.config.cache_max_size,
            default_ttl=self.config.cache_ttl,
        )
        self.default_headers = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client and self._http_client is None:
            self._http_client = self._create_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = self._create_client()
            self._owns_client = True
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_json(self, url: str) -> Any:
        """
        GET a URL and return its parsed JSON body.

        Args:
            url: Fully built request URL (also the cache key)

        Returns:
            Parsed JSON response

        Raises:
            HTTPError: For HTTP errors (4xx, 5xx)
            RateLimitError: When rate limited (429)
            InvalidResponseError: When the body is not JSON
            httpx.TransportError: On network failures after retries
        """
        cached = self.cache.get(url)
        if cached is not None:
            logger.debug(f"Cache hit: {url}")
            return cached

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(multiplier=self.config.retry_delay, min=1, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._get(url)

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Invalid JSON from {url}",
                status_code=response.status_code,
                response=response,
            ) from e

        self.cache.set(url, data)
        return data

    async def _get(self, url: str) -> httpx.Response:
        logger.debug(f"GET {url}")

        response = await self.client.get(url, headers=self.default_headers)

        # Handle rate limiting
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "60")
            raise RateLimitError(
                f"Rate limited by {url}. Retry after {retry_after}s",
                status_code=429,
                response=response,
            )

        if response.status_code >= 400:
            raise HTTPError(
                f"HTTP {response.status_code} for {url}: {response.text[:200]}",
                status_code=response.status_code,
                response=response,
            )

        logger.debug(f"Fetched {url} ({response.status_code}, {len(response.content)} bytes)")
        return response

    def remove_fetch_cache(self, url: str) -> None:
        """Evict the cached response for ``url``. Never raises."""
        try:
            if self.cache.delete(url):
                logger.debug(f"Evicted cached response: {url}")
        except Exception as e:
            logger.warning(f"Cache eviction failed for {url}: {e}")


# Shared fetcher used by the module-level helpers below
_default_fetcher: JsonFetcher | None = None


def get_default_fetcher() -> JsonFetcher:
    """Get or create the process-wide fetcher."""
    global _default_fetcher
    if _default_fetcher is None:
        _default_fetcher = JsonFetcher()
    return _default_fetcher


async def fetch_json(url: str) -> Any:
    """Fetch JSON through the process-wide fetcher."""
    return await get_default_fetcher().fetch_json(url)


def remove_fetch_cache(url: str) -> None:
    """Evict ``url`` from the process-wide fetcher's cache."""
    get_default_fetcher().remove_fetch_cache(url)
