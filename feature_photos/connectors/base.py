"""
Base class for all photo sources.

Every provider adapter inherits from BasePhotoSource, which supplies the
shared fetch client, a per-call timeout, and connectivity checks.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from feature_photos.config import SourceSettings, settings
from feature_photos.connectors.types import (
    FullFeature,
    HealthCheckResult,
    NonOsmFeature,
    PhotoRecord,
    SourceInfo,
)
from feature_photos.utils.http import JsonFetcher, get_default_fetcher


class BasePhotoSource(ABC):
    """
    Abstract base class for photo sources.

    Subclasses must implement:
    - lookup(): Find a photo for a fully known feature
    """

    # Class attributes to be set by subclasses
    source_id: str = None  # e.g., "mapillary"
    source_name: str = None  # e.g., "Mapillary"
    description: str = None

    base_url: str = None  # used for health checks
    website_url: str = None

    # Resolution order, lower is tried first
    priority: int = 100

    # Whether provider failures are swallowed (soft miss) or propagated
    recoverable: bool = False

    def __init__(
        self,
        fetcher: JsonFetcher | None = None,
        config: SourceSettings | None = None,
    ):
        """
        Initialize the source.

        Args:
            fetcher: JSON fetch client (defaults to the process-wide one)
            config: Provider settings (defaults to the global settings)
        """
        if self.source_id is None:
            raise ValueError("source_id must be set in subclass")

        self.fetcher = fetcher or get_default_fetcher()
        self.config = config or settings.sources

    async def fetch_json(self, url: str) -> Any:
        """
        Fetch JSON, bounded by the configured per-call timeout.

        Raises:
            TimeoutError: If the provider does not answer in time
        """
        try:
            return await asyncio.wait_for(
                self.fetcher.fetch_json(url),
                timeout=self.config.source_timeout,
            )
        except asyncio.TimeoutError as e:
            raise TimeoutError(
                f"{self.source_name} did not answer within {self.config.source_timeout}s"
            ) from e

    def remove_fetch_cache(self, url: str) -> None:
        self.fetcher.remove_fetch_cache(url)

    def get_source_info(self) -> SourceInfo:
        """Get metadata about this source."""
        return SourceInfo(
            source_id=self.source_id,
            source_name=self.source_name,
            description=self.description,
            base_url=self.base_url,
            website_url=self.website_url,
            recoverable=self.recoverable,
        )

    async def ping(self) -> bool:
        """
        Quick connectivity check - just verify the API is reachable.

        Returns:
            True if the API endpoint is reachable, False otherwise.
        """
        client = self.fetcher.client
        try:
            response = await client.head(self.base_url, timeout=5.0, follow_redirects=True)
            return response.status_code < 500
        except Exception:
            # Fall back to GET if HEAD not supported
            try:
                response = await client.get(self.base_url, timeout=5.0, follow_redirects=True)
                return response.status_code < 500
            except Exception:
                return False

    async def health_check(self) -> HealthCheckResult:
        """
        Test connectivity to the provider.

        Returns status, response time, and any error message.
        """
        start = time.time()
        try:
            reachable = await self.ping()
            elapsed = (time.time() - start) * 1000

            if reachable:
                return HealthCheckResult(status="ok", response_time_ms=elapsed)
            return HealthCheckResult(
                status="error",
                response_time_ms=elapsed,
                error_message="API not reachable",
            )
        except Exception as e:
            logger.debug(f"{self.source_name} health check failed: {e}")
            return HealthCheckResult(
                status="error",
                response_time_ms=(time.time() - start) * 1000,
                error_message=str(e),
            )

    @abstractmethod
    async def lookup(self, feature: FullFeature | NonOsmFeature) -> PhotoRecord | None:
        """
        Find a photo for a feature.

        Args:
            feature: Feature with known center and tags

        Returns:
            PhotoRecord, or None on a soft miss
        """
        pass
