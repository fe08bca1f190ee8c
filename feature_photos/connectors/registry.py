"""
Source Registry - Central registration and discovery of photo sources.

Provides:
- Automatic source registration via decorator
- Instantiation of sources sharing one fetch client
- Parallel diagnostics (probe, health checks) across sources
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from feature_photos.config import SourceSettings
from feature_photos.connectors.base import BasePhotoSource
from feature_photos.connectors.types import (
    FullFeature,
    HealthCheckResult,
    NonOsmFeature,
    PhotoRecord,
    SourceInfo,
)
from feature_photos.utils.http import JsonFetcher


@dataclass
class ProbeResult:
    """Outcome of querying a single source in isolation."""

    source_id: str
    record: PhotoRecord | None = None
    error: str | None = None


class SourceRegistry:
    """
    Central registry for all photo sources.

    Usage:
        # Register a source class
        @SourceRegistry.register
        class MySource(BasePhotoSource):
            source_id = "my_source"
            ...

        # Build instances sharing one fetcher
        sources = SourceRegistry.create_all(fetcher)
    """

    # Class-level storage
    _source_classes: dict[str, type[BasePhotoSource]] = {}

    @classmethod
    def register(cls, source_class: type[BasePhotoSource]) -> type[BasePhotoSource]:
        """
        Register a source class with the registry.

        Can be used as a decorator:
            @SourceRegistry.register
            class MySource(BasePhotoSource):
                ...
        """
        if not getattr(source_class, "source_id", None):
            raise ValueError(
                f"Source class {source_class.__name__} must have source_id set"
            )

        cls._source_classes[source_class.source_id] = source_class
        logger.debug(f"Registered source: {source_class.source_id}")

        return source_class

    @classmethod
    def get_class(cls, source_id: str) -> type[BasePhotoSource]:
        """Get a registered source class by ID."""
        try:
            return cls._source_classes[source_id]
        except KeyError:
            raise KeyError(f"Unknown source: {source_id}") from None

    @classmethod
    def get_registered_ids(cls) -> list[str]:
        """Get registered source IDs in resolution priority order."""
        return sorted(cls._source_classes, key=lambda sid: cls._source_classes[sid].priority)

    @classmethod
    def create(
        cls,
        source_id: str,
        fetcher: JsonFetcher | None = None,
        config: SourceSettings | None = None,
    ) -> BasePhotoSource:
        """Instantiate a registered source."""
        return cls.get_class(source_id)(fetcher=fetcher, config=config)

    @classmethod
    def create_all(
        cls,
        fetcher: JsonFetcher | None = None,
        config: SourceSettings | None = None,
    ) -> dict[str, BasePhotoSource]:
        """Instantiate every registered source, keyed by source ID."""
        return {
            source_id: cls.create(source_id, fetcher=fetcher, config=config)
            for source_id in cls.get_registered_ids()
        }

    @classmethod
    def list_sources(cls, fetcher: JsonFetcher | None = None) -> list[SourceInfo]:
        """Get info about all registered sources."""
        return [source.get_source_info() for source in cls.create_all(fetcher).values()]

    @classmethod
    async def probe_all(
        cls,
        feature: FullFeature | NonOsmFeature,
        sources: dict[str, BasePhotoSource],
    ) -> list[ProbeResult]:
        """
        Query every source for the same feature, in parallel.

        Diagnostic only: results are reported per source and never ranked.
        """

        async def probe(source: BasePhotoSource) -> ProbeResult:
            try:
                record = await source.lookup(feature)
                return ProbeResult(source_id=source.source_id, record=record)
            except Exception as e:
                logger.warning(f"Probe failed for {source.source_id}: {e}")
                return ProbeResult(source_id=source.source_id, error=str(e) or type(e).__name__)

        return list(await asyncio.gather(*(probe(s) for s in sources.values())))

    @classmethod
    async def check_all_health(
        cls,
        sources: dict[str, BasePhotoSource],
    ) -> dict[str, HealthCheckResult]:
        """Check connectivity of all sources in parallel."""
        results = await asyncio.gather(*(s.health_check() for s in sources.values()))
        return dict(zip(sources.keys(), results))
