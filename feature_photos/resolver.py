"""
Feature photo resolver.

Finds one representative photo for a map feature by trying the photo
sources in priority order: wiki (tag-linked, curated), then Fody, then
Mapillary. The first usable thumbnail wins.

A map client usually observes a feature twice: first as a skeleton
(identity and coordinates) and then fully loaded with tags. The skeleton
call starts the Mapillary lookup in the background, and the full call for
the same feature picks that lookup up instead of repeating it.

Usage:
    resolver = FeaturePhotoResolver()
    await resolver.resolve(skeleton)   # -> LOADING
    await resolver.resolve(full)       # -> PhotoRecord or None
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from feature_photos.connectors.fody import FodySource
from feature_photos.connectors.mapillary import MapillarySource
from feature_photos.connectors.types import (
    LOADING,
    Feature,
    FullFeature,
    NonOsmFeature,
    PhotoRecord,
    ResolveState,
    SkeletonFeature,
    is_usable,
)
from feature_photos.connectors.wiki import WikiSource
from feature_photos.utils.http import JsonFetcher


@dataclass(frozen=True)
class PendingLookup:
    """A speculative Mapillary lookup and the feature that started it."""

    feature_id: str
    task: asyncio.Task


def _log_discarded_failure(task: asyncio.Task) -> None:
    """Consume the outcome of a background lookup so failures are never lost."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Background Mapillary lookup failed: {exc!r}")


class FeaturePhotoResolver:
    """
    Resolves map features to a single representative photo.

    Each resolver owns one pending-lookup slot, so independent streams of
    features should use independent resolvers.
    """

    def __init__(
        self,
        fetcher: JsonFetcher | None = None,
        wiki: WikiSource | None = None,
        fody: FodySource | None = None,
        mapillary: MapillarySource | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            fetcher: JSON fetch client shared by the default sources
            wiki: Wiki-family source
            fody: Fody source
            mapillary: Mapillary source
        """
        self.fetcher = fetcher
        self.wiki = wiki or WikiSource(fetcher=fetcher)
        self.fody = fody or FodySource(fetcher=fetcher)
        self.mapillary = mapillary or MapillarySource(fetcher=fetcher)

        # Replaced as a whole, never mutated in place
        self._pending: PendingLookup | None = None

        # Strong references to speculative lookups until they finish
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> PendingLookup | None:
        return self._pending

    async def resolve(self, feature: Feature) -> PhotoRecord | ResolveState | None:
        """
        Resolve a feature observation.

        Args:
            feature: Skeleton, full or non-OSM feature

        Returns:
            PhotoRecord; LOADING for a skeleton (call again with the full
            feature); None when no source has a photo

        Raises:
            Any Mapillary or wiki provider failure of a full feature. Fody
            failures, and Mapillary failures of non-OSM features, are
            treated as no photo.
        """
        if isinstance(feature, NonOsmFeature):
            return await self._resolve_non_osm(feature)

        if isinstance(feature, SkeletonFeature):
            self._start_speculative_lookup(feature)
            return LOADING

        if isinstance(feature, FullFeature):
            return await self._resolve_full(feature)

        raise TypeError(f"Unsupported feature type: {type(feature).__name__}")

    async def _resolve_non_osm(self, feature: NonOsmFeature) -> PhotoRecord | None:
        # Single pass, no second observation will follow
        try:
            return await self.mapillary.get_image(feature.center)
        except Exception as e:
            logger.warning(f"Mapillary lookup failed for non-OSM feature at {feature.center}: {e!r}")
            return None

    def _start_speculative_lookup(self, feature: SkeletonFeature) -> None:
        feature_id = feature.osm_meta.short_id
        task = asyncio.create_task(self.mapillary.get_image(feature.center))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(_log_discarded_failure)

        # Last skeleton call wins
        self._pending = PendingLookup(feature_id=feature_id, task=task)
        logger.debug(f"Started speculative Mapillary lookup for {feature_id}")

    def _claim_pending(self, feature_id: str) -> asyncio.Task | None:
        """Take the pending lookup if it belongs to ``feature_id``; the slot is emptied either way."""
        pending, self._pending = self._pending, None

        if pending is None:
            return None
        if pending.feature_id != feature_id:
            logger.debug(f"Discarding Mapillary lookup of {pending.feature_id} (now resolving {feature_id})")
            return None
        return pending.task

    async def _resolve_full(self, feature: FullFeature) -> PhotoRecord | None:
        feature_id = feature.osm_meta.short_id

        # Claimed before the first await so a later skeleton call cannot leak in
        mapillary_task = self._claim_pending(feature_id)

        wiki_image = await self.wiki.get_image(feature.tags)
        if is_usable(wiki_image):
            logger.info(f"{feature_id}: photo from {wiki_image.source}")
            return wiki_image

        fody_image = await self.fody.get_image(feature.center)
        if is_usable(fody_image):
            logger.info(f"{feature_id}: photo from {fody_image.source}")
            return fody_image

        if mapillary_task is not None:
            mapillary_image = await mapillary_task
        else:
            mapillary_image = await self.mapillary.get_image(feature.center)

        if mapillary_image is not None:
            logger.info(f"{feature_id}: photo from {mapillary_image.source}")
        else:
            logger.info(f"{feature_id}: no photo found")
        return mapillary_image


# Process-wide resolver for callers that observe a single stream of features
_default_resolver: FeaturePhotoResolver | None = None


def get_default_resolver() -> FeaturePhotoResolver:
    """Get or create the process-wide resolver."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = FeaturePhotoResolver()
    return _default_resolver


async def get_feature_image(feature: Feature) -> PhotoRecord | ResolveState | None:
    """Resolve a feature with the process-wide resolver."""
    return await get_default_resolver().resolve(feature)
