"""
Mapillary photo source.

Street-level imagery found by proximity search around a feature's center.
"""

from loguru import logger

from feature_photos.connectors.base import BasePhotoSource
from feature_photos.connectors.registry import SourceRegistry
from feature_photos.connectors.types import FullFeature, NonOsmFeature, PhotoRecord
from feature_photos.utils.geo import format_lonlat
from feature_photos.utils.http import InvalidResponseError

PHOTO_PAGE_URL = "https://www.mapillary.com/app/?focus=photo&pKey={key}"
THUMB_URL = "https://images.mapillary.com/{key}/thumb-640.jpg"


@SourceRegistry.register
class MapillarySource(BasePhotoSource):
    """
    Mapillary image search (API v3).

    Failures propagate to the caller.
    """

    source_id = "mapillary"
    source_name = "Mapillary"
    description = "Street-level photos close to and looking at the feature"

    base_url = "https://a.mapillary.com/v3/images"
    website_url = "https://www.mapillary.com"
    recoverable = False
    priority = 3

    async def lookup(self, feature: FullFeature | NonOsmFeature) -> PhotoRecord | None:
        return await self.get_image(feature.center)

    def build_url(self, center: tuple[float, float]) -> str:
        """Build the proximity query for a ``(lon, lat)`` center."""
        lonlat = format_lonlat(center, precision=5)
        return (
            f"{self.config.mapillary_api_url}?client_id={self.config.mapillary_client_id}"
            f"&lookat={lonlat}&closeto={lonlat}"
        )

    async def get_image(self, center: tuple[float, float]) -> PhotoRecord | None:
        """
        Get the photo closest to and looking at ``center``.

        Returns:
            PhotoRecord, or None when Mapillary has no image there

        Raises:
            InvalidResponseError: If the reply has no ``features`` list
        """
        url = self.build_url(center)
        data = await self.fetch_json(url)

        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            raise InvalidResponseError(f"Mapillary reply without features list: {url}")

        if not features:
            # Mapillary sometimes finds the image only on a second try,
            # so an empty answer must not stay cached
            self.remove_fetch_cache(url)
            logger.debug(f"Mapillary: no image near {center}")
            return None

        properties = features[0].get("properties") or {}
        key = properties.get("key")
        if not key:
            raise InvalidResponseError(f"Mapillary image without key: {url}")

        return PhotoRecord(
            source="Mapillary",
            username=properties.get("username"),
            link=PHOTO_PAGE_URL.format(key=key),
            thumb=THUMB_URL.format(key=key),
            timestamp=properties.get("captured_at"),
        )
