"""
Fody photo database source.

Community photo database of guideposts and other small features, searched
by proximity. It is the least essential source: any failure is a soft miss.
"""

from loguru import logger

from feature_photos.connectors.base import BasePhotoSource
from feature_photos.connectors.registry import SourceRegistry
from feature_photos.connectors.types import FullFeature, NonOsmFeature, PhotoRecord
from feature_photos.utils.geo import format_coordinate


@SourceRegistry.register
class FodySource(BasePhotoSource):
    """
    Fody photo database (osm.fit.vutbr.cz).

    Never raises: failures are logged and reported as no photo.
    """

    source_id = "fody"
    source_name = "Fody photodb"
    description = "Regional community photo database, nearest photo within 50 m"

    base_url = "https://osm.fit.vutbr.cz/fody/api/close"
    website_url = "https://osm.fit.vutbr.cz/fody/"
    recoverable = True
    priority = 2

    async def lookup(self, feature: FullFeature | NonOsmFeature) -> PhotoRecord | None:
        return await self.get_image(feature.center)

    def build_url(self, center: tuple[float, float]) -> str:
        """Build the proximity query for a ``(lon, lat)`` center."""
        lon, lat = center
        return (
            f"{self.config.fody_url}/api/close?lat={format_coordinate(lat)}&lon={format_coordinate(lon)}"
            f"&limit={self.config.fody_limit}&distance={self.config.fody_distance}"
        )

    async def get_image(self, center: tuple[float, float]) -> PhotoRecord | None:
        """
        Get the nearest Fody photo around ``center``.

        Returns:
            PhotoRecord, or None when nothing is near or the lookup failed
        """
        try:
            data = await self.fetch_json(self.build_url(center))
            features = data["features"]
            if not features:
                return None

            properties = features[0]["properties"]
            photo_id = properties["id"]
            return PhotoRecord(
                source="Fody photodb",
                username=properties.get("author"),
                link=f"{self.config.fody_url}/?id={photo_id}",
                thumb=f"{self.config.fody_url}/files/250px/{photo_id}.jpg",
                portrait=True,
                timestamp=properties.get("created"),
            )
        except Exception as e:
            logger.warning(f"Fody lookup failed near {center}: {e!r}")
            return None
