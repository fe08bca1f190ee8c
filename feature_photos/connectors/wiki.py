"""
Wiki-family photo source.

Resolves a feature's wikidata / wikimedia_commons / wikipedia tags into a
thumbnail. Wikidata only names the image file, so its reply is turned into a
wikimedia_commons lookup in a second step.
"""

from typing import Any

from loguru import logger

from feature_photos.connectors.base import BasePhotoSource
from feature_photos.connectors.protocols.mediawiki import (
    WikiReplyType,
    classify_wiki_reply,
    extract_p18_filename,
    first_page,
    get_wiki_api_url,
)
from feature_photos.connectors.registry import SourceRegistry
from feature_photos.connectors.types import FullFeature, NonOsmFeature, PhotoRecord

COMMONS_FILE_URL = "https://commons.wikimedia.org/wiki/File:{filename}"


@SourceRegistry.register
class WikiSource(BasePhotoSource):
    """
    Wikidata, Wikimedia Commons and Wikipedia images linked from OSM tags.

    Failures propagate to the caller.
    """

    source_id = "wiki"
    source_name = "Wikimedia"
    description = "Images linked through wikidata, wikimedia_commons and wikipedia tags"

    base_url = "https://commons.wikimedia.org/w/api.php"
    website_url = "https://commons.wikimedia.org"
    recoverable = False
    priority = 1

    async def lookup(self, feature: FullFeature | NonOsmFeature) -> PhotoRecord | None:
        return await self.get_image(feature.tags)

    def get_api_url(self, tags: dict[str, str]) -> str | None:
        """Select the wiki API URL for ``tags``; None if no wiki tag is present."""
        return get_wiki_api_url(tags, self.config)

    async def get_image(self, tags: dict[str, str]) -> PhotoRecord | None:
        """
        Get the image linked from a feature's tags.

        Args:
            tags: OSM tags of the feature

        Returns:
            PhotoRecord, or None if no wiki tag, claim, page or thumbnail exists
        """
        url = self.get_api_url(tags)
        if url is None:
            return None
        return await self.get_image_by_url(url)

    async def get_image_by_url(self, url: str) -> PhotoRecord | None:
        """Fetch a wiki API URL, dereferencing a Wikidata reply once."""
        data = await self.fetch_json(url)
        reply_type = classify_wiki_reply(data)
        logger.debug(f"Wiki reply {reply_type} for {url}")

        if reply_type != WikiReplyType.WIKIDATA:
            return self._parse_reply(data, reply_type)

        # Wikidata holds the image name only; look the file up on Commons
        filename = extract_p18_filename(data)
        if filename is None:
            return None

        commons_url = self.get_api_url({"wikimedia_commons": f"File:{filename}"})
        data = await self.fetch_json(commons_url)
        reply_type = classify_wiki_reply(data)

        if reply_type == WikiReplyType.WIKIDATA:
            logger.warning(f"Unexpected Wikidata reply for {commons_url}")
            return None
        return self._parse_reply(data, reply_type)

    def _parse_reply(self, data: Any, reply_type: WikiReplyType | None) -> PhotoRecord | None:
        if reply_type == WikiReplyType.WIKIMEDIA:
            return self._parse_imageinfo(first_page(data))
        if reply_type == WikiReplyType.WIKIPEDIA:
            return self._parse_pageimage(first_page(data))
        return None

    def _parse_imageinfo(self, page: dict) -> PhotoRecord | None:
        """Parse a Commons imageinfo page into a PhotoRecord."""
        images = page.get("imageinfo") or []
        if not images:
            return None

        image = images[0]
        thumb = image.get("thumburl")
        if not thumb:
            return None

        return PhotoRecord(
            source="Wikimedia",
            link=image.get("descriptionshorturl"),
            thumb=thumb,
            portrait=_is_portrait(image.get("thumbwidth"), image.get("thumbheight")),
        )

    def _parse_pageimage(self, page: dict) -> PhotoRecord | None:
        """Parse a Wikipedia pageimages page into a PhotoRecord."""
        pageimage = page.get("pageimage")
        thumbnail = page.get("thumbnail") or {}
        thumb = thumbnail.get("source")
        if not pageimage or not thumb:
            return None

        return PhotoRecord(
            source="Wikipedia",
            link=COMMONS_FILE_URL.format(filename=pageimage),
            thumb=thumb,
            portrait=_is_portrait(thumbnail.get("width"), thumbnail.get("height")),
        )


def _is_portrait(width, height) -> bool:
    if width is None or height is None:
        return False
    return width < height
