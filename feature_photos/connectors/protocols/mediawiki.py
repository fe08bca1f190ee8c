"""
MediaWiki API Protocol Helpers.

Builds image lookup URLs for MediaWiki-based sites from OSM tags and
classifies their replies:
- Wikidata (P18 image claim)
- Wikimedia Commons (image info with thumbnail)
- Wikipedia (page image with thumbnail)
"""

import re
from enum import Enum
from typing import Any
from urllib.parse import quote

from feature_photos.config import SourceSettings, settings

WIKIPEDIA_TAG_PREFIX = "wikipedia"

# Wikipedia edition codes: en, cs, zh-min-nan, be-tarask, ...
LANG_CODE_RE = re.compile(r"^[a-z-]{2,12}$")


class WikiReplyType(str, Enum):
    """Kinds of MediaWiki replies the wiki source understands."""

    WIKIDATA = "wikidata"
    WIKIMEDIA = "wikimedia"
    WIKIPEDIA = "wikipedia"


def encode_component(value: str) -> str:
    """Percent-encode a URL query value the way browsers' encodeURIComponent does."""
    return quote(value, safe="!~*'()")


def parse_wikipedia_tag(value: str, default_lang: str = "en") -> tuple[str, str]:
    """
    Split a ``lang:Title`` wikipedia tag value.

    Returns:
        (language, title); language falls back to ``default_lang`` and the
        whole value is the title when the text before the first colon is not
        a language code (e.g. ``Star Wars: A New Hope``)
    """
    lang, sep, title = value.partition(":")
    lang = lang.strip()
    if sep and LANG_CODE_RE.match(lang):
        return lang, title
    return default_lang, value


def get_wiki_api_url(tags: dict[str, str], config: SourceSettings | None = None) -> str | None:
    """
    Build the wiki API URL for a feature's tags.

    Priority: ``wikidata`` > ``wikimedia_commons`` > first ``wikipedia*`` key.

    Args:
        tags: OSM tags of the feature
        config: Provider settings

    Returns:
        API URL, or None when no wiki tag is present
    """
    config = config or settings.sources
    width = config.thumb_width

    if tags.get("wikidata"):
        return (
            f"{config.wikidata_api_url}?action=wbgetclaims&property=P18&format=json"
            f"&entity={encode_component(tags['wikidata'])}"
        )

    if tags.get("wikimedia_commons"):
        return (
            f"{config.commons_api_url}?action=query&prop=imageinfo&iiprop=url"
            f"&iiurlwidth={width}&format=json"
            f"&titles={encode_component(tags['wikimedia_commons'])}"
        )

    wikipedia_keys = [k for k in tags if k.startswith(WIKIPEDIA_TAG_PREFIX)]
    if wikipedia_keys:
        lang, title = parse_wikipedia_tag(tags[wikipedia_keys[0]], config.default_wikipedia_lang)
        api_url = config.wikipedia_api_url.format(lang=lang)
        return (
            f"{api_url}?action=query&prop=pageimages&pithumbsize={width}&format=json"
            f"&titles={encode_component(title)}"
        )

    return None


def first_page(data: dict[str, Any]) -> dict[str, Any] | None:
    """
    Return the first page of a ``query`` reply.

    Accepts both the dict form (formatversion=1, keyed by page id) and the
    list form (formatversion=2) of ``query.pages``.
    """
    query = data.get("query")
    if not isinstance(query, dict):
        return None

    pages = query.get("pages")
    if isinstance(pages, dict):
        pages = list(pages.values())
    if not pages or not isinstance(pages[0], dict):
        return None
    return pages[0]


def classify_wiki_reply(data: Any) -> WikiReplyType | None:
    """Identify wikidata / wikimedia / wikipedia content in a reply."""
    if not isinstance(data, dict):
        return None

    page = first_page(data)
    if page is not None:
        if "imageinfo" in page:
            return WikiReplyType.WIKIMEDIA
        if "pageimage" in page:
            return WikiReplyType.WIKIPEDIA

    if "claims" in data:
        return WikiReplyType.WIKIDATA

    return None


def extract_p18_filename(data: dict[str, Any]) -> str | None:
    """Get the image filename of the first P18 claim of a wbgetclaims reply."""
    claims = data.get("claims") or {}
    p18 = claims.get("P18") or []
    if not p18:
        return None

    try:
        value = p18[0]["mainsnak"]["datavalue"]["value"]
    except (KeyError, TypeError, IndexError):
        return None
    return value if isinstance(value, str) and value else None
