"""
Protocol helpers for the APIs behind the photo sources.

Protocols:
- MediaWiki: Wikidata, Wikimedia Commons and Wikipedia APIs
"""

from feature_photos.connectors.protocols.mediawiki import (
    WikiReplyType,
    classify_wiki_reply,
    get_wiki_api_url,
)

__all__ = [
    # MediaWiki
    "WikiReplyType",
    "classify_wiki_reply",
    "get_wiki_api_url",
]
