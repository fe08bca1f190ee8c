"""
Connectors Module - Photo sources for map features.

Architecture:
- BasePhotoSource: Abstract base class for all sources
- Protocols: MediaWiki URL building and reply classification
- Registry: Central source registration and discovery

Sources, in resolution priority order:
- wiki: Wikidata / Wikimedia Commons / Wikipedia images linked from tags
- fody: Fody photo database, proximity search
- mapillary: Mapillary street-level imagery, proximity search
"""

from feature_photos.connectors.base import BasePhotoSource

# Import all sources to trigger registration via @SourceRegistry.register
from feature_photos.connectors import fody, mapillary, wiki

from feature_photos.connectors.fody import FodySource
from feature_photos.connectors.mapillary import MapillarySource
from feature_photos.connectors.registry import SourceRegistry
from feature_photos.connectors.types import (
    LOADING,
    Feature,
    FullFeature,
    NonOsmFeature,
    OsmMeta,
    PhotoRecord,
    SkeletonFeature,
    feature_from_dict,
)
from feature_photos.connectors.wiki import WikiSource

__all__ = [
    "BasePhotoSource",
    "SourceRegistry",
    "MapillarySource",
    "WikiSource",
    "FodySource",
    "LOADING",
    "Feature",
    "FullFeature",
    "NonOsmFeature",
    "OsmMeta",
    "PhotoRecord",
    "SkeletonFeature",
    "feature_from_dict",
]
