"""
Feature Photos - representative photos for map features.

Resolves an OSM feature to one photo from Wikidata / Wikimedia Commons /
Wikipedia, the Fody photo database or Mapillary.
"""

from feature_photos.connectors.types import (
    LOADING,
    FullFeature,
    NonOsmFeature,
    OsmMeta,
    PhotoRecord,
    SkeletonFeature,
    feature_from_dict,
)
from feature_photos.resolver import FeaturePhotoResolver, get_feature_image

__version__ = "1.0.0"

__all__ = [
    "FeaturePhotoResolver",
    "get_feature_image",
    "LOADING",
    "FullFeature",
    "NonOsmFeature",
    "OsmMeta",
    "PhotoRecord",
    "SkeletonFeature",
    "feature_from_dict",
]
