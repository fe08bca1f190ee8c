"""Utility modules for the feature photo service."""

from feature_photos.utils.geo import (
    format_coordinate,
    format_lonlat,
    is_valid_coordinates,
    normalize_center,
)
from feature_photos.utils.http import (
    HTTPError,
    InvalidResponseError,
    JsonFetcher,
    RateLimitError,
    fetch_json,
    remove_fetch_cache,
)
from feature_photos.utils.logging import setup_logging
from feature_photos.utils.osm import get_short_id

__all__ = [
    # HTTP utilities
    "JsonFetcher",
    "fetch_json",
    "remove_fetch_cache",
    "HTTPError",
    "RateLimitError",
    "InvalidResponseError",
    # Logging
    "setup_logging",
    # Geographic utilities
    "is_valid_coordinates",
    "normalize_center",
    "format_lonlat",
    "format_coordinate",
    # OSM utilities
    "get_short_id",
]
