"""
Data models for the photo connectors.

Defines the map feature shapes the resolver accepts, the PhotoRecord every
source produces, and the LOADING sentinel returned while a speculative
lookup is still running.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from feature_photos.utils.geo import normalize_center
from feature_photos.utils.osm import OSM_TYPES, get_short_id


class ResolveState(Enum):
    """Non-photo outcomes of a resolve call."""

    LOADING = "loading"


# Resolution still in progress; distinct from None ("no photo found")
LOADING = ResolveState.LOADING


# =============================================================================
# Features
# =============================================================================


@dataclass(frozen=True)
class OsmMeta:
    """Origin metadata of an OSM element."""

    type: str  # node, way, relation
    id: int

    @property
    def short_id(self) -> str:
        return get_short_id(self)


@dataclass(frozen=True)
class SkeletonFeature:
    """First observation of a feature: identity and coordinates only."""

    osm_meta: OsmMeta
    center: tuple[float, float]  # (lon, lat)


@dataclass(frozen=True)
class FullFeature:
    """Complete observation of a feature, including its tags."""

    osm_meta: OsmMeta
    center: tuple[float, float]  # (lon, lat)
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NonOsmFeature:
    """A feature not backed by OSM data. Resolved in a single pass."""

    center: tuple[float, float]  # (lon, lat)
    tags: dict[str, str] = field(default_factory=dict)


Feature = Union[SkeletonFeature, FullFeature, NonOsmFeature]


def feature_from_dict(data: dict[str, Any]) -> Feature:
    """
    Create a feature from its wire form.

    Expected keys: ``center`` ([lon, lat]), ``osmMeta`` ({type, id}),
    ``tags``, ``skeleton`` and ``nonOsmObject``. ``nonOsmObject`` takes
    precedence over ``skeleton``.

    Raises:
        ValueError: If the center or OSM metadata is missing or invalid
    """
    center = normalize_center(data.get("center"))
    tags = {str(k): str(v) for k, v in (data.get("tags") or {}).items()}

    if data.get("nonOsmObject"):
        return NonOsmFeature(center=center, tags=tags)

    meta = data.get("osmMeta") or {}
    osm_type = meta.get("type")
    if osm_type not in OSM_TYPES:
        raise ValueError(f"osmMeta.type must be one of {OSM_TYPES}, got {osm_type!r}")
    try:
        osm_id = int(meta.get("id"))
    except (TypeError, ValueError) as e:
        raise ValueError(f"osmMeta.id must be an integer, got {meta.get('id')!r}") from e

    osm_meta = OsmMeta(type=osm_type, id=osm_id)

    if data.get("skeleton"):
        return SkeletonFeature(osm_meta=osm_meta, center=center)
    return FullFeature(osm_meta=osm_meta, center=center, tags=tags)


# =============================================================================
# Results
# =============================================================================


@dataclass
class PhotoRecord:
    """
    Representative photo of a feature, normalized across providers.

    ``source`` is the human-readable provider name, ``link`` the provider
    page for the photo and ``thumb`` a displayable image URL.
    """

    source: str
    link: str | None = None
    thumb: str | None = None

    username: str | None = None
    portrait: bool | None = None  # orientation hint for the UI
    timestamp: str | None = None

    @property
    def is_usable(self) -> bool:
        """A record is usable when it carries a thumbnail."""
        return bool(self.thumb)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "source": self.source,
            "link": self.link,
            "thumb": self.thumb,
        }

        for field_name in ("username", "portrait", "timestamp"):
            value = getattr(self, field_name)
            if value is not None:
                result[field_name] = value

        return result


def is_usable(record: PhotoRecord | None) -> bool:
    """True when ``record`` exists and has a thumbnail."""
    return record is not None and record.is_usable


@dataclass
class SourceInfo:
    """Information about a photo source."""

    source_id: str
    source_name: str
    description: str | None = None
    base_url: str | None = None
    website_url: str | None = None
    recoverable: bool = False  # failures become soft misses

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_id": self.source_id,
            "source_name": self.source_name,
            "description": self.description,
            "base_url": self.base_url,
            "website_url": self.website_url,
            "recoverable": self.recoverable,
        }


@dataclass
class HealthCheckResult:
    """Result of a health check on a source."""

    status: str  # "ok", "error"
    response_time_ms: float
    error_message: str | None = None
