"""
Photo API Routes - Representative photos for map features.

Endpoints:
- POST /api/photos/resolve - Resolve a feature observation to a photo
- GET /api/photos/sources - List photo sources in resolution order
"""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from feature_photos.connectors import LOADING, SourceRegistry, feature_from_dict

logger = logging.getLogger(__name__)
router = APIRouter()


# ============================================================================
# Request / Response Models
# ============================================================================


class OsmMetaPayload(BaseModel):
    """OSM element identity."""

    type: Literal["node", "way", "relation"]
    id: int


class FeaturePayload(BaseModel):
    """Feature observation as sent by the map client."""

    model_config = ConfigDict(populate_by_name=True)

    center: list[float] = Field(..., min_length=2, max_length=2, description="[lon, lat]")
    osm_meta: OsmMetaPayload | None = Field(default=None, alias="osmMeta")
    tags: dict[str, str] = Field(default_factory=dict, description="OSM tags")
    skeleton: bool = Field(default=False, description="Identity and coordinates only")
    non_osm_object: bool = Field(default=False, alias="nonOsmObject")


class PhotoPayload(BaseModel):
    """Resolved photo."""

    source: str
    link: str | None = None
    thumb: str | None = None
    username: str | None = None
    portrait: bool | None = None
    timestamp: str | int | None = None


class PhotoResponse(BaseModel):
    """Outcome of a resolve call."""

    status: Literal["found", "loading", "not_found"]
    photo: PhotoPayload | None = None


class SourceInfoResponse(BaseModel):
    """Response for source info."""

    source_id: str
    source_name: str
    description: str | None = None
    base_url: str | None = None
    website_url: str | None = None
    recoverable: bool = False


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/resolve", response_model=PhotoResponse)
async def resolve_photo(payload: FeaturePayload, request: Request):
    """
    Resolve a feature observation to one representative photo.

    A skeleton observation answers "loading"; send the full feature next
    to get the photo.
    """
    try:
        feature = feature_from_dict(payload.model_dump(by_alias=True))
    except ValueError as e:
        raise HTTPException(422, str(e)) from e

    resolver = request.app.state.resolver
    try:
        record = await resolver.resolve(feature)
    except Exception as e:
        logger.error(f"Photo resolution failed for {payload.center}: {e!r}")
        raise HTTPException(502, "Photo provider unavailable") from e

    if record is LOADING:
        return PhotoResponse(status="loading")
    if record is None:
        return PhotoResponse(status="not_found")
    return PhotoResponse(status="found", photo=PhotoPayload(**record.to_dict()))


@router.get("/sources", response_model=list[SourceInfoResponse])
async def list_sources(request: Request):
    """List photo sources in resolution priority order."""
    fetcher = request.app.state.fetcher
    return [info.to_dict() for info in SourceRegistry.list_sources(fetcher)]
