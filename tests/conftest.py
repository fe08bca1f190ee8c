# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for Feature Photos tests."""

import asyncio
import os
import pytest
from typing import Any, Generator

# Set test environment variables before importing the package
os.environ.setdefault("DISABLE_LOGGING", "1")
os.environ.setdefault("TESTING", "true")


class FakeFetcher:
    """
    Stand-in for JsonFetcher that answers from canned replies.

    ``routes`` maps a URL substring to a reply; the first matching route
    wins. A reply that is an exception instance is raised instead.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes = dict(routes or {})
        self.requested: list[str] = []
        self.evicted: list[str] = []

    async def fetch_json(self, url: str) -> Any:
        self.requested.append(url)
        # Yield like a real network call would
        await asyncio.sleep(0)

        for pattern, reply in self.routes.items():
            if pattern in url:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise AssertionError(f"Unexpected fetch: {url}")

    def remove_fetch_cache(self, url: str) -> None:
        self.evicted.append(url)

    def requests_to(self, pattern: str) -> list[str]:
        return [url for url in self.requested if pattern in url]


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio for async tests."""
    return "asyncio"


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Fetcher with no routes; tests add the replies they need."""
    return FakeFetcher()


@pytest.fixture
def resolver(fake_fetcher):
    """Resolver whose sources all share the fake fetcher."""
    from feature_photos.resolver import FeaturePhotoResolver

    return FeaturePhotoResolver(fetcher=fake_fetcher)


@pytest.fixture
def test_client() -> Generator:
    """Create a test client for the FastAPI application."""
    from fastapi.testclient import TestClient
    from api.main import app

    with TestClient(app) as client:
        yield client


# ============================================================================
# Sample features
# ============================================================================


@pytest.fixture
def center() -> tuple[float, float]:
    """Letná, Prague as (lon, lat)."""
    return (14.39052, 50.10027)


@pytest.fixture
def skeleton_feature(center):
    from feature_photos.connectors.types import OsmMeta, SkeletonFeature

    return SkeletonFeature(osm_meta=OsmMeta(type="node", id=123), center=center)


@pytest.fixture
def full_feature(center):
    from feature_photos.connectors.types import FullFeature, OsmMeta

    return FullFeature(osm_meta=OsmMeta(type="node", id=123), center=center, tags={})


# ============================================================================
# Sample provider replies
# ============================================================================


@pytest.fixture
def mapillary_reply() -> dict:
    """Mapillary v3 image search reply with one image."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "key": "abc123",
                    "username": "streetmapper",
                    "captured_at": "2020-05-01T10:00:00.000Z",
                },
                "geometry": {"type": "Point", "coordinates": [14.39051, 50.10025]},
            }
        ],
    }


@pytest.fixture
def empty_features_reply() -> dict:
    """GeoJSON reply without any feature (Mapillary or Fody)."""
    return {"type": "FeatureCollection", "features": []}


@pytest.fixture
def fody_reply() -> dict:
    """Fody /api/close reply with one photo."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "id": 4567,
                    "author": "fodyuser",
                    "created": "2019-06-01 12:00:00",
                },
                "geometry": {"type": "Point", "coordinates": [14.3905, 50.1003]},
            }
        ],
    }


@pytest.fixture
def wikidata_reply() -> dict:
    """wbgetclaims reply with a P18 image claim."""
    return {
        "claims": {
            "P18": [
                {
                    "mainsnak": {
                        "snaktype": "value",
                        "property": "P18",
                        "datavalue": {"value": "Tour Eiffel.jpg", "type": "string"},
                    }
                }
            ]
        }
    }


@pytest.fixture
def commons_reply() -> dict:
    """Commons imageinfo reply (landscape thumbnail)."""
    return {
        "query": {
            "pages": {
                "-1": {
                    "ns": 6,
                    "title": "File:Tour Eiffel.jpg",
                    "imageinfo": [
                        {
                            "thumburl": "https://upload.wikimedia.org/thumb/Tour_Eiffel.jpg/640px-Tour_Eiffel.jpg",
                            "thumbwidth": 640,
                            "thumbheight": 480,
                            "descriptionshorturl": "https://commons.wikimedia.org/w/index.php?curid=42",
                        }
                    ],
                }
            }
        }
    }


@pytest.fixture
def wikipedia_reply() -> dict:
    """Wikipedia pageimages reply (portrait thumbnail)."""
    return {
        "query": {
            "pages": {
                "9232": {
                    "pageid": 9232,
                    "title": "Eiffel Tower",
                    "pageimage": "Tour_Eiffel_Wikimedia_Commons.jpg",
                    "thumbnail": {
                        "source": "https://upload.wikimedia.org/thumb/Tour_Eiffel.jpg/427px-Tour_Eiffel.jpg",
                        "width": 427,
                        "height": 640,
                    },
                }
            }
        }
    }
