# SPDX-License-Identifier: MIT
"""Tests for photo resolution endpoints."""

import pytest

from feature_photos.resolver import FeaturePhotoResolver
from feature_photos.utils.http import HTTPError

FULL_FEATURE = {
    "center": [14.39052, 50.10027],
    "osmMeta": {"type": "node", "id": 123},
    "tags": {"wikipedia": "en:Eiffel Tower"},
}


@pytest.fixture
def photo_client(test_client, fake_fetcher):
    """Test client whose resolver answers from canned replies."""
    test_client.app.state.resolver = FeaturePhotoResolver(fetcher=fake_fetcher)
    return test_client


class TestResolveEndpoint:
    """Test POST /api/photos/resolve."""

    def test_found(self, photo_client, fake_fetcher, wikipedia_reply):
        fake_fetcher.routes["wikipedia.org"] = wikipedia_reply

        response = photo_client.post("/api/photos/resolve", json=FULL_FEATURE)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "found"
        assert data["photo"]["source"] == "Wikipedia"
        assert data["photo"]["portrait"] is True

    def test_skeleton_is_loading(self, photo_client, fake_fetcher, mapillary_reply):
        fake_fetcher.routes["mapillary.com"] = mapillary_reply

        response = photo_client.post(
            "/api/photos/resolve",
            json={"center": [14.39052, 50.10027], "osmMeta": {"type": "node", "id": 123}, "skeleton": True},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "loading", "photo": None}

    def test_not_found(self, photo_client, fake_fetcher, empty_features_reply):
        fake_fetcher.routes["osm.fit.vutbr.cz"] = empty_features_reply
        fake_fetcher.routes["mapillary.com"] = empty_features_reply

        response = photo_client.post(
            "/api/photos/resolve",
            json={"center": [14.39052, 50.10027], "nonOsmObject": True},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "not_found", "photo": None}

    @pytest.mark.parametrize(
        "payload",
        [
            {"osmMeta": {"type": "node", "id": 1}},
            {"center": [14.3], "osmMeta": {"type": "node", "id": 1}},
            {"center": [14.3, 95.0], "osmMeta": {"type": "node", "id": 1}},
            {"center": [14.3, 50.1], "osmMeta": {"type": "area", "id": 1}},
            {"center": [14.3, 50.1]},
        ],
    )
    def test_invalid_feature(self, photo_client, payload):
        response = photo_client.post("/api/photos/resolve", json=payload)
        assert response.status_code == 422

    def test_provider_failure_is_generic(self, photo_client, fake_fetcher):
        """Provider errors map to 502 without leaking details."""
        fake_fetcher.routes["wikipedia.org"] = HTTPError(
            "HTTP 500 for https://en.wikipedia.org/w/api.php: secret", status_code=500
        )

        response = photo_client.post("/api/photos/resolve", json=FULL_FEATURE)

        assert response.status_code == 502
        assert response.json() == {"detail": "Photo provider unavailable"}


class TestSourcesEndpoint:
    """Test GET /api/photos/sources."""

    def test_lists_sources_in_order(self, test_client):
        response = test_client.get("/api/photos/sources")

        assert response.status_code == 200
        ids = [source["source_id"] for source in response.json()]
        assert ids == ["wiki", "fody", "mapillary"]
