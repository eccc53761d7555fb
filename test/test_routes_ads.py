"""
Tests for the ad routes
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from regional_blog.routes import ads as ad_routes
from utils.mock_utils import make_ad
from utils.mocks import InMemoryEntityStore, set_scalars


@pytest.fixture
def ad_store():
    return InMemoryEntityStore(resource_name="Ad")


@pytest.fixture
def ads_client(app, client, ad_store):
    app.dependency_overrides[ad_routes.ad_store] = lambda: ad_store
    return client


class TestListAds:
    def test_targeted_and_ordered(self, ads_client, mock_db):
        set_scalars(
            mock_db,
            all=[
                make_ad(1, priority=1),
                make_ad(2, priority=5),
                make_ad(3, target_regions=["FR"]),
                make_ad(4, end_date=datetime.now(timezone.utc) - timedelta(days=1)),
            ],
        )

        body = ads_client.get("/api/ads?placement=sidebar").json()

        assert (body["placement"], body["region"], body["language"]) == ("sidebar", "US", "en")
        assert [ad["id"] for ad in body["data"]] == [2, 1]

    def test_region_prefix_applies_targeting(self, ads_client, mock_db):
        set_scalars(mock_db, all=[make_ad(1), make_ad(3, target_regions=["FR"], target_languages=["fr"])])

        body = ads_client.get("/api/fr/ads?placement=sidebar").json()

        assert {ad["id"] for ad in body["data"]} == {1, 3}
        assert body["language"] == "fr"

    def test_category_targeting(self, ads_client, mock_db):
        set_scalars(mock_db, all=[make_ad(1, target_categories=[4]), make_ad(2, target_categories=[9])])

        body = ads_client.get("/api/ads?placement=sidebar&category=4").json()

        assert [ad["id"] for ad in body["data"]] == [1]

    def test_single_draws_one(self, ads_client, mock_db):
        set_scalars(mock_db, all=[make_ad(1, priority=3), make_ad(2, priority=3)])

        body = ads_client.get("/api/ads?placement=sidebar&single=true").json()

        assert body["count"] == 1
        assert body["data"][0]["id"] in {1, 2}

    def test_single_without_candidates(self, ads_client):
        body = ads_client.get("/api/ads?placement=sidebar&single=true").json()
        assert body["count"] == 0

    def test_limit(self, ads_client, mock_db):
        set_scalars(mock_db, all=[make_ad(i) for i in range(1, 6)])
        assert ads_client.get("/api/ads?placement=sidebar&limit=2").json()["count"] == 2

    def test_unknown_placement(self, ads_client):
        assert ads_client.get("/api/ads?placement=popup").status_code == 422


class TestAdTracking:
    def test_impression_dispatched(self, ads_client, mock_db, ad_store, recording_channel):
        mock_db.get = AsyncMock(return_value=make_ad(7))

        response = ads_client.post("/api/ads/7/impression")

        assert response.status_code == 202
        name, func, args, _ = recording_channel.dispatched[0]
        assert name == "ad-impression"
        assert func == ad_store.increment_counter
        assert args == (7, "impressions")

    def test_click_returns_target(self, ads_client, mock_db, recording_channel):
        mock_db.get = AsyncMock(return_value=make_ad(7, click_url="https://example.com/offer"))

        response = ads_client.post("/api/ads/7/click")

        assert response.json()["click_url"] == "https://example.com/offer"
        assert recording_channel.names() == ["ad-click"]

    def test_unknown_ad(self, ads_client, mock_db, recording_channel):
        mock_db.get = AsyncMock(return_value=None)

        assert ads_client.post("/api/ads/99/click").status_code == 404
        assert recording_channel.dispatched == []

    def test_get_ad_localized(self, ads_client, mock_db):
        mock_db.get = AsyncMock(return_value=make_ad(7))

        body = ads_client.get("/api/de/ads/7").json()

        assert body["title"] == "Ad 7"
        assert body["language"] == "en"
