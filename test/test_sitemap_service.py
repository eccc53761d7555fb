"""
Tests for region-aware sitemaps
"""

from datetime import datetime, timezone

import pytest

from regional_blog.config import settings
from regional_blog.services.sitemap_service import SitemapService
from utils.mock_utils import make_article, make_author, make_category
from utils.mocks import make_async_mock_db, set_scalars

BASE = "https://blog.example.com"

SUMMER = {
    "en": {"slug": "summer-guide", "title": "Summer guide"},
    "fr": {"slug": "guide-ete", "title": "Guide de l'été"},
}


def summer(id=1, **kwargs):
    return make_article(
        id=id,
        base_slug="summer-guide",
        translations=SUMMER,
        updated_at=datetime(2024, 3, 2, tzinfo=timezone.utc),
        **kwargs,
    )


@pytest.fixture
def service(us_fr_registry):
    return SitemapService(make_async_mock_db(), us_fr_registry, BASE + "/", "us")


class TestEntityEntries:
    def test_one_url_per_visible_region(self, service):
        entries = service.entity_entries(summer(), "article")

        assert [entry.path for entry in entries] == ["/article/summer-guide", "/fr/article/guide-ete"]
        assert entries[0].lastmod == "2024-03-02"

    def test_alternates_per_language_plus_default(self, service):
        entries = service.entity_entries(summer(), "article")

        assert entries[0].alternates == [
            ("en", "/article/summer-guide"),
            ("fr", "/fr/article/guide-ete"),
            ("x-default", "/article/summer-guide"),
        ]
        assert entries[1].alternates == entries[0].alternates

    def test_restricted_entity_only_under_its_regions(self, service):
        entries = service.entity_entries(summer(regions=["FR"]), "article")

        assert [entry.path for entry in entries] == ["/fr/article/guide-ete"]
        assert entries[0].alternates == [
            ("en", "/fr/article/summer-guide"),
            ("fr", "/fr/article/guide-ete"),
        ]

    def test_untranslated_region_skipped(self, service):
        english_only = make_article(id=2, base_slug="news")

        entries = service.entity_entries(english_only, "article")

        assert [entry.path for entry in entries] == ["/article/news"]
        assert entries[0].alternates == [("en", "/article/news"), ("x-default", "/article/news")]

    def test_regional_edition_listed_in_supported_language(self, service):
        english_only = make_article(id=2, base_slug="news", regions=["FR"])

        entries = service.entity_entries(english_only, "article")

        assert [entry.path for entry in entries] == ["/fr/article/news"]

    def test_default_region_serves_fallback_variant(self, service):
        french_default = make_category(
            id=3,
            base_slug="voyage",
            default_language="fr",
            translations={"fr": {"slug": "voyage", "name": "Voyage"}},
        )

        entries = service.entity_entries(french_default, "category")

        assert [entry.path for entry in entries] == ["/category/voyage", "/fr/category/voyage"]

    def test_hidden_everywhere(self, service):
        assert service.entity_entries(summer(regions=[]), "article") == []


class TestGenerate:
    @pytest.mark.asyncio
    async def test_article_sitemap(self, service):
        set_scalars(service.db, all=[summer()])

        xml = await service.generate_section("articles")

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f"<loc>{BASE}/article/summer-guide</loc>" in xml
        assert f"<loc>{BASE}/fr/article/guide-ete</loc>" in xml
        assert f'hreflang="fr" href="{BASE}/fr/article/guide-ete"' in xml
        assert 'hreflang="x-default"' in xml
        assert "<priority>0.8</priority>" in xml
        assert "<lastmod>2024-03-02</lastmod>" in xml

    @pytest.mark.asyncio
    async def test_broken_entity_left_out(self, service):
        broken = make_article(id=4, base_slug="broken", translations={"fr": {"slug": "casse", "title": "Cassé"}})
        set_scalars(service.db, all=[broken, summer()])

        xml = await service.generate_section("articles")

        assert "casse" not in xml
        assert "/article/summer-guide" in xml

    @pytest.mark.asyncio
    async def test_query_filters_public_rows(self, service):
        await service.generate_section("articles")

        statement = service.db.execute.call_args.args[0]
        assert "articles.published" in str(statement)
        assert statement._limit_clause.value == 50000

    @pytest.mark.asyncio
    async def test_author_sitemap(self, service):
        set_scalars(service.db, all=[make_author(id=7)])

        xml = await service.generate_section("authors")

        assert f"<loc>{BASE}/author/jane-doe</loc>" in xml
        assert "<changefreq>monthly</changefreq>" in xml

    def test_main_sitemap(self, service):
        xml = service.generate_main_sitemap()

        assert f"<loc>{BASE}/</loc>" in xml
        assert f"<loc>{BASE}/fr/</loc>" in xml
        assert f'hreflang="fr" href="{BASE}/fr/"' in xml
        assert f'hreflang="x-default" href="{BASE}/"' in xml

    def test_sitemap_index(self, service):
        xml = service.generate_sitemap_index()

        assert "<sitemapindex" in xml
        for name in ("main", "articles", "categories", "authors"):
            assert f"<loc>{BASE}/sitemap-{name}.xml</loc>" in xml


class TestSitemapRoutes:
    def test_index(self, client):
        response = client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert response.headers["Cache-Control"] == "public, max-age=3600"
        assert "<loc>http://testserver/sitemap-articles.xml</loc>" in response.text

    def test_site_url_setting(self, client, monkeypatch):
        monkeypatch.setattr(settings, "site_url", BASE)

        response = client.get("/sitemap-main.xml")

        assert f"<loc>{BASE}/de/</loc>" in response.text

    def test_article_sitemap_lists_regional_editions(self, client, mock_db):
        set_scalars(mock_db, all=[summer(), summer(id=2, regions=["DE"])])

        response = client.get("/sitemap-articles.xml")

        assert response.status_code == 200
        assert "<loc>http://testserver/article/summer-guide</loc>" in response.text
        assert "<loc>http://testserver/ca/article/summer-guide</loc>" in response.text
        assert "<loc>http://testserver/fr/article/guide-ete</loc>" in response.text
        # the DE edition has no German variant and is listed in English
        assert "<loc>http://testserver/de/article/summer-guide</loc>" in response.text
        # the global edition has no German variant either and is left out of /de/
        assert response.text.count("<loc>http://testserver/de/") == 1

    def test_category_sitemap(self, client, mock_db):
        set_scalars(mock_db, all=[make_category(id=3)])

        response = client.get("/sitemap-categories.xml")

        assert "<loc>http://testserver/category/travel</loc>" in response.text
        assert "<loc>http://testserver/fr/category/voyage</loc>" in response.text
