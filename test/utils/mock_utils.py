"""
Mock utilities for creating test data

Helpers build a locale registry and transient (never flushed) ORM
instances, so no database is needed.
"""

from __future__ import annotations

from datetime import datetime, timezone

from regional_blog.i18n.registry import LanguageEntry, LocaleRegistry, RegionEntry
from regional_blog.i18n.seed import SEED_LANGUAGES, SEED_REGIONS
from regional_blog.models.ad import Ad, AdStatus
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category


def make_registry(regions: list[dict] | None = None, languages: list[tuple[str, str]] | None = None) -> LocaleRegistry:
    """Registry from plain dicts; defaults to the full seed catalogue."""
    regions = SEED_REGIONS if regions is None else regions
    languages = SEED_LANGUAGES if languages is None else languages
    return LocaleRegistry(
        regions=tuple(
            RegionEntry(
                code=data["code"],
                name=data.get("name", data["code"]),
                languages=tuple(data["languages"]),
                default_language=data["default_language"],
                is_active=data.get("is_active", True),
                currency=data.get("currency"),
            )
            for data in regions
        ),
        languages=tuple(LanguageEntry(code, name) for code, name in languages),
    )


def _visibility_columns(regions):
    if regions is None:
        return {"is_global": True, "region_restrictions": [], "region_scope": "*"}
    codes = sorted(code.upper() for code in regions)
    return {"is_global": False, "region_restrictions": codes, "region_scope": ",".join(codes)}


def make_article(
    id: int = 1,
    base_slug: str = "my-post",
    translations: dict | None = None,
    default_language: str = "en",
    regions: list[str] | None = None,
    **attributes,
) -> Article:
    """Transient Article. ``regions=None`` means global."""
    if translations is None:
        translations = {"en": {"slug": base_slug, "title": "My post", "excerpt": "Excerpt", "content": ["Body"]}}
    values = {
        "published": True,
        "published_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "featured": False,
        "trending": False,
        "tags": [],
        "views": 0,
        "likes": 0,
        "read_time": "1 min read",
        "category_id": None,
        "author_id": None,
    }
    values.update(attributes)
    return Article(
        id=id,
        base_slug=base_slug,
        default_language=default_language,
        translations=translations,
        **_visibility_columns(regions),
        **values,
    )


def make_category(id: int = 1, base_slug: str = "travel", translations: dict | None = None, **attributes) -> Category:
    if translations is None:
        translations = {"en": {"slug": base_slug, "name": "Travel"}, "fr": {"slug": "voyage", "name": "Voyage"}}
    return Category(
        id=id,
        base_slug=base_slug,
        default_language=attributes.pop("default_language", "en"),
        translations=translations,
        **_visibility_columns(attributes.pop("regions", None)),
        **attributes,
    )


def make_author(id: int = 1, base_slug: str = "jane-doe", translations: dict | None = None, **attributes) -> Author:
    if translations is None:
        translations = {"en": {"slug": base_slug, "name": "Jane Doe", "bio": "Writer"}}
    return Author(
        id=id,
        base_slug=base_slug,
        default_language=attributes.pop("default_language", "en"),
        translations=translations,
        total_views=attributes.pop("total_views", 0),
        **_visibility_columns(attributes.pop("regions", None)),
        **attributes,
    )


def make_ad(id: int = 1, **attributes) -> Ad:
    """Transient, currently-active sidebar ad with no targeting."""
    values = {
        "name": f"Ad {id}",
        "type": "banner",
        "status": AdStatus.active.value,
        "is_active": True,
        "placement": "sidebar",
        "position": 0,
        "priority": 0,
        "target_regions": [],
        "target_languages": [],
        "target_categories": [],
        "start_date": None,
        "end_date": None,
        "max_impressions": None,
        "max_clicks": None,
        "impressions": 0,
        "clicks": 0,
        "click_url": "https://example.com",
        "created_at": datetime(2024, 1, id, tzinfo=timezone.utc),
    }
    values.update(attributes)
    return Ad(
        id=id,
        base_slug=f"ad-{id}",
        default_language="en",
        translations={"en": {"slug": f"ad-{id}", "title": f"Ad {id}", "cta_text": "Buy"}},
        **_visibility_columns(None),
        **values,
    )
