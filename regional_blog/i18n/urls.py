"""
Public URL shapes for localized content.

    {region prefix}/{segment}/{variant slug}

The default region has an empty prefix; every other region is prefixed
with its lowercased code ("/fr/article/mon-article").
"""

from __future__ import annotations

from regional_blog.i18n.translatable import TranslatableEntity, variant_slug


def region_prefix(region: str, default_region: str) -> str:
    if region.upper() == default_region.upper():
        return ""
    return f"/{region.lower()}"


def entity_path(
    entity: TranslatableEntity,
    segment: str,
    region: str,
    language: str | None,
    default_region: str,
) -> str:
    return f"{region_prefix(region, default_region)}/{segment}/{variant_slug(entity, language)}"


def with_query(path: str, query_string: str | None) -> str:
    """Append a raw query string unchanged."""
    if not query_string:
        return path
    return f"{path}?{query_string}"
