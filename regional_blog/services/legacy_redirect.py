"""
Legacy URL Redirector

Old front-end URLs carried no region or language: ``/article/<slug>``,
``/category/<slug>``, ``/author/<slug>``. They are mapped permanently to
the region-aware scheme using the entity's default-language variant
under the default region, whose prefix is empty:

    /article/mi-post  →  /article/my-post-en

The target never depends on the visitor, so the 301 is safe to cache.

The slug is matched with a single union lookup over the base slug and
every supported language's variant slug. Anything that does not match
passes through untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.urls import entity_path, with_query
from regional_blog.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


class LegacyUrlRedirector:
    def __init__(
        self,
        stores: Mapping[str, EntityStore],
        registry: LocaleRegistry,
        default_region: str,
    ):
        self.stores = stores
        self.registry = registry
        self.default_region = default_region

    def match(self, path: str) -> tuple[str, str] | None:
        """Split a legacy path into (segment, slug), or None if it is not one."""
        parts = path.strip("/").split("/")
        if len(parts) != 2 or not parts[1]:
            return None
        segment, slug = parts
        if segment not in self.stores:
            return None
        return segment, slug

    async def redirect(self, path: str, query_string: str = "") -> str | None:
        matched = self.match(path)
        if matched is None:
            return None
        segment, slug = matched

        entity = await self.stores[segment].find_by_slug_across_languages(
            slug.lower(), self.registry.language_codes
        )
        if entity is None:
            return None

        target = entity_path(entity, segment, self.default_region, entity.default_language, self.default_region)
        if target == path.rstrip("/"):
            # Already the canonical default-region URL.
            return None
        logger.info("Legacy redirect %s -> %s", path, target)
        return with_query(target, query_string)
