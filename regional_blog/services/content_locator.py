"""
Content Locator

Resolves a visitor-facing slug to a stored entity. A slug may be the
canonical base slug, the slug of the preferred language's variant, or the
slug of some other language's variant (a link shared from another
locale). Lookup order:

  1. base slug
  2. variant slug in the preferred language
  3. variant slug in any other language, canonical language order

Base slugs outrank variant slugs so a collision between the two can never
shadow the canonical entity. Slugs are matched exactly; stored slugs are
always produced by ``utils.slugify``.

Regional editions share their slugs. Given the visitor's region, the
first hit visible there wins and a hidden hit is only returned when no
step finds a visible one. A redirect to a visible edition therefore
always resolves to that edition.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic

from regional_blog.exceptions import EntityNotFoundError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.services.entity_store import E, EntityStore

logger = logging.getLogger(__name__)


class ContentLocator(Generic[E]):
    def __init__(self, store: EntityStore[E], registry: LocaleRegistry):
        self.store = store
        self.registry = registry

    def _variant_languages(self, preferred_language: str | None) -> Iterator[str]:
        preferred = (preferred_language or "").lower()
        if self.registry.is_supported_language(preferred):
            yield preferred
        for language in self.registry.language_codes:
            if language != preferred:
                yield language

    async def _hits(self, slug: str, preferred_language: str | None, region: str | None):
        entity = await self.store.find_by_base_slug(slug, region)
        if entity is not None:
            yield entity
        for language in self._variant_languages(preferred_language):
            entity = await self.store.find_by_variant_slug(slug, language, region)
            if entity is not None:
                logger.debug("Slug %r matched the %s variant", slug, language)
                yield entity

    async def locate(self, slug: str, preferred_language: str | None, region: str | None = None) -> E | None:
        if not slug:
            return None

        hidden = None
        async for entity in self._hits(slug, preferred_language, region):
            if region is None or entity.visibility.allows(region):
                return entity
            if hidden is None:
                hidden = entity
        return hidden

    async def locate_or_404(self, slug: str, preferred_language: str | None, region: str | None = None) -> E:
        entity = await self.locate(slug, preferred_language, region)
        if entity is None:
            raise EntityNotFoundError(self.store.resource_name, slug)
        return entity
