"""
TranslatableMixin

Shared columns and behaviour for every translatable content type
(Article, Category, Author, Ad). Translations live in one JSON column
shaped ``{language: {slug, <primary field>, ...}}``; visibility is the
``is_global`` flag plus a list of region codes.

``region_scope`` is derived from the visibility descriptor and exists so
that ``(base_slug, region_scope)`` can be unique: regional editions of
the same entity share a base slug, two entities in the same scope cannot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.translatable import (
    GLOBAL_SCOPE,
    RegionVisibility,
    TranslationMap,
    TranslationVariant,
    get_available_languages,
    get_translation,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TranslatableMixin:
    variant_type = TranslationVariant
    resource_name = "Content"

    base_slug = Column(String(200), nullable=False, index=True)
    default_language = Column(String(5), nullable=False, index=True)
    translations = Column(JSON, nullable=False, default=dict)

    # ── Region visibility ─────────────────────────────────────────────────────
    is_global = Column(Boolean, nullable=False, default=True, index=True)
    region_restrictions = Column(JSON, nullable=False, default=list)
    region_scope = Column(String(200), nullable=False, default=GLOBAL_SCOPE)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    @property
    def variants(self) -> TranslationMap:
        return TranslationMap(self.translations, self.variant_type)

    @property
    def visibility(self) -> RegionVisibility:
        return RegionVisibility.from_columns(self.is_global, self.region_restrictions)

    def set_translations(self, translations: TranslationMap) -> None:
        # Always assign a fresh dict so the JSON column is flagged dirty.
        self.translations = translations.to_json()

    def set_visibility(self, visibility: RegionVisibility) -> None:
        self.is_global = visibility.is_global
        self.region_restrictions = sorted(visibility.regions)
        self.region_scope = visibility.scope_key

    def get_translation(self, language: str | None) -> TranslationVariant:
        return get_translation(self, language)

    def get_available_languages(self, registry: LocaleRegistry) -> list[str]:
        return get_available_languages(self, registry)

    @classmethod
    def public_criteria(cls) -> list[Any]:
        """Extra WHERE clauses applied to public (visitor-facing) lookups."""
        return []
