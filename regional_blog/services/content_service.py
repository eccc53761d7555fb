"""
Content Service

Editor-side writes for translatable content. Every write goes through
``build_translation_map`` so an entity can never be stored with a
language outside the registry or without its default-language variant.

Functions:
    get_entity_by_id: fetch by primary key or raise 404
    create_entity: insert a new entity (any translatable model)
    upsert_translation: create or partially update one language variant
    remove_translation: drop one non-default variant
    update_visibility: switch between global and region-restricted
    update_attributes: update non-translated fields
    delete_entity: delete, refusing when articles still reference it
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from regional_blog.exceptions import (
    DuplicateResourceError,
    EntityNotFoundError,
    InvalidOperationError,
    MissingDefaultVariantError,
    ValidationError,
)
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.translatable import RegionVisibility, TranslationMap, build_translation_map
from regional_blog.models.ad import Ad, AdStatus
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category
from regional_blog.models.mixins import TranslatableMixin
from regional_blog.services.entity_store import variant_slug_column
from regional_blog.utils.slugify import slugify

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=TranslatableMixin)

WORDS_PER_MINUTE = 225


def calculate_read_time(paragraphs: list[str] | None) -> str:
    words = " ".join(paragraphs or []).split()
    return f"{max(1, math.ceil(len(words) / WORDS_PER_MINUTE))} min read"


def _with_generated_slugs(raw: dict[str, Any], primary_field: str) -> dict[str, Any]:
    """Fill missing variant slugs from the variant's primary field."""
    prepared: dict[str, Any] = {}
    for language, variant in (raw or {}).items():
        variant = dict(variant or {})
        if not variant.get("slug") and variant.get(primary_field):
            variant["slug"] = slugify(variant[primary_field])
        elif variant.get("slug"):
            variant["slug"] = slugify(variant["slug"])
        prepared[language] = variant
    return prepared


def _default_language(registry: LocaleRegistry, requested: str | None, default_region: str) -> str:
    if requested:
        return requested.lower()
    region = registry.find_region(default_region)
    if region is None:
        raise ValidationError("default_language is required", field="default_language")
    return region.default_language


def _before_save(entity: TranslatableMixin) -> None:
    if isinstance(entity, Article):
        default = entity.variants.get(entity.default_language)
        entity.read_time = calculate_read_time(default.content if default is not None else None)
        if entity.published and entity.published_at is None:
            entity.published_at = datetime.now(timezone.utc)
    elif isinstance(entity, Ad):
        end = entity.end_date
        if end is not None and end.tzinfo is None:
            end = end.replace(tzinfo=timezone.utc)
        if entity.status in (AdStatus.active.value, AdStatus.paused.value) and end is not None:
            if end < datetime.now(timezone.utc):
                entity.status = AdStatus.expired.value


async def _ensure_unique_scope(
    model: type[TranslatableMixin],
    base_slug: str,
    visibility: RegionVisibility,
    db: AsyncSession,
    exclude_id: Any = None,
) -> None:
    query = select(model.id).where(model.base_slug == base_slug, model.region_scope == visibility.scope_key)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    result = await db.execute(query)
    if result.scalars().first() is not None:
        raise DuplicateResourceError(model.resource_name, "base_slug", base_slug)


async def _ensure_unique_variant_slugs(
    model: type[TranslatableMixin],
    base_slug: str,
    translations: TranslationMap,
    db: AsyncSession,
) -> None:
    """A variant slug may be shared by regional editions of one base slug, never across two."""
    for language, variant in translations.items():
        if not variant.slug:
            continue
        query = select(model.id).where(
            variant_slug_column(model, language) == variant.slug,
            model.base_slug != base_slug,
        )
        result = await db.execute(query.limit(1))
        if result.scalars().first() is not None:
            raise DuplicateResourceError(model.resource_name, f"translations.{language}.slug", variant.slug)


async def _save(entity: T, db: AsyncSession, action: str) -> T:
    _before_save(entity)
    db.add(entity)
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Error saving {type(entity).__name__}: {str(e)}")
        raise
    await db.refresh(entity)
    logger.info("%s %s: id=%s base_slug=%s", type(entity).__name__, action, entity.id, entity.base_slug)
    return entity


async def get_entity_by_id(model: type[T], entity_id: int, db: AsyncSession) -> T:
    entity = await db.get(model, entity_id)
    if entity is None:
        raise EntityNotFoundError(model.resource_name, entity_id)
    return entity


async def create_entity(
    model: type[T],
    translations: dict[str, Any],
    registry: LocaleRegistry,
    db: AsyncSession,
    *,
    default_region: str,
    default_language: str | None = None,
    base_slug: str | None = None,
    visibility: RegionVisibility | None = None,
    **attributes: Any,
) -> T:
    """Insert a new translatable entity.

    Raises:
        UnknownLanguageError: a translation key is not a registry language.
        MissingDefaultVariantError: no present default-language variant.
        DuplicateResourceError: base slug already used in the same visibility scope.
    """
    language = _default_language(registry, default_language, default_region)
    primary = model.variant_type.primary_field
    translation_map = build_translation_map(
        _with_generated_slugs(translations, primary), model.variant_type, registry, language
    )

    slug = slugify(base_slug or translation_map[language].display_name or "")
    if not slug:
        raise ValidationError("Unable to derive a base slug", field="base_slug")

    visibility = visibility or RegionVisibility.global_()
    await _ensure_unique_scope(model, slug, visibility, db)
    await _ensure_unique_variant_slugs(model, slug, translation_map, db)

    entity = model(base_slug=slug, default_language=language, **attributes)
    entity.set_translations(translation_map)
    entity.set_visibility(visibility)
    return await _save(entity, db, "created")


async def upsert_translation(
    entity: T,
    language: str,
    fields: dict[str, Any],
    registry: LocaleRegistry,
    db: AsyncSession,
) -> T:
    """Create or partially update one variant. ``None`` values are left unchanged."""
    language = language.lower()
    raw = entity.variants.to_json()
    variant = dict(raw.get(language, {}))
    variant.update({key: value for key, value in fields.items() if value is not None})
    raw[language] = variant

    primary = type(entity).variant_type.primary_field
    translation_map = build_translation_map(
        _with_generated_slugs(raw, primary), type(entity).variant_type, registry, entity.default_language
    )
    await _ensure_unique_variant_slugs(type(entity), entity.base_slug, translation_map, db)
    entity.set_translations(translation_map)
    return await _save(entity, db, f"translation {language} saved")


async def remove_translation(entity: T, language: str, registry: LocaleRegistry, db: AsyncSession) -> T:
    language = language.lower()
    if language == entity.default_language:
        raise MissingDefaultVariantError(entity.default_language)
    raw = entity.variants.to_json()
    if language not in raw:
        raise EntityNotFoundError(f"{entity.resource_name} translation", language)
    del raw[language]
    translation_map = build_translation_map(raw, type(entity).variant_type, registry, entity.default_language)
    entity.set_translations(translation_map)
    return await _save(entity, db, f"translation {language} removed")


async def update_visibility(entity: T, visibility: RegionVisibility, db: AsyncSession) -> T:
    await _ensure_unique_scope(type(entity), entity.base_slug, visibility, db, exclude_id=entity.id)
    entity.set_visibility(visibility)
    return await _save(entity, db, "visibility updated")


async def update_attributes(entity: T, updates: dict[str, Any], db: AsyncSession) -> T:
    """Update non-translated columns. Base slug and translation columns are immutable here."""
    protected = {"id", "base_slug", "translations", "default_language", "is_global", "region_restrictions", "region_scope"}
    for key, value in updates.items():
        if key in protected or not hasattr(type(entity), key):
            continue
        setattr(entity, key, value)
    return await _save(entity, db, "updated")


async def delete_entity(entity: TranslatableMixin, db: AsyncSession) -> None:
    if isinstance(entity, (Category, Author)):
        column = Article.category_id if isinstance(entity, Category) else Article.author_id
        count = (await db.execute(select(func.count(Article.id)).where(column == entity.id))).scalar() or 0
        if count:
            raise InvalidOperationError(
                f"Cannot delete {entity.resource_name.lower()} with {count} article(s). "
                "Please reassign or delete articles first.",
                details={"article_count": count},
            )
    await db.delete(entity)
    await db.commit()
    logger.info("%s deleted: id=%s base_slug=%s", type(entity).__name__, entity.id, entity.base_slug)
