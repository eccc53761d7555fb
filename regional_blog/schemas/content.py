"""
Request and response schemas for translatable content.

Responses are always localized: the fields come from the variant served
for the resolved language (or the default-language variant when that
language is missing), ``language`` says which one was served, and
``available_translations`` lists every present variant in canonical
order for cross-language navigation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.translatable import RegionVisibility, get_translation, served_language


# ── Requests ───────────────────────────────────────────────────────────────────


class VisibilityUpdate(BaseModel):
    is_global: bool = True
    region_restrictions: list[str] = []

    def to_visibility(self) -> RegionVisibility:
        if self.is_global:
            return RegionVisibility.global_()
        return RegionVisibility.restricted_to(self.region_restrictions)


class TranslatableCreate(VisibilityUpdate):
    translations: dict[str, dict[str, Any]]
    default_language: str | None = None
    base_slug: str | None = None

    def attributes(self) -> dict[str, Any]:
        """Model-specific, non-translated fields of the payload."""
        shared = set(TranslatableCreate.model_fields)
        return {key: value for key, value in self.model_dump().items() if key not in shared}


class ArticleCreate(TranslatableCreate):
    category_id: int
    author_id: int
    image_url: str | None = None
    tags: list[str] = []
    published: bool = False
    featured: bool = False
    trending: bool = False


class CategoryCreate(TranslatableCreate):
    color: str | None = None


class AuthorCreate(TranslatableCreate):
    avatar: str | None = None


class TranslationUpsert(BaseModel):
    """Fields of one language variant; unknown keys are ignored by the variant model."""

    fields: dict[str, Any] = Field(default_factory=dict)


# ── Responses ──────────────────────────────────────────────────────────────────


class AvailableTranslation(BaseModel):
    slug: str | None
    title: str | None


class SeoMeta(BaseModel):
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] = []


class LocalizedRef(BaseModel):
    id: int
    base_slug: str
    slug: str
    name: str | None
    language: str

    @classmethod
    def from_entity(cls, entity: Any, language: str) -> LocalizedRef:
        variant = get_translation(entity, language)
        return cls(
            id=entity.id,
            base_slug=entity.base_slug,
            slug=variant.slug or entity.base_slug,
            name=variant.display_name,
            language=served_language(entity, language),
        )


class LocalizedResponse(BaseModel):
    id: int
    base_slug: str
    slug: str
    language: str
    requested_language: str
    available_translations: dict[str, AvailableTranslation]
    is_global: bool
    region_restrictions: list[str]
    seo: SeoMeta

    @staticmethod
    def common_fields(entity: Any, language: str, registry: LocaleRegistry) -> dict[str, Any]:
        variant = get_translation(entity, language)
        visibility = entity.visibility
        available = {
            code: AvailableTranslation(
                slug=entity.variants[code].slug,
                title=entity.variants[code].display_name,
            )
            for code in entity.get_available_languages(registry)
        }
        return {
            "id": entity.id,
            "base_slug": entity.base_slug,
            "slug": variant.slug or entity.base_slug,
            "language": served_language(entity, language),
            "requested_language": language,
            "available_translations": available,
            "is_global": visibility.is_global,
            "region_restrictions": sorted(visibility.regions),
            "seo": SeoMeta(
                meta_title=variant.meta_title,
                meta_description=variant.meta_description,
                keywords=variant.keywords,
            ),
        }


class ArticleResponse(LocalizedResponse):
    title: str | None
    excerpt: str | None
    content: list[str]
    image_url: str | None
    category: LocalizedRef | None
    author: LocalizedRef | None
    tags: list[str]
    published_at: datetime | None
    views: int
    likes: int
    read_time: str
    featured: bool
    trending: bool

    @classmethod
    def from_entity(cls, article: Any, language: str, registry: LocaleRegistry) -> ArticleResponse:
        variant = get_translation(article, language)
        return cls(
            **cls.common_fields(article, language, registry),
            title=variant.title,
            excerpt=variant.excerpt,
            content=variant.content,
            image_url=article.image_url,
            category=LocalizedRef.from_entity(article.category, language) if article.category else None,
            author=LocalizedRef.from_entity(article.author, language) if article.author else None,
            tags=article.tags or [],
            published_at=article.published_at,
            views=article.views or 0,
            likes=article.likes or 0,
            read_time=article.read_time or "1 min read",
            featured=bool(article.featured),
            trending=bool(article.trending),
        )


class CategoryResponse(LocalizedResponse):
    name: str | None
    description: str | None
    color: str | None

    @classmethod
    def from_entity(cls, category: Any, language: str, registry: LocaleRegistry) -> CategoryResponse:
        variant = get_translation(category, language)
        return cls(
            **cls.common_fields(category, language, registry),
            name=variant.name,
            description=variant.description,
            color=category.color,
        )


class AuthorResponse(LocalizedResponse):
    name: str | None
    bio: str | None
    avatar: str | None
    total_views: int

    @classmethod
    def from_entity(cls, author: Any, language: str, registry: LocaleRegistry) -> AuthorResponse:
        variant = get_translation(author, language)
        return cls(
            **cls.common_fields(author, language, registry),
            name=variant.name,
            bio=variant.bio,
            avatar=author.avatar,
            total_views=author.total_views or 0,
        )


class ArticleList(BaseModel):
    region: str
    language: str
    count: int
    data: list[ArticleResponse]


class CategoryList(BaseModel):
    region: str
    language: str
    count: int
    data: list[CategoryResponse]


class AuthorList(BaseModel):
    region: str
    language: str
    count: int
    data: list[AuthorResponse]


class GlobalSearchResponse(BaseModel):
    query: str
    region: str
    language: str
    articles: ArticleList
    categories: CategoryList
    authors: AuthorList


class EntityAdminResponse(BaseModel):
    """Editor view: every stored variant, unlocalized."""

    id: int
    resource: str
    base_slug: str
    default_language: str
    translations: dict[str, dict[str, Any]]
    available_languages: list[str]
    is_global: bool
    region_restrictions: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: Any, registry: LocaleRegistry) -> EntityAdminResponse:
        visibility = entity.visibility
        return cls(
            id=entity.id,
            resource=entity.resource_name,
            base_slug=entity.base_slug,
            default_language=entity.default_language,
            translations=entity.variants.to_json(),
            available_languages=entity.get_available_languages(registry),
            is_global=visibility.is_global,
            region_restrictions=sorted(visibility.regions),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
