"""
Translatable entities

Articles, categories, authors and ads share one shape: a canonical base
slug, a default language, a language → variant mapping and a region
visibility descriptor. This module holds that shape and the translation
fallback rules; every content type gets them through
``models.mixins.TranslatableMixin``.

A variant counts as present only when its primary display field
(``title`` for articles and ads, ``name`` for categories and authors)
is non-empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict

from regional_blog.exceptions import EntityIntegrityError, MissingDefaultVariantError, UnknownLanguageError
from regional_blog.i18n.registry import LocaleRegistry

logger = logging.getLogger(__name__)


# ── Variants ──────────────────────────────────────────────────────────────────


class TranslationVariant(BaseModel):
    """Language-specific rendering of an entity."""

    model_config = ConfigDict(extra="ignore")

    primary_field: ClassVar[str] = "title"

    slug: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] = []

    @property
    def display_name(self) -> str | None:
        return getattr(self, self.primary_field, None)

    @property
    def is_present(self) -> bool:
        value = self.display_name
        return bool(value and value.strip())


class ArticleVariant(TranslationVariant):
    title: str | None = None
    excerpt: str | None = None
    content: list[str] = []


class CategoryVariant(TranslationVariant):
    primary_field: ClassVar[str] = "name"

    name: str | None = None
    description: str | None = None


class AuthorVariant(TranslationVariant):
    primary_field: ClassVar[str] = "name"

    name: str | None = None
    bio: str | None = None


class AdVariant(TranslationVariant):
    title: str | None = None
    description: str | None = None
    cta_text: str | None = None
    image_url: str | None = None
    html_content: str | None = None


V = TypeVar("V", bound=TranslationVariant)


class TranslationMap(Mapping, Generic[V]):
    """Immutable language → variant mapping.

    When ``allowed_languages`` is given (writes), keys outside it raise
    ``UnknownLanguageError``. Reads from storage skip that check.
    """

    def __init__(
        self,
        variants: Mapping[str, V | Mapping[str, Any]] | None,
        variant_type: type[V],
        allowed_languages: Iterable[str] | None = None,
    ):
        self.variant_type = variant_type
        allowed = list(allowed_languages) if allowed_languages is not None else None
        parsed: dict[str, V] = {}
        for language, raw in (variants or {}).items():
            code = language.lower()
            if allowed is not None and code not in allowed:
                raise UnknownLanguageError(language, allowed)
            if raw is None:
                continue
            parsed[code] = raw if isinstance(raw, variant_type) else variant_type.model_validate(raw)
        self._variants = parsed

    def __getitem__(self, language: str) -> V:
        return self._variants[language]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    def present(self, language: str) -> V | None:
        variant = self._variants.get(language)
        if variant is not None and variant.is_present:
            return variant
        return None

    def to_json(self) -> dict[str, dict[str, Any]]:
        return {language: variant.model_dump(exclude_none=True) for language, variant in self._variants.items()}


# ── Visibility ────────────────────────────────────────────────────────────────


GLOBAL_SCOPE = "*"


@dataclass(frozen=True)
class RegionVisibility:
    """Either global or restricted to a set of region codes.

    A restricted descriptor with no regions is visible nowhere.
    """

    is_global: bool = True
    regions: frozenset[str] = frozenset()

    @classmethod
    def global_(cls) -> RegionVisibility:
        return cls(is_global=True)

    @classmethod
    def restricted_to(cls, regions: Iterable[str]) -> RegionVisibility:
        return cls(is_global=False, regions=frozenset(code.upper() for code in regions))

    @classmethod
    def from_columns(cls, is_global: bool | None, regions: Iterable[str] | None) -> RegionVisibility:
        if is_global or is_global is None:
            return cls.global_()
        return cls.restricted_to(regions or ())

    def allows(self, region: str) -> bool:
        if self.is_global:
            return True
        return region.upper() in self.regions

    @property
    def scope_key(self) -> str:
        """Stable key used to keep base slugs unique per visibility scope."""
        if self.is_global:
            return GLOBAL_SCOPE
        return ",".join(sorted(self.regions))


# ── The capability ────────────────────────────────────────────────────────────


class TranslatableEntity(Protocol):
    id: Any
    base_slug: str
    default_language: str

    @property
    def variants(self) -> TranslationMap: ...

    @property
    def visibility(self) -> RegionVisibility: ...


def get_translation(entity: TranslatableEntity, language: str | None) -> TranslationVariant:
    """Return the variant for ``language``, or the default-language variant.

    There is no further fallback chain. An entity without a present
    default-language variant is corrupt and raises ``EntityIntegrityError``.
    """
    variants = entity.variants
    if language:
        variant = variants.present(language.lower())
        if variant is not None:
            return variant
    default = variants.present(entity.default_language)
    if default is None:
        logger.error(
            "%s %r has no %r translation",
            type(entity).__name__,
            entity.base_slug,
            entity.default_language,
        )
        raise EntityIntegrityError(type(entity).__name__, entity.base_slug, entity.default_language)
    return default


def served_language(entity: TranslatableEntity, language: str | None) -> str:
    """The language ``get_translation`` actually serves for ``language``."""
    if language and entity.variants.present(language.lower()) is not None:
        return language.lower()
    return entity.default_language


def get_available_languages(entity: TranslatableEntity, registry: LocaleRegistry) -> list[str]:
    """Languages with a present variant, in the registry's canonical order."""
    variants = entity.variants
    return [code for code in registry.language_codes if variants.present(code) is not None]


def variant_slug(entity: TranslatableEntity, language: str | None) -> str:
    """Slug of the variant served for ``language``, falling back to the base slug."""
    return get_translation(entity, language).slug or entity.base_slug


def build_translation_map(
    raw: Mapping[str, Any],
    variant_type: type[V],
    registry: LocaleRegistry,
    default_language: str,
) -> TranslationMap[V]:
    """Validate a translation payload for a write.

    Rejects language keys outside the registry and payloads without a present
    default-language variant.
    """
    if not registry.is_supported_language(default_language):
        raise UnknownLanguageError(default_language, list(registry.language_codes))
    translations = TranslationMap(raw, variant_type, allowed_languages=registry.language_codes)
    if translations.present(default_language.lower()) is None:
        raise MissingDefaultVariantError(default_language)
    return translations
