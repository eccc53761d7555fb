"""
Translatable entity tests

Translation fallback, presence rules, canonical ordering, write-time
validation and region visibility.
"""

import pytest

from regional_blog.exceptions import EntityIntegrityError, MissingDefaultVariantError, UnknownLanguageError
from regional_blog.i18n.translatable import (
    ArticleVariant,
    CategoryVariant,
    RegionVisibility,
    TranslationMap,
    build_translation_map,
    get_available_languages,
    get_translation,
    served_language,
    variant_slug,
)
from utils.mock_utils import make_article, make_category

TRANSLATIONS = {
    "en": {"slug": "summer-guide", "title": "Summer guide"},
    "fr": {"slug": "guide-ete", "title": "Guide de l'été"},
    "es": {"slug": "guia-verano", "title": ""},
}


class TestGetTranslation:
    def test_requested_language_present(self):
        article = make_article(translations=TRANSLATIONS)
        assert get_translation(article, "fr").title == "Guide de l'été"

    def test_missing_language_falls_back_to_default(self):
        article = make_article(translations=TRANSLATIONS)
        assert get_translation(article, "de").title == "Summer guide"

    def test_empty_primary_field_treated_as_absent(self):
        article = make_article(translations=TRANSLATIONS)
        assert get_translation(article, "es").title == "Summer guide"
        assert served_language(article, "es") == "en"

    def test_whitespace_title_treated_as_absent(self):
        article = make_article(translations={"en": {"title": "Hello"}, "fr": {"title": "   "}})
        assert served_language(article, "fr") == "en"

    def test_language_case_insensitive(self):
        article = make_article(translations=TRANSLATIONS)
        assert served_language(article, "FR") == "fr"

    def test_missing_default_variant_is_integrity_error(self):
        article = make_article(translations={"fr": {"title": "Bonjour"}}, default_language="en")
        with pytest.raises(EntityIntegrityError) as exc_info:
            get_translation(article, "de")
        assert exc_info.value.status_code == 503

    @pytest.mark.parametrize("language", ["en", "fr", "es", "de", "xx", "", None])
    def test_fallback_is_total(self, language):
        article = make_article(translations=TRANSLATIONS)
        assert get_translation(article, language) is not None

    def test_category_uses_name_as_primary_field(self):
        category = make_category(translations={"en": {"name": "Food"}, "fr": {"name": "", "description": "x"}})
        assert get_translation(category, "fr").name == "Food"


class TestAvailableLanguages:
    def test_canonical_order_and_presence(self, registry):
        article = make_article(
            translations={
                "de": {"title": "Sommer"},
                "en": {"title": "Summer"},
                "fr": {"title": "Été"},
                "es": {"title": ""},
            }
        )
        assert get_available_languages(article, registry) == ["en", "fr", "de"]

    def test_variant_slug_falls_back_to_base_slug(self):
        article = make_article(base_slug="base", translations={"en": {"title": "No slug"}})
        assert variant_slug(article, "en") == "base"


class TestBuildTranslationMap:
    def test_unknown_language_rejected(self, registry):
        with pytest.raises(UnknownLanguageError):
            build_translation_map({"en": {"title": "Hi"}, "ja": {"title": "こんにちは"}}, ArticleVariant, registry, "en")

    def test_unsupported_default_language_rejected(self, registry):
        with pytest.raises(UnknownLanguageError):
            build_translation_map({"ja": {"title": "x"}}, ArticleVariant, registry, "ja")

    def test_missing_default_variant_rejected(self, registry):
        with pytest.raises(MissingDefaultVariantError):
            build_translation_map({"fr": {"title": "Salut"}}, ArticleVariant, registry, "en")

    def test_empty_default_variant_rejected(self, registry):
        with pytest.raises(MissingDefaultVariantError):
            build_translation_map({"en": {"title": ""}}, ArticleVariant, registry, "en")

    def test_valid_payload(self, registry):
        translations = build_translation_map(
            {"en": {"name": "Food"}, "FR": {"name": "Cuisine"}}, CategoryVariant, registry, "en"
        )
        assert set(translations) == {"en", "fr"}
        assert translations.to_json()["fr"]["name"] == "Cuisine"


class TestTranslationMap:
    def test_none_values_skipped(self):
        translations = TranslationMap({"en": {"title": "x"}, "fr": None}, ArticleVariant)
        assert list(translations) == ["en"]

    def test_unknown_keys_ignored_in_variant(self):
        translations = TranslationMap({"en": {"title": "x", "legacy_field": 1}}, ArticleVariant)
        assert "legacy_field" not in translations.to_json()["en"]


class TestRegionVisibility:
    def test_global_allows_everything(self):
        assert RegionVisibility.global_().allows("ZZ")

    def test_restricted(self):
        visibility = RegionVisibility.restricted_to(["fr", "BE"])
        assert visibility.allows("FR")
        assert visibility.allows("be")
        assert not visibility.allows("US")

    def test_empty_restriction_allows_nothing(self):
        visibility = RegionVisibility.restricted_to([])
        assert not any(visibility.allows(code) for code in ("US", "FR", ""))

    def test_scope_key(self):
        assert RegionVisibility.global_().scope_key == "*"
        assert RegionVisibility.restricted_to(["FR", "BE"]).scope_key == "BE,FR"
        assert RegionVisibility.restricted_to([]).scope_key == ""

    def test_from_columns(self):
        assert RegionVisibility.from_columns(None, None).is_global
        assert RegionVisibility.from_columns(False, ["fr"]).regions == frozenset({"FR"})
