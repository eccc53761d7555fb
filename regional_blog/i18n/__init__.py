"""
i18n (Internationalization) package

Locale registry, region/language resolution, translatable entities with
default-language fallback, and the public URL shapes of localized content.
"""

from .locale import (
    RTL_LOCALES,
    get_language_info,
    is_rtl_locale,
    parse_accept_language,
    parse_language_preferences,
)
from .registry import LanguageEntry, LocaleRegistry, RegionEntry
from .resolver import RegionResolver, RequestSignals, ResolvedContext
from .translatable import RegionVisibility, TranslationMap, get_translation

__all__ = [
    "RTL_LOCALES",
    "get_language_info",
    "is_rtl_locale",
    "parse_accept_language",
    "parse_language_preferences",
    "LanguageEntry",
    "LocaleRegistry",
    "RegionEntry",
    "RegionResolver",
    "RequestSignals",
    "ResolvedContext",
    "RegionVisibility",
    "TranslationMap",
    "get_translation",
]
