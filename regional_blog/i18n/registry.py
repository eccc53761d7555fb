"""
Locale Registry

Read-only snapshot of the supported regions and languages. The registry is
built once from the ``regions``/``languages`` tables (or from plain entries
in tests) and then shared by every request; nothing mutates it after
construction, a reload swaps in a new instance.

Canonical language ordering is the order of the language catalogue. When
no catalogue is given the order is derived from the regions, each region
contributing its languages in the order they are listed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from regional_blog.exceptions import RegionIntegrityError
from regional_blog.i18n.locale import is_rtl_locale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageEntry:
    code: str
    name: str

    @property
    def is_rtl(self) -> bool:
        return is_rtl_locale(self.code)


@dataclass(frozen=True)
class RegionEntry:
    """One supported region.

    ``code`` is stored uppercase and ``languages`` lowercase. Construction
    fails with ``RegionIntegrityError`` when the language set is empty or
    the default language is not one of the region's languages.
    """

    code: str
    name: str
    languages: tuple[str, ...]
    default_language: str
    is_active: bool = True
    currency: str | None = None

    def __post_init__(self) -> None:
        code = (self.code or "").strip().upper()
        languages = tuple(dict.fromkeys(lang.strip().lower() for lang in self.languages if lang))
        default_language = (self.default_language or "").strip().lower()
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "languages", languages)
        object.__setattr__(self, "default_language", default_language)

        if len(code) != 2:
            raise RegionIntegrityError(code, "region code must have two letters")
        if not languages:
            raise RegionIntegrityError(code, "no supported languages")
        if default_language not in languages:
            raise RegionIntegrityError(code, f"default language '{default_language}' is not supported")

    def supports(self, language: str) -> bool:
        return language.lower() in self.languages


@dataclass(frozen=True)
class LocaleRegistry:
    regions: tuple[RegionEntry, ...]
    languages: tuple[LanguageEntry, ...] = ()
    _by_code: dict[str, RegionEntry] = field(init=False, repr=False, compare=False)
    _language_order: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regions = tuple(self.regions)
        languages = tuple(self.languages)
        object.__setattr__(self, "regions", regions)
        object.__setattr__(self, "languages", languages)

        order = [lang.code.lower() for lang in languages]
        catalogue = set(order)
        for region in regions:
            for code in region.languages:
                if catalogue and code not in catalogue:
                    raise RegionIntegrityError(region.code, f"language '{code}' is not in the language catalogue")
                if code not in order:
                    order.append(code)
        object.__setattr__(self, "_language_order", tuple(order))
        object.__setattr__(self, "_by_code", {region.code: region for region in regions})

    # ── construction ──────────────────────────────────────────────────────────

    @classmethod
    def from_records(cls, regions: Iterable, languages: Iterable = ()) -> LocaleRegistry:
        """Build a registry from ORM rows (or any objects with matching attributes).

        Regions that break the integrity rules are skipped and logged; they never
        make the whole registry unavailable.
        """
        language_entries = [
            LanguageEntry(code=lang.code.lower(), name=lang.name)
            for lang in sorted(languages, key=lambda row: (getattr(row, "position", 0), row.code))
        ]
        known = {lang.code for lang in language_entries}

        region_entries: list[RegionEntry] = []
        for row in sorted(regions, key=lambda row: (getattr(row, "position", 0), row.code)):
            try:
                entry = RegionEntry(
                    code=row.code,
                    name=row.name,
                    languages=tuple(row.languages or ()),
                    default_language=row.default_language,
                    is_active=bool(row.is_active),
                    currency=getattr(row, "currency", None),
                )
            except RegionIntegrityError as exc:
                logger.error("Skipping misconfigured region %s: %s", row.code, exc.message)
                continue
            unknown = [code for code in entry.languages if known and code not in known]
            if unknown:
                logger.error("Skipping region %s with unknown languages %s", entry.code, unknown)
                continue
            region_entries.append(entry)

        return cls(regions=tuple(region_entries), languages=tuple(language_entries))

    # ── lookups ───────────────────────────────────────────────────────────────

    @property
    def language_codes(self) -> tuple[str, ...]:
        """All supported language codes in canonical order."""
        return self._language_order

    def list_active_regions(self) -> list[RegionEntry]:
        return [region for region in self.regions if region.is_active]

    def find_region(self, code: str | None) -> RegionEntry | None:
        """Return the active region with this code (case-insensitive), or None."""
        if not code:
            return None
        region = self._by_code.get(code.strip().upper())
        if region is None or not region.is_active:
            return None
        return region

    def find_regions_supporting_language(self, language: str) -> list[RegionEntry]:
        """Active regions that support ``language``.

        Regions whose default language is ``language`` come first, then the
        remaining ones, each group in registry order.
        """
        language = language.lower()
        supporting = [region for region in self.list_active_regions() if region.supports(language)]
        return sorted(supporting, key=lambda region: region.default_language != language)

    def is_supported_language(self, code: str | None) -> bool:
        return bool(code) and code.lower() in self._language_order

    def language_name(self, code: str) -> str:
        for lang in self.languages:
            if lang.code == code:
                return lang.name
        return code

    def sort_languages(self, codes: Iterable[str]) -> list[str]:
        """Return the supported codes among ``codes`` in canonical order."""
        wanted = {code.lower() for code in codes}
        return [code for code in self._language_order if code in wanted]
