"""
Locale Registry tests

Covers region integrity rules, lookups, canonical language order and
loading from database rows.
"""

from types import SimpleNamespace

import pytest

from regional_blog.exceptions import RegionIntegrityError
from regional_blog.i18n.registry import LanguageEntry, LocaleRegistry, RegionEntry
from utils.mock_utils import make_registry


class TestRegionEntry:
    def test_normalizes_case(self):
        region = RegionEntry(code="fr", name="France", languages=("FR", "en"), default_language="FR")
        assert region.code == "FR"
        assert region.languages == ("fr", "en")
        assert region.default_language == "fr"

    def test_empty_languages_rejected(self):
        with pytest.raises(RegionIntegrityError):
            RegionEntry(code="FR", name="France", languages=(), default_language="fr")

    def test_default_outside_languages_rejected(self):
        with pytest.raises(RegionIntegrityError):
            RegionEntry(code="FR", name="France", languages=("en",), default_language="fr")

    def test_bad_code_rejected(self):
        with pytest.raises(RegionIntegrityError):
            RegionEntry(code="FRA", name="France", languages=("fr",), default_language="fr")


class TestLookups:
    def test_find_region_case_insensitive(self, registry):
        assert registry.find_region("fr").code == "FR"
        assert registry.find_region(" De ").code == "DE"

    def test_find_unknown_region(self, registry):
        assert registry.find_region("ZZ") is None
        assert registry.find_region(None) is None

    def test_inactive_region_hidden(self):
        registry = make_registry(
            [
                {"code": "US", "languages": ["en"], "default_language": "en"},
                {"code": "GB", "languages": ["en"], "default_language": "en", "is_active": False},
            ],
            [("en", "English")],
        )
        assert registry.find_region("GB") is None
        assert [region.code for region in registry.list_active_regions()] == ["US"]

    def test_supporting_language_prefers_default_language_regions(self, registry):
        codes = [region.code for region in registry.find_regions_supporting_language("fr")]
        assert codes[0] == "FR"
        assert "CA" in codes
        assert codes.index("LU") < codes.index("CA")

    def test_supporting_unknown_language(self, registry):
        assert registry.find_regions_supporting_language("ja") == []

    def test_language_codes_follow_catalogue_order(self, registry):
        assert registry.language_codes[:3] == ("en", "fr", "es")

    def test_sort_languages(self, registry):
        assert registry.sort_languages(["de", "xx", "en"]) == ["en", "de"]

    def test_language_name(self, registry):
        assert registry.language_name("fr") == "Français"
        assert registry.language_name("xx") == "xx"

    def test_region_language_outside_catalogue_rejected(self):
        with pytest.raises(RegionIntegrityError):
            LocaleRegistry(
                regions=(RegionEntry(code="JP", name="Japan", languages=("ja",), default_language="ja"),),
                languages=(LanguageEntry("en", "English"),),
            )


class TestFromRecords:
    def test_misconfigured_rows_skipped(self):
        rows = [
            SimpleNamespace(code="US", name="US", languages=["en"], default_language="en", is_active=True, position=1),
            SimpleNamespace(code="XX", name="Broken", languages=[], default_language="en", is_active=True, position=0),
            SimpleNamespace(code="JP", name="Japan", languages=["ja"], default_language="ja", is_active=True, position=2),
        ]
        languages = [SimpleNamespace(code="en", name="English", position=0)]

        registry = LocaleRegistry.from_records(rows, languages)

        assert [region.code for region in registry.regions] == ["US"]

    def test_position_order(self):
        rows = [
            SimpleNamespace(code="FR", name="France", languages=["fr"], default_language="fr", is_active=True, position=2),
            SimpleNamespace(code="US", name="US", languages=["en"], default_language="en", is_active=True, position=1),
        ]
        registry = LocaleRegistry.from_records(rows)
        assert [region.code for region in registry.regions] == ["US", "FR"]
        assert registry.language_codes == ("en", "fr")
