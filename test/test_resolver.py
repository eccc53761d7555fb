"""
Region/Language Resolver tests

Priority order, validation of each signal, soft degradation and the
Accept-Language scenario with a US/FR registry.
"""

from unittest.mock import MagicMock

import pytest

from regional_blog.i18n.resolver import RegionResolver, RequestSignals, ResolvedContext


def _resolver(registry, geoip=None):
    return RegionResolver(registry, default_region="US", fallback_language="en", geoip=geoip)


class TestPriority:
    def test_path_wins_over_everything(self, registry):
        signals = RequestSignals(
            path_region="de",
            query_region="FR",
            cookie_region="ES",
            accept_languages=("it",),
        )
        assert _resolver(registry).resolve(signals) == ResolvedContext("DE", "de", "path")

    def test_query_when_no_path(self, registry):
        signals = RequestSignals(query_region="fr", cookie_region="ES")
        assert _resolver(registry).resolve(signals) == ResolvedContext("FR", "fr", "query")

    def test_cookie_when_no_path_or_query(self, registry):
        signals = RequestSignals(cookie_region="ES", accept_languages=("it",))
        assert _resolver(registry).resolve(signals) == ResolvedContext("ES", "es", "cookie")

    def test_invalid_path_falls_through(self, registry):
        signals = RequestSignals(path_region="zz", query_region="IT")
        assert _resolver(registry).resolve(signals).region == "IT"

    def test_default_when_no_signal(self, registry):
        assert _resolver(registry).resolve(RequestSignals()) == ResolvedContext("US", "en", "default")

    @pytest.mark.parametrize("cookie", ["FR", "DE", None])
    @pytest.mark.parametrize("languages", [(), ("es",), ("fi", "sv")])
    def test_valid_path_always_wins(self, registry, cookie, languages):
        signals = RequestSignals(path_region="SE", cookie_region=cookie, accept_languages=languages)
        assert _resolver(registry).resolve(signals).region == "SE"


class TestAcceptLanguage:
    def test_first_matching_language_pins_region_and_language(self, us_fr_registry):
        signals = RequestSignals(accept_languages=("de", "fr"))
        assert _resolver(us_fr_registry).resolve(signals) == ResolvedContext("FR", "fr", "accept-language")

    def test_language_served_even_if_not_region_default(self, registry):
        context = _resolver(registry).resolve(RequestSignals(accept_languages=("en",)))
        assert context.language == "en"
        assert context.region == "US"

    def test_unmatched_languages_fall_back_to_default(self, us_fr_registry):
        context = _resolver(us_fr_registry).resolve(RequestSignals(accept_languages=("ja", "zh")))
        assert context == ResolvedContext("US", "en", "default")


class TestGeoIP:
    def test_geoip_used_after_accept_language(self, registry):
        geoip = MagicMock()
        geoip.lookup_region.return_value = "NL"
        context = _resolver(registry, geoip).resolve(RequestSignals(client_ip="203.0.113.7"))
        assert context == ResolvedContext("NL", "nl", "geoip")

    def test_geoip_not_consulted_when_language_matches(self, registry):
        geoip = MagicMock()
        _resolver(registry, geoip).resolve(RequestSignals(accept_languages=("fr",), client_ip="203.0.113.7"))
        geoip.lookup_region.assert_not_called()

    def test_geoip_failure_degrades_to_default(self, registry):
        geoip = MagicMock()
        geoip.lookup_region.side_effect = RuntimeError("database missing")
        context = _resolver(registry, geoip).resolve(RequestSignals(client_ip="203.0.113.7"))
        assert context == ResolvedContext("US", "en", "default")

    def test_geoip_unknown_region_ignored(self, registry):
        geoip = MagicMock()
        geoip.lookup_region.return_value = "JP"
        assert _resolver(registry, geoip).resolve(RequestSignals(client_ip="203.0.113.7")).source == "default"


class TestDegradation:
    def test_registry_failure_never_raises(self):
        registry = MagicMock()
        registry.find_region.side_effect = RuntimeError("registry unavailable")
        context = _resolver(registry).resolve(RequestSignals(path_region="FR"))
        assert context == ResolvedContext("US", "en", "default")

    def test_default_region_missing_uses_fallback_language(self, us_fr_registry):
        resolver = RegionResolver(us_fr_registry, default_region="GB", fallback_language="en")
        assert resolver.resolve(RequestSignals()) == ResolvedContext("GB", "en", "default")

    def test_idempotent(self, registry):
        resolver = _resolver(registry)
        signals = RequestSignals(cookie_region="zz", accept_languages=("pt", "en"), client_ip="198.51.100.1")
        assert resolver.resolve(signals) == resolver.resolve(signals)
