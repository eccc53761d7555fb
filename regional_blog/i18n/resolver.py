"""
Region/Language Resolver

Turns the region and language signals of one request into a single
``ResolvedContext``. First valid signal wins, strictly in this order:

  1. region segment in the request path     (/fr/article/...)
  2. ``region`` query parameter             (?region=FR)
  3. persisted preference cookie
  4. Accept-Language preferences            (pins region AND language)
  5. IP geolocation                         (only when enabled)
  6. configured default region

Resolution is pure and total: invalid signals are skipped, and any
unexpected failure degrades to the default instead of reaching the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from regional_blog.i18n.registry import LocaleRegistry, RegionEntry

logger = logging.getLogger(__name__)


class GeoIPLookup(Protocol):
    """Optional IP → region capability."""

    def lookup_region(self, ip_address: str) -> str | None: ...


@dataclass(frozen=True)
class RequestSignals:
    path_region: str | None = None
    query_region: str | None = None
    cookie_region: str | None = None
    accept_languages: tuple[str, ...] = field(default_factory=tuple)
    client_ip: str | None = None


@dataclass(frozen=True)
class ResolvedContext:
    region: str
    language: str
    source: str = "default"


class RegionResolver:
    def __init__(
        self,
        registry: LocaleRegistry,
        default_region: str,
        fallback_language: str,
        geoip: GeoIPLookup | None = None,
    ):
        self.registry = registry
        self.default_region = default_region.upper()
        self.fallback_language = fallback_language.lower()
        self.geoip = geoip

    def resolve(self, signals: RequestSignals) -> ResolvedContext:
        try:
            return self._resolve(signals)
        except Exception:
            logger.warning("Region resolution failed, using default region", exc_info=True)
            return self.default_context()

    def default_context(self) -> ResolvedContext:
        try:
            region = self.registry.find_region(self.default_region)
        except Exception:
            logger.warning("Default region lookup failed", exc_info=True)
            region = None
        if region is None:
            return ResolvedContext(self.default_region, self.fallback_language, "default")
        return ResolvedContext(region.code, region.default_language, "default")

    def _resolve(self, signals: RequestSignals) -> ResolvedContext:
        for source, code in (
            ("path", signals.path_region),
            ("query", signals.query_region),
            ("cookie", signals.cookie_region),
        ):
            region = self._valid_region(code)
            if region is not None:
                return ResolvedContext(region.code, region.default_language, source)

        for language in signals.accept_languages:
            candidates = self.registry.find_regions_supporting_language(language)
            if candidates:
                return ResolvedContext(candidates[0].code, language.lower(), "accept-language")

        if self.geoip is not None and signals.client_ip:
            region = self._valid_region(self._lookup_ip(signals.client_ip))
            if region is not None:
                return ResolvedContext(region.code, region.default_language, "geoip")

        return self.default_context()

    def _valid_region(self, code: str | None) -> RegionEntry | None:
        if not code:
            return None
        region = self.registry.find_region(code)
        if region is None:
            logger.debug("Ignoring unknown region signal %r", code)
        return region

    def _lookup_ip(self, ip_address: str) -> str | None:
        try:
            return self.geoip.lookup_region(ip_address)
        except Exception:
            logger.warning("IP geolocation failed for %s", ip_address, exc_info=True)
            return None
