"""
Region Detection Middleware

Stamps ``request.state.region`` and ``request.state.language`` (and the full
``ResolvedContext`` as ``request.state.locale_context``) before any route
runs. Signals are read from:

  1. the region path segment   (/fr/..., /api/fr/...)
  2. ``?region=`` query parameter
  3. the region preference cookie
  4. Accept-Language
  5. the client IP (only when a GeoIP lookup is configured)

Resolution itself lives in ``RegionResolver``; this class only gathers
signals. The registry is read from ``app.state.locale_registry`` on every
request so a reload takes effect immediately.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from regional_blog.config import settings
from regional_blog.i18n.locale import parse_language_preferences
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import GeoIPLookup, RegionResolver, RequestSignals
from regional_blog.services.region_service import read_region_cookie

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response

PATH_REGION_RE = re.compile(r"^/(?:api/)?([A-Za-z]{2})(?:/|$)")


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else None)


def extract_signals(request: Request) -> RequestSignals:
    match = PATH_REGION_RE.match(request.url.path)
    return RequestSignals(
        path_region=match.group(1) if match else None,
        query_region=request.query_params.get("region"),
        cookie_region=read_region_cookie(request),
        accept_languages=tuple(parse_language_preferences(request.headers.get("Accept-Language"))),
        client_ip=client_ip(request),
    )


class RegionMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, geoip: GeoIPLookup | None = None):
        super().__init__(app)
        self.geoip = geoip

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        registry: LocaleRegistry = getattr(request.app.state, "locale_registry", None) or LocaleRegistry(())
        resolver = RegionResolver(
            registry,
            default_region=settings.default_region,
            fallback_language=settings.fallback_language,
            geoip=self.geoip if settings.enable_ip_geolocation else None,
        )
        context = resolver.resolve(extract_signals(request))
        request.state.locale_context = context
        request.state.region = context.region
        request.state.language = context.language
        response = await call_next(request)
        response.headers["Content-Language"] = context.language
        return response
