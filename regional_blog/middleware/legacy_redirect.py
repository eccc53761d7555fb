"""
Legacy URL Redirect Middleware

Issues a 301 for old ``/article/<slug>``-style GET requests. The target is
the same for every visitor (default region, default-language slug).
Lookup failures never fail the request; the request continues untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from regional_blog.config import settings
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category
from regional_blog.services.entity_store import SqlEntityStore
from regional_blog.services.legacy_redirect import LegacyUrlRedirector

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

SEGMENT_MODELS = {"article": Article, "category": Category, "author": Author}


class LegacyRedirectMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, session_factory=None):
        super().__init__(app)
        self.session_factory = session_factory

    def _is_candidate(self, request: Request) -> bool:
        if request.method != "GET":
            return False
        parts = request.url.path.strip("/").split("/")
        return len(parts) == 2 and parts[0] in settings.legacy_redirect_segments

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self._is_candidate(request):
            return await call_next(request)

        try:
            target = await self._lookup(request)
        except Exception:
            logger.error("Legacy redirect lookup failed for %s", request.url.path, exc_info=True)
            target = None

        if target is None:
            return await call_next(request)
        return RedirectResponse(target, status_code=301)

    async def _lookup(self, request: Request) -> str | None:
        registry: LocaleRegistry | None = getattr(request.app.state, "locale_registry", None)
        if registry is None or self.session_factory is None:
            return None

        async with self.session_factory() as db:
            stores = {
                segment: SqlEntityStore(model, db)
                for segment, model in SEGMENT_MODELS.items()
                if segment in settings.legacy_redirect_segments
            }
            redirector = LegacyUrlRedirector(stores, registry, settings.default_region)
            return await redirector.redirect(request.url.path, request.url.query)
