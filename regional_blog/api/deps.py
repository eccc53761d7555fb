"""
Shared FastAPI dependencies

Everything a route needs from the surrounding application: the registry
snapshot, the resolved (region, language) context, request-scoped entity
stores, the best-effort tracking channel, and the editor key check.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

import regional_blog.database as database
from regional_blog.config import settings
from regional_blog.database import get_db
from regional_blog.exceptions import AuthorizationError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import RegionResolver, RequestSignals, ResolvedContext
from regional_blog.models.mixins import TranslatableMixin
from regional_blog.services.entity_store import SqlEntityStore
from regional_blog.services.tracking import BestEffortChannel, tracking_channel


def get_registry(request: Request) -> LocaleRegistry:
    registry = getattr(request.app.state, "locale_registry", None)
    return registry if registry is not None else LocaleRegistry(())


def get_locale_context(request: Request, registry: LocaleRegistry = Depends(get_registry)) -> ResolvedContext:
    context = getattr(request.state, "locale_context", None)
    if context is not None:
        return context
    # RegionMiddleware not installed (e.g. a bare test app): resolve from defaults only.
    resolver = RegionResolver(registry, settings.default_region, settings.fallback_language)
    return resolver.resolve(RequestSignals())


def get_session_factory():
    return database.AsyncSessionLocal


def get_tracking_channel() -> BestEffortChannel:
    return tracking_channel


def store_dependency(model: type[TranslatableMixin], public_only: bool = True) -> Callable:
    async def dependency(
        db: AsyncSession = Depends(get_db),
        session_factory=Depends(get_session_factory),
    ) -> SqlEntityStore:
        return SqlEntityStore(model, db, session_factory=session_factory, public_only=public_only)

    dependency.__name__ = f"{model.__name__.lower()}_store"
    return dependency


def require_admin_key(x_api_key: str | None = Header(default=None)) -> None:
    expected = settings.admin_api_key
    if not expected or not x_api_key or not secrets.compare_digest(x_api_key, expected):
        raise AuthorizationError("A valid X-API-Key header is required")
