"""
Delivery Service

The visitor-side path every detail endpoint follows:

    locate slug → region access check → localize → dispatch tracking

A region miss with a visible sibling becomes a 302 to the sibling's API
path; a miss without one raises ``RegionForbiddenError``. Tracking is only
dispatched once the entity is known to be visible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic

from regional_blog.api import API_PREFIX
from regional_blog.config import settings
from regional_blog.exceptions import EntityIntegrityError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.i18n.translatable import served_language
from regional_blog.i18n.urls import with_query
from regional_blog.services.access_gate import check_access, raise_if_forbidden, redirect_path
from regional_blog.services.analytics_service import AnalyticsService
from regional_blog.services.content_locator import ContentLocator
from regional_blog.services.entity_store import E, EntityStore
from regional_blog.services.tracking import BestEffortChannel

logger = logging.getLogger(__name__)


@dataclass
class Delivery(Generic[E]):
    entity: E | None = None
    redirect_to: str | None = None


async def deliver(
    slug: str,
    store: EntityStore[E],
    registry: LocaleRegistry,
    context: ResolvedContext,
    segment: str,
    query_string: str = "",
) -> Delivery[E]:
    """Locate ``slug`` and apply the region gate.

    Raises:
        EntityNotFoundError: no base or variant slug matches.
        RegionForbiddenError: hidden in the region and no visible sibling.
    """
    entity = await ContentLocator(store, registry).locate_or_404(slug, context.language, context.region)
    decision = await check_access(entity, context.region, store)
    if decision.is_visible:
        return Delivery(entity=entity)

    raise_if_forbidden(decision, store.resource_name, context.region)
    path = API_PREFIX + redirect_path(decision, segment, context.region, context.language, settings.default_region)
    logger.info("Redirecting %s %r to regional edition %s", store.resource_name, slug, path)
    return Delivery(redirect_to=with_query(path, query_string))


def localize_many(entities: Iterable[Any], build: Callable[[Any], Any]) -> list[Any]:
    """Build responses, skipping entities whose default variant is broken."""
    localized = []
    for entity in entities:
        try:
            localized.append(build(entity))
        except EntityIntegrityError:
            continue
    return localized


def dispatch_view(
    channel: BestEffortChannel,
    session_factory,
    entity_type: str,
    entity: Any,
    context: ResolvedContext,
    ip_address: str | None = None,
    user_agent: str | None = None,
    referrer: str | None = None,
) -> None:
    channel.dispatch(
        f"{entity_type}-view-record",
        AnalyticsService.record_content_view,
        session_factory,
        entity_type,
        entity.id,
        region=context.region,
        language=served_language(entity, context.language),
        ip_address=ip_address,
        user_agent=user_agent,
        referrer=referrer,
    )
