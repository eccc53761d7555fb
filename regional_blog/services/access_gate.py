"""
Access Gate

Decides whether a located entity may be shown in the visitor's region.

    global                              → visible
    restricted, region listed           → visible
    restricted, region not listed       → redirect to a sibling (same base
                                          slug, global or listing the region)
                                          or forbidden when there is none
    restricted to nobody                → forbidden, no sibling search

Runs before any view counter or analytics record is dispatched.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from regional_blog.exceptions import RegionForbiddenError
from regional_blog.i18n.urls import entity_path
from regional_blog.services.entity_store import EntityStore

logger = logging.getLogger(__name__)


class AccessOutcome(str, enum.Enum):
    visible = "visible"
    redirect = "redirect"
    forbidden = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    target: Any = None

    @property
    def is_visible(self) -> bool:
        return self.outcome is AccessOutcome.visible


VISIBLE = AccessDecision(AccessOutcome.visible)
FORBIDDEN = AccessDecision(AccessOutcome.forbidden)


async def check_access(entity, region: str, store: EntityStore) -> AccessDecision:
    visibility = entity.visibility
    if visibility.allows(region):
        return VISIBLE

    if not visibility.regions:
        logger.warning(
            "%s %r is restricted to no region and is hidden everywhere",
            type(entity).__name__,
            entity.base_slug,
        )
        return FORBIDDEN

    sibling = await store.find_sibling_by_base_slug(
        entity.base_slug,
        lambda candidate: candidate.allows(region),
        exclude_id=entity.id,
    )
    if sibling is None:
        return FORBIDDEN
    return AccessDecision(AccessOutcome.redirect, sibling)


def redirect_path(
    decision: AccessDecision,
    segment: str,
    region: str,
    language: str,
    default_region: str,
) -> str:
    """Public path of the sibling, in ``language`` when the sibling has it."""
    return entity_path(decision.target, segment, region, language, default_region)


def raise_if_forbidden(decision: AccessDecision, resource_type: str, region: str) -> None:
    if decision.outcome is AccessOutcome.forbidden:
        raise RegionForbiddenError(resource_type, region)
