"""
Ad Targeting Matcher

``select_ads`` filters candidate ads against a targeting context and
orders the survivors; ``pick_one`` draws a single ad for rotation,
weighted by priority.

An ad is eligible when it is active (flag and status), inside its
schedule window, under its impression and click caps, and matches the
region, language and (when given) category targeting. An empty target
list matches everything on that axis.

Order: priority desc, position asc, newest first.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from regional_blog.models.ad import Ad, AdStatus

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class AdTargetingContext:
    placement: str
    region: str
    language: str
    category_id: int | None = None
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_currently_active(ad: Ad, now: datetime) -> bool:
    if not ad.is_active or ad.status != AdStatus.active.value:
        return False

    now = _aware(now)
    start, end = _aware(ad.start_date), _aware(ad.end_date)
    if start is not None and start > now:
        return False
    if end is not None and end < now:
        return False

    if ad.max_impressions is not None and (ad.impressions or 0) >= ad.max_impressions:
        return False
    if ad.max_clicks is not None and (ad.clicks or 0) >= ad.max_clicks:
        return False
    return True


def _targets(values: Iterable | None, wanted) -> bool:
    values = list(values or ())
    return not values or wanted in values


def matches_targeting(ad: Ad, region: str, language: str, category_id: int | None = None) -> bool:
    if not _targets(ad.target_regions, region.upper()):
        return False
    if not _targets(ad.target_languages, language.lower()):
        return False
    if category_id is not None and not _targets(ad.target_categories, category_id):
        return False
    return True


def select_ads(candidates: Iterable[Ad], context: AdTargetingContext, limit: int) -> list[Ad]:
    eligible = [
        ad
        for ad in candidates
        if ad.placement == context.placement
        and is_currently_active(ad, context.now)
        and matches_targeting(ad, context.region, context.language, context.category_id)
    ]
    # Two stable sorts: newest first, then priority/position on top of that.
    eligible.sort(key=lambda ad: _aware(ad.created_at) or _EPOCH, reverse=True)
    eligible.sort(key=lambda ad: (-(ad.priority or 0), ad.position or 0))
    return eligible[: max(limit, 0)]


def pick_one(ads: Sequence[Ad], rng: random.Random | None = None) -> Ad | None:
    """Weighted random draw by priority; uniform when every priority is 0.

    Each weight is subtracted from the draw in order; the ad that takes it
    to zero or below is returned.
    """
    if not ads:
        return None
    if len(ads) == 1:
        return ads[0]

    rng = rng or random.Random()
    total = sum(ad.priority or 0 for ad in ads)
    if total <= 0:
        return ads[int(rng.random() * len(ads))]

    remaining = rng.random() * total
    for ad in ads:
        remaining -= ad.priority or 0
        if remaining <= 0:
            return ad
    return ads[-1]


async def fetch_candidates(placement: str, db: AsyncSession) -> list[Ad]:
    """Cheap SQL pre-filter; the full eligibility check happens in ``select_ads``."""
    result = await db.execute(
        select(Ad).where(
            Ad.placement == placement,
            Ad.status == AdStatus.active.value,
            Ad.is_active.is_(True),
        )
    )
    return list(result.scalars().all())


async def select_ads_for_context(context: AdTargetingContext, limit: int, db: AsyncSession) -> list[Ad]:
    candidates = await fetch_candidates(context.placement, db)
    selected = select_ads(candidates, context, limit)
    logger.debug(
        "Selected %d/%d ads for %s (%s/%s)",
        len(selected),
        len(candidates),
        context.placement,
        context.region,
        context.language,
    )
    return selected
