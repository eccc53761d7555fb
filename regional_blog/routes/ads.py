"""
Ad routes (mounted at /api and /api/{region})

    GET   /ads?placement=&category=&limit=&single=  → ads targeted at the visitor
    GET   /ads/{ad_id}                              → one ad, localized
    POST  /ads/{ad_id}/impression                   → count an impression
    POST  /ads/{ad_id}/click                        → count a click, returns the target URL

Counters are best-effort: the response never waits for them.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.api.deps import get_locale_context, get_tracking_channel, store_dependency
from regional_blog.config import settings
from regional_blog.database import get_db
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.models.ad import Ad, AdPlacement
from regional_blog.schemas.ad import AdList, AdResponse
from regional_blog.services.ad_selector import AdTargetingContext, pick_one, select_ads_for_context
from regional_blog.services.content_service import get_entity_by_id
from regional_blog.services.delivery_service import localize_many
from regional_blog.services.entity_store import SqlEntityStore
from regional_blog.services.tracking import BestEffortChannel

router = APIRouter(prefix="/ads", tags=["Ads"])
logger = logging.getLogger(__name__)

ad_store = store_dependency(Ad)


@router.get("", response_model=AdList)
async def list_ads(
    placement: AdPlacement,
    category: int | None = Query(None, description="Category id of the page the ads appear on"),
    limit: int | None = Query(None, ge=1, le=50),
    single: bool = Query(False, description="Return one ad drawn by priority weight"),
    context: ResolvedContext = Depends(get_locale_context),
    db: AsyncSession = Depends(get_db),
):
    targeting = AdTargetingContext(
        placement=placement.value,
        region=context.region,
        language=context.language,
        category_id=category,
    )
    ads = await select_ads_for_context(targeting, limit or settings.ad_default_limit, db)
    if single:
        chosen = pick_one(ads)
        ads = [chosen] if chosen is not None else []

    data = localize_many(ads, lambda ad: AdResponse.from_entity(ad, context.language))
    return AdList(
        placement=placement.value,
        region=context.region,
        language=context.language,
        count=len(data),
        data=data,
    )


@router.get("/{ad_id}", response_model=AdResponse)
async def get_ad(
    ad_id: int,
    context: ResolvedContext = Depends(get_locale_context),
    db: AsyncSession = Depends(get_db),
):
    ad = await get_entity_by_id(Ad, ad_id, db)
    return AdResponse.from_entity(ad, context.language)


@router.post("/{ad_id}/impression", status_code=202)
async def track_impression(
    ad_id: int,
    db: AsyncSession = Depends(get_db),
    store: SqlEntityStore = Depends(ad_store),
    channel: BestEffortChannel = Depends(get_tracking_channel),
):
    ad = await get_entity_by_id(Ad, ad_id, db)
    channel.dispatch("ad-impression", store.increment_counter, ad.id, "impressions")
    return {"status": "accepted", "id": ad.id}


@router.post("/{ad_id}/click", status_code=202)
async def track_click(
    ad_id: int,
    db: AsyncSession = Depends(get_db),
    store: SqlEntityStore = Depends(ad_store),
    channel: BestEffortChannel = Depends(get_tracking_channel),
):
    ad = await get_entity_by_id(Ad, ad_id, db)
    channel.dispatch("ad-click", store.increment_counter, ad.id, "clicks")
    return {"status": "accepted", "id": ad.id, "click_url": ad.click_url}
