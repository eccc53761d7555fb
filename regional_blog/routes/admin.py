"""
Editor routes, guarded by the X-API-Key header

Per content kind ({kind} = articles | categories | authors | ads):

    POST    /api/admin/{kind}                                  → create
    GET     /api/admin/{kind}/{id}                             → all variants, unlocalized
    PATCH   /api/admin/{kind}/{id}                             → update non-translated fields
    DELETE  /api/admin/{kind}/{id}                             → delete
    PUT     /api/admin/{kind}/{id}/translations/{language}     → create/update one variant
    DELETE  /api/admin/{kind}/{id}/translations/{language}     → drop a non-default variant
    PUT     /api/admin/{kind}/{id}/visibility                  → global / region-restricted

Locale catalogue and analytics:

    POST    /api/admin/regions/seed                            → insert missing seed regions
    POST    /api/admin/regions/reload                          → rebuild the registry snapshot
    GET     /api/admin/analytics/{kind}/{id}                   → views by region and language
"""

import logging
from typing import Any

from fastapi import Body, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.api import create_api_router
from regional_blog.api.deps import get_registry, require_admin_key
from regional_blog.config import settings
from regional_blog.database import get_db
from regional_blog.exceptions import EntityNotFoundError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.models.ad import Ad
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category
from regional_blog.schemas.ad import AdCreate
from regional_blog.schemas.content import (
    ArticleCreate,
    AuthorCreate,
    CategoryCreate,
    EntityAdminResponse,
    TranslationUpsert,
    VisibilityUpdate,
)
from regional_blog.schemas.region import RegionResponse
from regional_blog.services import content_service
from regional_blog.services.analytics_service import AnalyticsService
from regional_blog.services.region_service import load_registry, seed_locales

router = create_api_router(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])
logger = logging.getLogger(__name__)

CONTENT_KINDS = {
    "articles": (Article, ArticleCreate),
    "categories": (Category, CategoryCreate),
    "authors": (Author, AuthorCreate),
    "ads": (Ad, AdCreate),
}


# ── Locale catalogue ───────────────────────────────────────────────────────────


@router.post("/regions/seed")
async def seed_regions(request: Request, db: AsyncSession = Depends(get_db)):
    added = await seed_locales(db)
    request.app.state.locale_registry = await load_registry(db)
    return {"added": added, "regions": len(request.app.state.locale_registry.regions)}


@router.post("/regions/reload", response_model=list[RegionResponse])
async def reload_regions(request: Request, db: AsyncSession = Depends(get_db)):
    registry = await load_registry(db)
    request.app.state.locale_registry = registry
    logger.info("Locale registry reloaded by editor request")
    return [RegionResponse.from_entry(region) for region in registry.list_active_regions()]


@router.get("/analytics/{kind}/{entity_id}")
async def view_breakdown(
    kind: str,
    entity_id: int,
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
):
    if kind not in CONTENT_KINDS:
        raise EntityNotFoundError("Content kind", kind)
    entity_type = CONTENT_KINDS[kind][0].resource_name.lower()
    return await AnalyticsService.get_view_breakdown(db, entity_type, entity_id, days)


# ── Content kinds ──────────────────────────────────────────────────────────────


def register_content_kind(kind: str, model: type, create_schema: type) -> None:
    """Add the editor endpoints for one translatable model."""
    tag = [f"Admin: {kind}"]

    @router.post(f"/{kind}", response_model=EntityAdminResponse, status_code=status.HTTP_201_CREATED, tags=tag)
    async def create(
        payload: create_schema,  # type: ignore[valid-type]
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.create_entity(
            model,
            payload.translations,
            registry,
            db,
            default_region=settings.default_region,
            default_language=payload.default_language,
            base_slug=payload.base_slug,
            visibility=payload.to_visibility(),
            **payload.attributes(),
        )
        return EntityAdminResponse.from_entity(entity, registry)

    @router.get(f"/{kind}/{{entity_id}}", response_model=EntityAdminResponse, tags=tag)
    async def read(
        entity_id: int,
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        return EntityAdminResponse.from_entity(entity, registry)

    @router.patch(f"/{kind}/{{entity_id}}", response_model=EntityAdminResponse, tags=tag)
    async def update(
        entity_id: int,
        updates: dict[str, Any] = Body(...),
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        entity = await content_service.update_attributes(entity, updates, db)
        return EntityAdminResponse.from_entity(entity, registry)

    @router.delete(f"/{kind}/{{entity_id}}", status_code=status.HTTP_204_NO_CONTENT, tags=tag)
    async def delete(entity_id: int, db: AsyncSession = Depends(get_db)):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        await content_service.delete_entity(entity, db)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.put(f"/{kind}/{{entity_id}}/translations/{{language}}", response_model=EntityAdminResponse, tags=tag)
    async def upsert_translation(
        entity_id: int,
        language: str,
        payload: TranslationUpsert,
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        entity = await content_service.upsert_translation(entity, language, payload.fields, registry, db)
        return EntityAdminResponse.from_entity(entity, registry)

    @router.delete(f"/{kind}/{{entity_id}}/translations/{{language}}", response_model=EntityAdminResponse, tags=tag)
    async def remove_translation(
        entity_id: int,
        language: str,
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        entity = await content_service.remove_translation(entity, language, registry, db)
        return EntityAdminResponse.from_entity(entity, registry)

    @router.put(f"/{kind}/{{entity_id}}/visibility", response_model=EntityAdminResponse, tags=tag)
    async def update_visibility(
        entity_id: int,
        payload: VisibilityUpdate,
        registry: LocaleRegistry = Depends(get_registry),
        db: AsyncSession = Depends(get_db),
    ):
        entity = await content_service.get_entity_by_id(model, entity_id, db)
        entity = await content_service.update_visibility(entity, payload.to_visibility(), db)
        return EntityAdminResponse.from_entity(entity, registry)


for _kind, (_model, _schema) in CONTENT_KINDS.items():
    register_content_kind(_kind, _model, _schema)
