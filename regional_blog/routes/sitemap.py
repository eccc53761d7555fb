"""
Sitemap routes

    GET /sitemap.xml              index
    GET /sitemap-main.xml         regional home pages
    GET /sitemap-{section}.xml    articles, categories, authors

URLs point at the public front end (``settings.site_url``), falling back
to this API's own origin.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.api.deps import get_registry
from regional_blog.config import settings
from regional_blog.database import get_db
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.services.sitemap_service import SitemapService

router = APIRouter(tags=["SEO"])


def get_base_url(request: Request) -> str:
    return (settings.site_url or str(request.base_url)).rstrip("/")


def get_sitemap_service(
    request: Request,
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
) -> SitemapService:
    return SitemapService(db, registry, get_base_url(request), settings.default_region)


def xml_response(content: str) -> Response:
    return Response(
        content=content,
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/sitemap.xml")
async def get_sitemap_index(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    return xml_response(service.generate_sitemap_index())


@router.get("/sitemap-main.xml")
async def get_main_sitemap(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    """Home page of every active region."""
    return xml_response(service.generate_main_sitemap())


@router.get("/sitemap-articles.xml")
async def get_article_sitemap(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    return xml_response(await service.generate_section("articles"))


@router.get("/sitemap-categories.xml")
async def get_category_sitemap(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    return xml_response(await service.generate_section("categories"))


@router.get("/sitemap-authors.xml")
async def get_author_sitemap(service: SitemapService = Depends(get_sitemap_service)) -> Response:
    return xml_response(await service.generate_section("authors"))
