"""
Search routes (mounted at /api and /api/{region})

    GET   /search?q=             → articles
    GET   /search/categories?q=  → categories
    GET   /search/authors?q=     → authors
    GET   /search/all?q=         → a few of each

Matching runs against the variant served in the resolved language, with
the same default-language fallback as the detail endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.api.deps import get_locale_context, get_registry
from regional_blog.database import get_db
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.schemas.content import (
    ArticleList,
    ArticleResponse,
    AuthorList,
    AuthorResponse,
    CategoryList,
    CategoryResponse,
    GlobalSearchResponse,
)
from regional_blog.services.delivery_service import localize_many
from regional_blog.services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["Search"])


def _articles(rows, context: ResolvedContext, registry: LocaleRegistry) -> ArticleList:
    data = localize_many(rows, lambda article: ArticleResponse.from_entity(article, context.language, registry))
    return ArticleList(region=context.region, language=context.language, count=len(data), data=data)


def _categories(rows, context: ResolvedContext, registry: LocaleRegistry) -> CategoryList:
    data = localize_many(rows, lambda category: CategoryResponse.from_entity(category, context.language, registry))
    return CategoryList(region=context.region, language=context.language, count=len(data), data=data)


def _authors(rows, context: ResolvedContext, registry: LocaleRegistry) -> AuthorList:
    data = localize_many(rows, lambda author: AuthorResponse.from_entity(author, context.language, registry))
    return AuthorList(region=context.region, language=context.language, count=len(data), data=data)


@router.get("", response_model=ArticleList)
async def search_articles(
    q: str = Query(..., min_length=2, max_length=200),
    limit: int = Query(20, ge=1, le=100),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
):
    rows = await SearchService.search_articles(db, registry, q, context.region, context.language, limit)
    return _articles(rows, context, registry)


@router.get("/categories", response_model=CategoryList)
async def search_categories(
    q: str = Query(..., min_length=2, max_length=200),
    limit: int = Query(10, ge=1, le=50),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
):
    rows = await SearchService.search_categories(db, registry, q, context.region, context.language, limit)
    return _categories(rows, context, registry)


@router.get("/authors", response_model=AuthorList)
async def search_authors(
    q: str = Query(..., min_length=2, max_length=200),
    limit: int = Query(10, ge=1, le=50),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
):
    rows = await SearchService.search_authors(db, registry, q, context.region, context.language, limit)
    return _authors(rows, context, registry)


@router.get("/all", response_model=GlobalSearchResponse)
async def search_all(
    q: str = Query(..., min_length=2, max_length=200),
    limit: int = Query(5, ge=1, le=20, description="Results per content type"),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
):
    results = await SearchService.search_all(db, registry, q, context.region, context.language, limit)
    return GlobalSearchResponse(
        query=q.strip(),
        region=context.region,
        language=context.language,
        articles=_articles(results["articles"], context, registry),
        categories=_categories(results["categories"], context, registry),
        authors=_authors(results["authors"], context, registry),
    )
