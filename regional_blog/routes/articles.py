"""
Article routes (mounted at /api and /api/{region})

    GET   /articles                → published articles visible in the region
    GET   /articles/search?q=      → localized search
    GET   /articles/{slug}         → detail; base or any variant slug
    POST  /articles/{slug}/view    → count a view explicitly
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.api.deps import (
    get_locale_context,
    get_registry,
    get_session_factory,
    get_tracking_channel,
    store_dependency,
)
from regional_blog.database import get_db
from regional_blog.exceptions import RegionForbiddenError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.middleware.region import client_ip
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category
from regional_blog.schemas.content import ArticleList, ArticleResponse
from regional_blog.services.content_locator import ContentLocator
from regional_blog.services.delivery_service import deliver, dispatch_view, localize_many
from regional_blog.services.entity_store import SqlEntityStore
from regional_blog.services.search_service import SearchService
from regional_blog.services.tracking import BestEffortChannel

router = APIRouter(prefix="/articles", tags=["Articles"])
logger = logging.getLogger(__name__)

article_store = store_dependency(Article)
category_store = store_dependency(Category)
author_store = store_dependency(Author)


def _article_list(articles, context: ResolvedContext, registry: LocaleRegistry) -> ArticleList:
    data = localize_many(articles, lambda article: ArticleResponse.from_entity(article, context.language, registry))
    return ArticleList(region=context.region, language=context.language, count=len(data), data=data)


def _dispatch_article_view(
    request: Request,
    article: Article,
    context: ResolvedContext,
    store: SqlEntityStore,
    authors: SqlEntityStore,
    channel: BestEffortChannel,
    session_factory,
) -> None:
    channel.dispatch("article-views", store.increment_counter, article.id, "views")
    if article.author_id is not None:
        channel.dispatch("author-total-views", authors.increment_counter, article.author_id, "total_views")
    dispatch_view(
        channel,
        session_factory,
        "article",
        article,
        context,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )


@router.get("", response_model=ArticleList)
async def list_articles(
    category: str | None = Query(None, description="Category slug (base or any language)"),
    featured: bool | None = None,
    trending: bool | None = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(article_store),
    categories: SqlEntityStore = Depends(category_store),
):
    criteria = []
    if category:
        found = await ContentLocator(categories, registry).locate_or_404(category, context.language, context.region)
        criteria.append(Article.category_id == found.id)
    if featured is not None:
        criteria.append(Article.featured.is_(featured))
    if trending is not None:
        criteria.append(Article.trending.is_(trending))

    articles = await store.list_visible(
        context.region,
        *criteria,
        order_by=(Article.published_at.desc(), Article.id.desc()),
        limit=limit,
        offset=offset,
    )
    return _article_list(articles, context, registry)


@router.get("/search", response_model=ArticleList)
async def search_articles(
    q: str = Query(..., min_length=2, max_length=200),
    limit: int = Query(20, ge=1, le=100),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    db: AsyncSession = Depends(get_db),
):
    articles = await SearchService.search_articles(db, registry, q, context.region, context.language, limit)
    return _article_list(articles, context, registry)


@router.get("/{slug}", response_model=ArticleResponse)
async def get_article(
    slug: str,
    request: Request,
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(article_store),
    authors: SqlEntityStore = Depends(author_store),
    channel: BestEffortChannel = Depends(get_tracking_channel),
    session_factory=Depends(get_session_factory),
):
    """
    Article detail in the visitor's language.

    Falls back to the default-language variant when the requested one is
    missing. Redirects (302) to a regional edition when this one is not
    available in the visitor's region.
    """
    delivery = await deliver(slug, store, registry, context, "articles", request.url.query)
    if delivery.redirect_to:
        return RedirectResponse(delivery.redirect_to, status_code=302)

    article = delivery.entity
    response = ArticleResponse.from_entity(article, context.language, registry)
    _dispatch_article_view(request, article, context, store, authors, channel, session_factory)
    return response


@router.post("/{slug}/view", status_code=202)
async def record_article_view(
    slug: str,
    request: Request,
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(article_store),
    authors: SqlEntityStore = Depends(author_store),
    channel: BestEffortChannel = Depends(get_tracking_channel),
    session_factory=Depends(get_session_factory),
):
    delivery = await deliver(slug, store, registry, context, "articles")
    if delivery.entity is None:
        # only views of an edition visible in this region count
        raise RegionForbiddenError(store.resource_name, context.region)
    article = delivery.entity
    _dispatch_article_view(request, article, context, store, authors, channel, session_factory)
    return {"status": "accepted", "id": article.id}
