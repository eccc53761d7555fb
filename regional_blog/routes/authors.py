"""
Author routes (mounted at /api and /api/{region})

    GET   /authors                     → authors visible in the region
    GET   /authors/{slug}              → detail
    GET   /authors/{slug}/articles     → published articles by the author
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from regional_blog.api.deps import (
    get_locale_context,
    get_registry,
    get_session_factory,
    get_tracking_channel,
    store_dependency,
)
from regional_blog.exceptions import RegionForbiddenError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.middleware.region import client_ip
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.schemas.content import ArticleList, ArticleResponse, AuthorResponse
from regional_blog.services.delivery_service import deliver, dispatch_view, localize_many
from regional_blog.services.entity_store import SqlEntityStore
from regional_blog.services.tracking import BestEffortChannel

router = APIRouter(prefix="/authors", tags=["Authors"])
logger = logging.getLogger(__name__)

author_store = store_dependency(Author)
article_store = store_dependency(Article)


@router.get("", response_model=list[AuthorResponse])
async def list_authors(
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(author_store),
):
    authors = await store.list_visible(context.region, order_by=(Author.base_slug,), limit=200)
    return localize_many(authors, lambda author: AuthorResponse.from_entity(author, context.language, registry))


@router.get("/{slug}", response_model=AuthorResponse)
async def get_author(
    slug: str,
    request: Request,
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(author_store),
    channel: BestEffortChannel = Depends(get_tracking_channel),
    session_factory=Depends(get_session_factory),
):
    delivery = await deliver(slug, store, registry, context, "authors", request.url.query)
    if delivery.redirect_to:
        return RedirectResponse(delivery.redirect_to, status_code=302)

    author = delivery.entity
    response = AuthorResponse.from_entity(author, context.language, registry)
    dispatch_view(
        channel,
        session_factory,
        "author",
        author,
        context,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )
    return response


@router.get("/{slug}/articles", response_model=ArticleList)
async def list_author_articles(
    slug: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    context: ResolvedContext = Depends(get_locale_context),
    registry: LocaleRegistry = Depends(get_registry),
    store: SqlEntityStore = Depends(author_store),
    articles: SqlEntityStore = Depends(article_store),
):
    delivery = await deliver(slug, store, registry, context, "authors")
    if delivery.entity is None:
        raise RegionForbiddenError(store.resource_name, context.region)

    rows = await articles.list_visible(
        context.region,
        Article.author_id == delivery.entity.id,
        order_by=(Article.published_at.desc(), Article.id.desc()),
        limit=limit,
        offset=offset,
    )
    data = localize_many(rows, lambda article: ArticleResponse.from_entity(article, context.language, registry))
    return ArticleList(region=context.region, language=context.language, count=len(data), data=data)
