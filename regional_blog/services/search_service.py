"""
Search Service

Localized search over articles, categories and authors. The database
narrows candidates with a case-insensitive match on the searchable
variant fields of every registry language; the final match is made
against the variant actually served in the visitor's language, so a hit
only in an untranslated language never shows up under a fallback name
that does not contain the query.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.exceptions import EntityIntegrityError
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.translatable import get_translation
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category
from regional_blog.services.entity_store import visible_in_region_clause

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Candidates fetched from SQL per requested result
CANDIDATE_FACTOR = 5

LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class SearchScope:
    """What to search for one model.

    ``fields`` are variant fields matched in SQL; the first one is the
    title-like field whose hits rank first.
    """

    model: type
    fields: tuple[str, ...]
    order_by: tuple[str, ...]  # column names, "-" prefix for descending


ARTICLES = SearchScope(Article, ("title", "excerpt"), ("-published_at",))
CATEGORIES = SearchScope(Category, ("name", "description"), ("base_slug",))
AUTHORS = SearchScope(Author, ("name", "bio"), ("-total_views", "base_slug"))


def like_pattern(term: str) -> str:
    """``%term%`` with LIKE wildcards in ``term`` matched literally."""
    escaped = term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _order_by(scope: SearchScope) -> list[Any]:
    clauses = []
    for name in scope.order_by:
        column = getattr(scope.model, name.lstrip("-"))
        clauses.append(column.desc() if name.startswith("-") else column.asc())
    return clauses


class SearchService:
    """Service for searching content visible in a region"""

    @staticmethod
    def _variant_text(entity: Any, language: str, fields: tuple[str, ...]) -> tuple[str, str]:
        variant = get_translation(entity, language)
        title = getattr(variant, fields[0], None) or ""
        body = [getattr(variant, field, None) or "" for field in fields[1:]]
        body.extend(getattr(variant, "content", None) or [])
        return title.lower(), " ".join(body).lower()

    @staticmethod
    def rank(entities: list[Any], query: str, language: str, fields: tuple[str, ...] = ARTICLES.fields) -> list[Any]:
        """Keep entities whose served variant contains ``query``; title hits first, then newest."""
        term = query.strip().lower()
        scored = []
        for entity in entities:
            try:
                title, body = SearchService._variant_text(entity, language, fields)
            except EntityIntegrityError:
                continue
            if term in title:
                scored.append((0, entity))
            elif term in body:
                scored.append((1, entity))

        # Only articles carry published_at; the rest keep the SQL order.
        scored.sort(key=lambda item: getattr(item[1], "published_at", None) or _EPOCH, reverse=True)
        scored.sort(key=lambda item: item[0])
        return [entity for _, entity in scored]

    @staticmethod
    async def search(
        db: AsyncSession,
        registry: LocaleRegistry,
        scope: SearchScope,
        query: str,
        region: str,
        language: str,
        limit: int = 20,
    ) -> list[Any]:
        """
        Search one model's public entities visible in ``region``.

        Args:
            db: Database session
            registry: Locale registry snapshot (languages searched in SQL)
            scope: Model and fields to search
            query: Search text, matched case-insensitively and literally
            region: Visitor region
            language: Visitor language; decides which variant must match
            limit: Maximum number of results

        Returns:
            Matching entities, best match first
        """
        term = query.strip()
        if not term or not registry.language_codes:
            return []

        model = scope.model
        pattern = like_pattern(term)
        text_matches = [
            model.translations[code][field].as_string().ilike(pattern, escape=LIKE_ESCAPE)
            for code in registry.language_codes
            for field in scope.fields
        ]

        result = await db.execute(
            select(model)
            .where(
                *model.public_criteria(),
                visible_in_region_clause(model, region),
                or_(*text_matches),
            )
            .order_by(*_order_by(scope))
            .limit(limit * CANDIDATE_FACTOR)
        )
        candidates = list(result.scalars().all())
        ranked = SearchService.rank(candidates, term, language, scope.fields)
        logger.debug(
            "Search %s %r in %s/%s: %d of %d candidates",
            model.__tablename__,
            term,
            region,
            language,
            len(ranked),
            len(candidates),
        )
        return ranked[:limit]

    @staticmethod
    async def search_articles(db, registry, query, region, language, limit=20) -> list[Article]:
        return await SearchService.search(db, registry, ARTICLES, query, region, language, limit)

    @staticmethod
    async def search_categories(db, registry, query, region, language, limit=10) -> list[Category]:
        return await SearchService.search(db, registry, CATEGORIES, query, region, language, limit)

    @staticmethod
    async def search_authors(db, registry, query, region, language, limit=10) -> list[Author]:
        return await SearchService.search(db, registry, AUTHORS, query, region, language, limit)

    @staticmethod
    async def search_all(db, registry, query, region, language, limit=5) -> dict[str, list[Any]]:
        """Articles, categories and authors, ``limit`` of each."""
        return {
            "articles": await SearchService.search_articles(db, registry, query, region, language, limit),
            "categories": await SearchService.search_categories(db, registry, query, region, language, limit),
            "authors": await SearchService.search_authors(db, registry, query, region, language, limit),
        }
