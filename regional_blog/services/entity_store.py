"""
Entity Store

Narrow read interface the resolution core uses to reach translatable
content, plus its SQLAlchemy implementation. One store wraps one model
class (Article, Category, Author or Ad) and one request-scoped session.

Counter increments run on their own short-lived session because they are
dispatched on the best-effort side channel and may outlive the request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: TC002

from regional_blog.i18n.translatable import RegionVisibility
from regional_blog.models.mixins import TranslatableMixin

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=TranslatableMixin)

VisibilityPredicate = Callable[[RegionVisibility], bool]


class EntityStore(Protocol[E]):
    resource_name: str

    async def find_by_base_slug(self, base_slug: str, region: str | None = None) -> E | None: ...

    async def find_by_variant_slug(self, slug: str, language: str, region: str | None = None) -> E | None: ...

    async def find_by_slug_across_languages(
        self, slug: str, languages: Sequence[str], region: str | None = None
    ) -> E | None: ...

    async def find_sibling_by_base_slug(
        self, base_slug: str, predicate: VisibilityPredicate, exclude_id: Any = None
    ) -> E | None: ...

    async def increment_counter(self, entity_id: Any, counter: str, amount: int = 1) -> None: ...


def variant_slug_column(model: type[TranslatableMixin], language: str):
    """SQL expression for ``translations[language].slug`` as text."""
    return model.translations[language]["slug"].as_string()


def visible_in_region_clause(model: type[TranslatableMixin], region: str):
    """WHERE clause: global, or restricted to a scope that lists ``region``.

    ``region_scope`` is the comma-joined, sorted list of two-letter codes, so
    wrapping it in commas makes a plain LIKE exact.
    """
    return or_(
        model.is_global.is_(True),
        func.concat(",", model.region_scope, ",").like(f"%,{region.upper()},%"),
    )


class SqlEntityStore(Generic[E]):
    def __init__(
        self,
        model: type[E],
        db: AsyncSession,
        session_factory: async_sessionmaker | None = None,
        public_only: bool = True,
    ):
        self.model = model
        self.db = db
        self.session_factory = session_factory
        self.public_only = public_only

    @property
    def resource_name(self) -> str:
        return self.model.resource_name

    def _select(self):
        query = select(self.model)
        if self.public_only:
            query = query.where(*self.model.public_criteria())
        return query

    async def _first(self, query) -> E | None:
        result = await self.db.execute(query.limit(1))
        return result.scalars().first()

    def _ranking(self, region: str | None) -> tuple:
        """ORDER BY for slug lookups.

        Regional editions share slugs, so with a region the edition visible
        there comes first; then the global edition, then the oldest row.
        """
        ranking = [self.model.is_global.desc(), self.model.id]
        if region:
            ranking.insert(0, case((visible_in_region_clause(self.model, region), 0), else_=1))
        return tuple(ranking)

    async def find_by_base_slug(self, base_slug: str, region: str | None = None) -> E | None:
        query = self._select().where(self.model.base_slug == base_slug).order_by(*self._ranking(region))
        return await self._first(query)

    async def find_by_variant_slug(self, slug: str, language: str, region: str | None = None) -> E | None:
        query = (
            self._select()
            .where(variant_slug_column(self.model, language) == slug)
            .order_by(*self._ranking(region))
        )
        return await self._first(query)

    async def find_by_slug_across_languages(
        self, slug: str, languages: Sequence[str], region: str | None = None
    ) -> E | None:
        """Union lookup: base slug or any listed language's variant slug."""
        candidates = [self.model.base_slug == slug]
        candidates.extend(variant_slug_column(self.model, language) == slug for language in languages)
        query = self._select().where(or_(*candidates)).order_by(*self._ranking(region))
        return await self._first(query)

    async def find_sibling_by_base_slug(
        self, base_slug: str, predicate: VisibilityPredicate, exclude_id: Any = None
    ) -> E | None:
        query = self._select().where(self.model.base_slug == base_slug).order_by(self.model.id)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.db.execute(query)
        for candidate in result.scalars().all():
            if predicate(candidate.visibility):
                return candidate
        return None

    async def list_visible(
        self,
        region: str,
        *criteria,
        order_by: Sequence = (),
        limit: int = 20,
        offset: int = 0,
    ) -> list[E]:
        query = (
            self._select()
            .where(visible_in_region_clause(self.model, region), *criteria)
            .order_by(*(order_by or (self.model.created_at.desc(),)))
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def increment_counter(self, entity_id: Any, counter: str, amount: int = 1) -> None:
        column = getattr(self.model, counter, None)
        if column is None:
            raise ValueError(f"{self.model.__name__} has no counter '{counter}'")
        statement = update(self.model).where(self.model.id == entity_id).values({counter: column + amount})

        if self.session_factory is None:
            await self.db.execute(statement)
            await self.db.commit()
            return
        async with self.session_factory() as session:
            await session.execute(statement)
            await session.commit()
