"""
Mock utilities for testing the resolution core

Provides in-memory stand-ins for:
- Entity stores (any translatable model)
- The best-effort tracking channel
- Database sessions
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock


class InMemoryEntityStore:
    """EntityStore over a plain list of (transient) ORM instances.

    Slug lookups rank like ``SqlEntityStore``: the edition visible in the
    given region first, then a global edition, then the lowest id. Extra
    SQL criteria passed to ``list_visible`` are ignored.
    """

    def __init__(self, entities=(), resource_name: str = "Article"):
        self.entities = list(entities)
        self.resource_name = resource_name
        self.calls: list[tuple] = []
        self.increments: list[tuple[Any, str, int]] = []

    def _sorted(self):
        return sorted(self.entities, key=lambda entity: entity.id)

    def _best(self, matches, region):
        def rank(entity):
            hidden = region is not None and not entity.visibility.allows(region)
            return (hidden, not entity.visibility.is_global, entity.id)

        return min(matches, key=rank) if matches else None

    @staticmethod
    def _variant_slug(entity, language):
        return (entity.translations or {}).get(language, {}).get("slug")

    async def find_by_base_slug(self, base_slug: str, region=None):
        self.calls.append(("base", base_slug))
        return self._best([entity for entity in self.entities if entity.base_slug == base_slug], region)

    async def find_by_variant_slug(self, slug: str, language: str, region=None):
        self.calls.append(("variant", slug, language))
        return self._best([entity for entity in self.entities if self._variant_slug(entity, language) == slug], region)

    async def find_by_slug_across_languages(self, slug: str, languages, region=None):
        self.calls.append(("union", slug, tuple(languages)))
        matches = [
            entity
            for entity in self.entities
            if entity.base_slug == slug or slug in {self._variant_slug(entity, code) for code in languages}
        ]
        return self._best(matches, region)

    async def find_sibling_by_base_slug(self, base_slug: str, predicate, exclude_id=None):
        self.calls.append(("sibling", base_slug, exclude_id))
        for entity in self._sorted():
            if entity.base_slug != base_slug or entity.id == exclude_id:
                continue
            if predicate(entity.visibility):
                return entity
        return None

    async def list_visible(self, region: str, *criteria, order_by=(), limit: int = 20, offset: int = 0):
        visible = [entity for entity in self._sorted() if entity.visibility.allows(region)]
        return visible[offset : offset + limit]

    async def increment_counter(self, entity_id, counter: str, amount: int = 1) -> None:
        self.increments.append((entity_id, counter, amount))


class RecordingChannel:
    """Tracking channel that records dispatches instead of running them."""

    def __init__(self):
        self.dispatched: list[tuple[str, Any, tuple, dict]] = []

    def dispatch(self, name, func, *args, **kwargs):
        self.dispatched.append((name, func, args, kwargs))

    def names(self) -> list[str]:
        return [name for name, *_ in self.dispatched]

    def clear(self):
        self.dispatched.clear()


def make_async_mock_db():
    """AsyncSession mock whose execute() returns empty scalar results."""
    db = AsyncMock()
    scalars = MagicMock()
    scalars.first.return_value = None
    scalars.all.return_value = []
    execute_result = MagicMock()
    execute_result.scalars.return_value = scalars
    execute_result.scalar.return_value = 0
    db.execute.return_value = execute_result
    db.add = MagicMock()
    return db


def set_scalars(db, first=None, all=None):
    """Make the next execute() calls return the given rows."""
    scalars = db.execute.return_value.scalars.return_value
    scalars.first.return_value = first
    scalars.all.return_value = list(all or ([] if first is None else [first]))
