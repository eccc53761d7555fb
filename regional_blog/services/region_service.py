"""
Region Service

Loads the Locale Registry snapshot from the database, seeds the locale
catalogue, and reads/writes the visitor's region preference cookie.

Functions:
    load_registry: build a LocaleRegistry from the regions/languages tables
    seed_locales: idempotently insert the seed catalogue
    read_region_cookie: persisted region preference from a request
    write_region_cookie: persist a region preference on a response
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from starlette.requests import Request  # noqa: TC002
from starlette.responses import Response  # noqa: TC002

from regional_blog.config import settings
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.seed import SEED_LANGUAGES, SEED_REGIONS
from regional_blog.models.region import Language, Region

logger = logging.getLogger(__name__)


async def load_registry(db: AsyncSession) -> LocaleRegistry:
    languages = (await db.execute(select(Language))).scalars().all()
    regions = (await db.execute(select(Region))).scalars().all()
    registry = LocaleRegistry.from_records(regions, languages)
    logger.info(
        "Locale registry loaded: %d regions, %d languages",
        len(registry.regions),
        len(registry.language_codes),
    )
    return registry


async def seed_locales(db: AsyncSession) -> int:
    """Insert missing seed languages and regions. Returns the number of rows added."""
    existing_languages = set((await db.execute(select(Language.code))).scalars().all())
    existing_regions = set((await db.execute(select(Region.code))).scalars().all())

    added = 0
    for position, (code, name) in enumerate(SEED_LANGUAGES):
        if code not in existing_languages:
            db.add(Language(code=code, name=name, position=position))
            added += 1
    for position, data in enumerate(SEED_REGIONS):
        if data["code"] not in existing_regions:
            db.add(Region(position=position, is_active=True, **data))
            added += 1

    if added:
        await db.commit()
    logger.info("Seeded %d locale rows", added)
    return added


def read_region_cookie(request: Request) -> str | None:
    value = request.cookies.get(settings.region_cookie_name)
    return value.strip().upper() if value else None


def write_region_cookie(response: Response, region_code: str, max_age: int | None = None) -> None:
    response.set_cookie(
        key=settings.region_cookie_name,
        value=region_code.upper(),
        max_age=max_age if max_age is not None else settings.region_cookie_max_age,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
    )
