"""
Visitor analytics

Records who viewed which localized entity from which region. Recording is
always dispatched on the best-effort side channel, so it opens its own
session instead of borrowing the request's.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from regional_blog.config import settings
from regional_blog.models.content_view import ContentView

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Static helpers for content view analytics."""

    @staticmethod
    async def record_content_view(
        session_factory: async_sessionmaker,
        entity_type: str,
        entity_id: int,
        region: str | None = None,
        language: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        referrer: str | None = None,
    ) -> bool:
        """
        Record a content view, deduplicated per IP within ``view_dedup_minutes``.

        Returns True if a new view was recorded, False if deduplicated.
        """
        async with session_factory() as db:
            if ip_address:
                dedup_window = datetime.now(timezone.utc) - timedelta(minutes=settings.view_dedup_minutes)
                existing = await db.execute(
                    select(func.count(ContentView.id)).where(
                        and_(
                            ContentView.entity_type == entity_type,
                            ContentView.entity_id == entity_id,
                            ContentView.ip_address == ip_address,
                            ContentView.created_at >= dedup_window,
                        )
                    )
                )
                if (existing.scalar() or 0) > 0:
                    return False

            db.add(
                ContentView(
                    entity_type=entity_type,
                    entity_id=entity_id,
                    region=region,
                    language=language,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    referrer=referrer,
                    created_at=datetime.now(timezone.utc),
                )
            )
            await db.commit()
            return True

    @staticmethod
    async def get_view_breakdown(
        db: AsyncSession,
        entity_type: str,
        entity_id: int,
        days: int = 30,
    ) -> dict[str, Any]:
        """Views of one entity over the last ``days`` days, split by region and language."""
        start_date = datetime.now(timezone.utc) - timedelta(days=days)
        conditions = and_(
            ContentView.entity_type == entity_type,
            ContentView.entity_id == entity_id,
            ContentView.created_at >= start_date,
        )

        by_region = await db.execute(
            select(ContentView.region, func.count(ContentView.id))
            .where(conditions)
            .group_by(ContentView.region)
            .order_by(func.count(ContentView.id).desc())
        )
        by_language = await db.execute(
            select(ContentView.language, func.count(ContentView.id))
            .where(conditions)
            .group_by(ContentView.language)
            .order_by(func.count(ContentView.id).desc())
        )

        regions = {region or "unknown": count for region, count in by_region.all()}
        languages = {language or "unknown": count for language, count in by_language.all()}
        return {
            "entity_type": entity_type,
            "entity_id": entity_id,
            "period_days": days,
            "total_views": sum(regions.values()),
            "by_region": regions,
            "by_language": languages,
        }
