"""Visitor analytics: one row per recorded content view."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from regional_blog.database import Base


class ContentView(Base):
    __tablename__ = "content_views"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    entity_type = Column(String(20), nullable=False)  # "article", "category", "author"
    entity_id = Column(Integer, nullable=False)
    region = Column(String(2), nullable=True)
    language = Column(String(5), nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    referrer = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        Index("idx_content_views_entity_created", "entity_type", "entity_id", "created_at"),
        Index("idx_content_views_dedup", "entity_type", "entity_id", "ip_address", "created_at"),
    )
