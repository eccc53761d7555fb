"""
Region and Language models

Seeded once at deployment (see ``region_service.seed_locales``) and read
into the in-memory ``LocaleRegistry`` snapshot at startup.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String

from regional_blog.database import Base


class Language(Base):
    __tablename__ = "languages"

    code = Column(String(5), primary_key=True)
    name = Column(String(50), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # canonical ordering


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    code = Column(String(2), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    languages = Column(JSON, nullable=False, default=list)
    default_language = Column(String(5), nullable=False)
    currency = Column(String(3), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
