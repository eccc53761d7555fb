"""
Ad model

Ads are translatable like any other content (title, description, CTA per
language) and are never region-restricted through visibility; regional
reach is expressed with ``target_regions`` instead. Empty target lists
mean "no targeting on that axis".
"""

import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, Integer, String, UniqueConstraint

from regional_blog.database import Base
from regional_blog.i18n.translatable import AdVariant
from regional_blog.models.mixins import TranslatableMixin


class AdStatus(str, enum.Enum):
    draft = "draft"
    active = "active"
    paused = "paused"
    expired = "expired"


class AdType(str, enum.Enum):
    banner = "banner"
    native = "native"
    sponsored_article = "sponsored_article"
    display = "display"


class AdPlacement(str, enum.Enum):
    header = "header"
    sidebar = "sidebar"
    footer = "footer"
    inline = "inline"
    between_articles = "between_articles"
    article_sidebar = "article_sidebar"


class Ad(TranslatableMixin, Base):
    __tablename__ = "ads"

    variant_type = AdVariant
    resource_name = "Ad"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(30), nullable=False, default=AdType.banner.value)
    status = Column(String(20), nullable=False, default=AdStatus.draft.value, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    placement = Column(String(30), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    priority = Column(Integer, nullable=False, default=0)  # 0..100, also the rotation weight

    # ── Targeting ─────────────────────────────────────────────────────────────
    target_regions = Column(JSON, nullable=False, default=list)
    target_languages = Column(JSON, nullable=False, default=list)
    target_categories = Column(JSON, nullable=False, default=list)  # category ids

    # ── Scheduling and caps ───────────────────────────────────────────────────
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    max_impressions = Column(Integer, nullable=True)
    max_clicks = Column(Integer, nullable=True)

    click_url = Column(String, nullable=False)
    image_url = Column(String, nullable=True)

    impressions = Column(Integer, nullable=False, default=0)
    clicks = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("base_slug", "region_scope", name="uq_ad_base_slug_scope"),
        Index("idx_ad_placement_status", "placement", "status", "is_active"),
        Index("idx_ad_priority_position", "priority", "position"),
    )

    @property
    def ctr(self) -> float:
        if not self.impressions:
            return 0.0
        return round(self.clicks / self.impressions * 100, 2)
