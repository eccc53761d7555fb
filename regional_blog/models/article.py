from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from regional_blog.database import Base
from regional_blog.i18n.translatable import ArticleVariant
from regional_blog.models.mixins import TranslatableMixin


class Article(TranslatableMixin, Base):
    __tablename__ = "articles"

    variant_type = ArticleVariant
    resource_name = "Article"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    image_url = Column(String, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)

    published = Column(Boolean, nullable=False, default=False, index=True)
    published_at = Column(DateTime(timezone=True), nullable=True, index=True)
    featured = Column(Boolean, nullable=False, default=False)
    trending = Column(Boolean, nullable=False, default=False)
    read_time = Column(String(20), nullable=False, default="1 min read")

    # Counters (best-effort increments)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)

    category = relationship("Category", back_populates="articles", lazy="selectin")
    author = relationship("Author", back_populates="articles", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("base_slug", "region_scope", name="uq_article_base_slug_scope"),
        Index("idx_article_published_at", "published", "published_at"),
    )

    @classmethod
    def public_criteria(cls):
        return [cls.published.is_(True)]
