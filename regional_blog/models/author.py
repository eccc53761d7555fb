from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from regional_blog.database import Base
from regional_blog.i18n.translatable import AuthorVariant
from regional_blog.models.mixins import TranslatableMixin


class Author(TranslatableMixin, Base):
    __tablename__ = "authors"

    variant_type = AuthorVariant
    resource_name = "Author"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    avatar = Column(String, nullable=True)
    total_views = Column(Integer, nullable=False, default=0)

    articles = relationship("Article", back_populates="author", lazy="noload")

    __table_args__ = (UniqueConstraint("base_slug", "region_scope", name="uq_author_base_slug_scope"),)
