from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from regional_blog.database import Base
from regional_blog.i18n.translatable import CategoryVariant
from regional_blog.models.mixins import TranslatableMixin


class Category(TranslatableMixin, Base):
    __tablename__ = "categories"

    variant_type = CategoryVariant
    resource_name = "Category"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    color = Column(String(7), nullable=True)

    articles = relationship("Article", back_populates="category", lazy="noload")

    __table_args__ = (UniqueConstraint("base_slug", "region_scope", name="uq_category_base_slug_scope"),)
