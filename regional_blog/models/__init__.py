from .ad import Ad, AdPlacement, AdStatus, AdType
from .article import Article
from .author import Author
from .category import Category
from .content_view import ContentView
from .region import Language, Region

__all__ = [
    "Ad",
    "AdPlacement",
    "AdStatus",
    "AdType",
    "Article",
    "Author",
    "Category",
    "ContentView",
    "Language",
    "Region",
]
