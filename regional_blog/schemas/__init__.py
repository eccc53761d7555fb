from .ad import AdCreate, AdList, AdResponse
from .content import (
    ArticleCreate,
    ArticleList,
    ArticleResponse,
    AuthorCreate,
    AuthorResponse,
    CategoryCreate,
    CategoryResponse,
    EntityAdminResponse,
    TranslationUpsert,
    VisibilityUpdate,
)
from .region import LanguageInfo, RegionPreference, RegionResponse, ResolvedContextResponse

# Define the public API of this module
__all__ = [
    "AdCreate",
    "AdList",
    "AdResponse",
    "ArticleCreate",
    "ArticleList",
    "ArticleResponse",
    "AuthorCreate",
    "AuthorResponse",
    "CategoryCreate",
    "CategoryResponse",
    "EntityAdminResponse",
    "TranslationUpsert",
    "VisibilityUpdate",
    "LanguageInfo",
    "RegionPreference",
    "RegionResponse",
    "ResolvedContextResponse",
]
