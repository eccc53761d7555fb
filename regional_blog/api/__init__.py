"""
API routing helpers

Visitor-facing content routes are mounted twice: under ``/api`` and under
``/api/{region}``. The second form carries the region path signal that
``RegionMiddleware`` reads; the route handlers themselves never look at
the path parameter.
"""

from fastapi import APIRouter, FastAPI
from starlette.convertors import Convertor, register_url_convertor


class RegionCodeConvertor(Convertor):
    """Two-letter path segment, so "/api/articles/search" never reads "articles" as a region."""

    regex = "[A-Za-z]{2}"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("region", RegionCodeConvertor())

API_PREFIX = "/api"
REGION_PREFIX = f"{API_PREFIX}/{{region:region}}"


def create_api_router(
    *,
    prefix: str = "",
    tags: list[str] | None = None,
    include_in_schema: bool = True,
    dependencies: list | None = None,
) -> APIRouter:
    """
    Create an API router under ``/api``.

    Example:
        >>> router = create_api_router(prefix="/regions", tags=["Regions"])
        >>> # This creates a router with path /api/regions
    """
    full_prefix = f"{API_PREFIX}{prefix}" if prefix else API_PREFIX

    return APIRouter(
        prefix=full_prefix,
        tags=tags,  # type: ignore[arg-type]
        include_in_schema=include_in_schema,
        dependencies=dependencies,
    )


def include_regional_router(app: FastAPI, router: APIRouter) -> None:
    """Mount a content router at ``/api`` and at ``/api/{region}``."""
    app.include_router(router, prefix=API_PREFIX)
    app.include_router(router, prefix=REGION_PREFIX, include_in_schema=False)
