"""
Region & language routes

    GET   /api/regions                      → active regions, by name
    GET   /api/regions/languages            → registry languages, canonical order
    GET   /api/regions/context              → region/language resolved for this request
    GET   /api/regions/language/{language}  → regions offering a language
    GET   /api/regions/{code}               → one region
    POST  /api/regions/set                  → persist a region preference cookie
"""

import logging

from fastapi import Depends
from fastapi.responses import JSONResponse

from regional_blog.api import create_api_router
from regional_blog.api.deps import get_locale_context, get_registry
from regional_blog.exceptions import RegionNotFoundError
from regional_blog.i18n.locale import is_rtl_locale
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.i18n.resolver import ResolvedContext
from regional_blog.schemas.region import LanguageInfo, RegionPreference, RegionResponse, ResolvedContextResponse
from regional_blog.services.region_service import write_region_cookie

router = create_api_router(prefix="/regions", tags=["Regions"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[RegionResponse])
async def list_regions(registry: LocaleRegistry = Depends(get_registry)):
    regions = sorted(registry.list_active_regions(), key=lambda region: region.name)
    return [RegionResponse.from_entry(region) for region in regions]


@router.get("/languages", response_model=list[LanguageInfo])
async def list_languages(registry: LocaleRegistry = Depends(get_registry)):
    return [
        LanguageInfo(code=code, name=registry.language_name(code), is_rtl=is_rtl_locale(code))
        for code in registry.language_codes
    ]


@router.get("/context", response_model=ResolvedContextResponse)
async def current_context(context: ResolvedContext = Depends(get_locale_context)):
    return ResolvedContextResponse(region=context.region, language=context.language, source=context.source)


@router.get("/language/{language}", response_model=list[RegionResponse])
async def regions_for_language(language: str, registry: LocaleRegistry = Depends(get_registry)):
    return [RegionResponse.from_entry(region) for region in registry.find_regions_supporting_language(language)]


@router.get("/{code}", response_model=RegionResponse)
async def get_region(code: str, registry: LocaleRegistry = Depends(get_registry)):
    region = registry.find_region(code)
    if region is None:
        raise RegionNotFoundError(code)
    return RegionResponse.from_entry(region)


@router.post("/set", response_model=RegionResponse)
async def set_region(preference: RegionPreference, registry: LocaleRegistry = Depends(get_registry)):
    region = registry.find_region(preference.region_code)
    if region is None:
        raise RegionNotFoundError(preference.region_code)

    response = JSONResponse(content=RegionResponse.from_entry(region).model_dump())
    write_region_cookie(response, region.code)
    logger.info("Region preference set to %s", region.code)
    return response
