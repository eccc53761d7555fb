from __future__ import annotations

from pydantic import BaseModel, Field

from regional_blog.i18n.registry import RegionEntry


class LanguageInfo(BaseModel):
    code: str
    name: str
    is_rtl: bool


class RegionResponse(BaseModel):
    code: str
    name: str
    languages: list[str]
    default_language: str
    currency: str | None

    @classmethod
    def from_entry(cls, region: RegionEntry) -> RegionResponse:
        return cls(
            code=region.code,
            name=region.name,
            languages=list(region.languages),
            default_language=region.default_language,
            currency=region.currency,
        )


class RegionPreference(BaseModel):
    region_code: str = Field(min_length=2, max_length=2)


class ResolvedContextResponse(BaseModel):
    region: str
    language: str
    source: str
