from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from regional_blog.i18n.translatable import get_translation, served_language
from regional_blog.models.ad import AdPlacement, AdStatus, AdType
from regional_blog.schemas.content import TranslatableCreate


class AdCreate(TranslatableCreate):
    name: str
    type: AdType = AdType.banner
    status: AdStatus = AdStatus.draft
    placement: AdPlacement
    position: int = 0
    priority: int = 0
    click_url: str
    image_url: str | None = None
    target_regions: list[str] = []
    target_languages: list[str] = []
    target_categories: list[int] = []
    start_date: datetime | None = None
    end_date: datetime | None = None
    max_impressions: int | None = None
    max_clicks: int | None = None
    is_active: bool = True

    def attributes(self) -> dict[str, Any]:
        attributes = super().attributes()
        attributes["type"] = self.type.value
        attributes["status"] = self.status.value
        attributes["placement"] = self.placement.value
        attributes["target_regions"] = [code.upper() for code in self.target_regions]
        attributes["target_languages"] = [code.lower() for code in self.target_languages]
        return attributes


class AdResponse(BaseModel):
    id: int
    name: str
    type: str
    placement: str
    position: int
    priority: int
    language: str
    title: str | None
    description: str | None
    cta_text: str | None
    image_url: str | None
    html_content: str | None
    click_url: str

    @classmethod
    def from_entity(cls, ad: Any, language: str) -> AdResponse:
        variant = get_translation(ad, language)
        return cls(
            id=ad.id,
            name=ad.name,
            type=ad.type,
            placement=ad.placement,
            position=ad.position or 0,
            priority=ad.priority or 0,
            language=served_language(ad, language),
            title=variant.title,
            description=variant.description,
            cta_text=variant.cta_text,
            image_url=variant.image_url or ad.image_url,
            html_content=variant.html_content,
            click_url=ad.click_url,
        )


class AdList(BaseModel):
    placement: str
    region: str
    language: str
    count: int
    data: list[AdResponse]
