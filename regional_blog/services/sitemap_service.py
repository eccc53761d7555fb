"""
Sitemap Service

Region-aware XML sitemaps for the public front end:

    /sitemap.xml             index of the sitemaps below
    /sitemap-main.xml        one home page per active region
    /sitemap-articles.xml    published articles
    /sitemap-categories.xml  categories
    /sitemap-authors.xml     authors

An entity gets one ``<url>`` per active region it is visible in, at
``{region prefix}/{segment}/{slug}`` with the slug of the region's default
language. The default region serves the fallback variant instead. Other
regions without that variant are skipped for global content; a regional
edition is still listed there in the first supported language it has. Every
``<url>`` lists the same ``xhtml:link`` alternates: one per available
translation plus ``x-default``. Region-restricted content only appears
under its own regions.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from xml.etree.ElementTree import Element, SubElement, tostring  # nosec B405

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from regional_blog.exceptions import EntityIntegrityError
from regional_blog.i18n.registry import LocaleRegistry, RegionEntry
from regional_blog.i18n.translatable import get_available_languages, served_language
from regional_blog.i18n.urls import entity_path, region_prefix
from regional_blog.models.article import Article
from regional_blog.models.author import Author
from regional_blog.models.category import Category

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Per-file URL limit of the sitemap protocol
MAX_URLS = 50000


@dataclass(frozen=True)
class SitemapSection:
    model: type
    segment: str
    changefreq: str
    priority: str


SECTIONS = {
    "articles": SitemapSection(Article, "article", "weekly", "0.8"),
    "categories": SitemapSection(Category, "category", "weekly", "0.7"),
    "authors": SitemapSection(Author, "author", "monthly", "0.6"),
}


@dataclass
class SitemapEntry:
    path: str
    alternates: list[tuple[str, str]] = field(default_factory=list)
    lastmod: str | None = None


class SitemapService:
    """Builds sitemap XML from the registry snapshot and the public content."""

    def __init__(self, db: AsyncSession, registry: LocaleRegistry, base_url: str, default_region: str):
        self.db = db
        self.registry = registry
        self.base_url = base_url.rstrip("/")
        self.default_region = default_region.upper()

    # ── Entries ───────────────────────────────────────────────────────────────

    def _alternate_region(self, entity, language: str) -> RegionEntry | None:
        regions = [
            region
            for region in self.registry.find_regions_supporting_language(language)
            if entity.visibility.allows(region.code)
        ]
        for region in regions:
            if region.code == self.default_region and region.default_language == language:
                return region
        return regions[0] if regions else None

    def entity_entries(self, entity, segment: str) -> list[SitemapEntry]:
        """One entry per active region ``entity`` is visible in."""
        available = get_available_languages(entity, self.registry)

        alternates = []
        for language in available:
            region = self._alternate_region(entity, language)
            if region is not None:
                alternates.append((language, entity_path(entity, segment, region.code, language, self.default_region)))

        entries = []
        default_path = None
        lastmod = entity.updated_at.strftime("%Y-%m-%d") if entity.updated_at else None
        for region in self.registry.list_active_regions():
            if not entity.visibility.allows(region.code):
                continue
            if region.code == self.default_region:
                language = served_language(entity, region.default_language)
            elif region.default_language in available:
                language = region.default_language
            elif not entity.visibility.is_global:
                language = next((code for code in region.languages if code in available), None)
                if language is None:
                    continue
            else:
                continue
            path = entity_path(entity, segment, region.code, language, self.default_region)
            if region.code == self.default_region:
                default_path = path
            entries.append(SitemapEntry(path, alternates, lastmod))

        if default_path is not None:
            alternates.append(("x-default", default_path))
        return entries

    def home_entries(self) -> list[SitemapEntry]:
        regions = self.registry.list_active_regions()
        alternates: list[tuple[str, str]] = []
        seen = set()
        for region in regions:
            if region.default_language not in seen:
                seen.add(region.default_language)
                alternates.append((region.default_language, f"{region_prefix(region.code, self.default_region)}/"))
        alternates.append(("x-default", "/"))
        return [SitemapEntry(f"{region_prefix(region.code, self.default_region)}/", alternates) for region in regions]

    # ── XML ───────────────────────────────────────────────────────────────────

    def _urlset(self, entries: list[SitemapEntry], changefreq: str, priority: str) -> str:
        urlset = Element("urlset")
        urlset.set("xmlns", SITEMAP_NS)
        urlset.set("xmlns:xhtml", XHTML_NS)

        for entry in entries[:MAX_URLS]:
            url = SubElement(urlset, "url")
            SubElement(url, "loc").text = f"{self.base_url}{entry.path}"
            if entry.lastmod:
                SubElement(url, "lastmod").text = entry.lastmod
            SubElement(url, "changefreq").text = changefreq
            SubElement(url, "priority").text = priority
            for hreflang, path in entry.alternates:
                link = SubElement(url, "xhtml:link")
                link.set("rel", "alternate")
                link.set("hreflang", hreflang)
                link.set("href", f"{self.base_url}{path}")

        return XML_DECLARATION + tostring(urlset, encoding="unicode")

    def generate_sitemap_index(self) -> str:
        sitemapindex = Element("sitemapindex")
        sitemapindex.set("xmlns", SITEMAP_NS)
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")

        for name in ("main", *SECTIONS):
            sitemap = SubElement(sitemapindex, "sitemap")
            SubElement(sitemap, "loc").text = f"{self.base_url}/sitemap-{name}.xml"
            SubElement(sitemap, "lastmod").text = today

        return XML_DECLARATION + tostring(sitemapindex, encoding="unicode")

    def generate_main_sitemap(self) -> str:
        return self._urlset(self.home_entries(), "daily", "1.0")

    async def generate_section(self, name: str) -> str:
        """Sitemap for one of ``SECTIONS``; entities with a broken default variant are left out."""
        section = SECTIONS[name]
        model = section.model
        result = await self.db.execute(
            select(model).where(*model.public_criteria()).order_by(model.updated_at.desc()).limit(MAX_URLS)
        )

        entries: list[SitemapEntry] = []
        for entity in result.scalars().all():
            try:
                entries.extend(self.entity_entries(entity, section.segment))
            except EntityIntegrityError:
                continue

        logger.info(f"Generated {name} sitemap with {len(entries)} URLs")
        return self._urlset(entries, section.changefreq, section.priority)
