"""
Content Locator tests

Lookup order: base slug, preferred-language variant slug, then the other
languages in canonical order.
"""

import pytest

from regional_blog.exceptions import EntityNotFoundError
from regional_blog.services.content_locator import ContentLocator
from utils.mock_utils import make_article
from utils.mocks import InMemoryEntityStore


def _article(id, base_slug, **slugs):
    translations = {"en": {"slug": slugs.pop("en", base_slug), "title": f"Article {id}"}}
    for language, slug in slugs.items():
        translations[language] = {"slug": slug, "title": f"Article {id} ({language})"}
    return make_article(id=id, base_slug=base_slug, translations=translations)


class TestLocate:
    async def test_base_slug(self, registry):
        store = InMemoryEntityStore([_article(1, "summer-guide", fr="guide-ete")])
        entity = await ContentLocator(store, registry).locate("summer-guide", "fr")
        assert entity.id == 1

    async def test_preferred_language_variant(self, registry):
        store = InMemoryEntityStore([_article(1, "summer-guide", fr="guide-ete")])
        entity = await ContentLocator(store, registry).locate("guide-ete", "fr")
        assert entity.id == 1

    async def test_other_language_variant(self, registry):
        store = InMemoryEntityStore([_article(1, "summer-guide", fr="guide-ete", es="guia-verano")])
        entity = await ContentLocator(store, registry).locate("guia-verano", "fr")
        assert entity.id == 1

    async def test_base_slug_beats_variant_slug_collision(self, registry):
        # Entity 2's French slug equals entity 1's base slug.
        owner = _article(1, "le-marche")
        squatter = _article(2, "the-market", fr="le-marche")
        store = InMemoryEntityStore([squatter, owner])

        entity = await ContentLocator(store, registry).locate("le-marche", "fr")

        assert entity.id == 1

    async def test_preferred_language_checked_before_others(self, registry):
        spanish = _article(1, "one", es="shared")
        french = _article(2, "two", fr="shared")
        store = InMemoryEntityStore([spanish, french])

        entity = await ContentLocator(store, registry).locate("shared", "fr")

        assert entity.id == 2
        assert store.calls[:2] == [("base", "shared"), ("variant", "shared", "fr")]

    async def test_slug_matched_exactly(self, registry):
        store = InMemoryEntityStore([_article(1, "summer-guide")])
        assert await ContentLocator(store, registry).locate("Summer-Guide", "en") is None

    async def test_unknown_preferred_language_still_searches_all(self, registry):
        store = InMemoryEntityStore([_article(1, "one", de="eins")])
        assert (await ContentLocator(store, registry).locate("eins", "ja")).id == 1

    async def test_not_found(self, registry):
        locator = ContentLocator(InMemoryEntityStore([]), registry)
        assert await locator.locate("missing", "en") is None
        assert await locator.locate("", "en") is None

    async def test_locate_or_404(self, registry):
        locator = ContentLocator(InMemoryEntityStore([]), registry)
        with pytest.raises(EntityNotFoundError) as exc_info:
            await locator.locate_or_404("missing", "en")
        assert exc_info.value.status_code == 404
        assert exc_info.value.details["slug"] == "missing"


class TestLocateInRegion:
    async def test_edition_visible_in_region_wins(self, registry):
        fr = make_article(id=1, base_slug="sale", regions=["FR"], translations={"en": {"slug": "sale", "title": "Sale"}})
        us = make_article(id=2, base_slug="sale", regions=["US"], translations={"en": {"slug": "sale", "title": "Sale"}})
        locator = ContentLocator(InMemoryEntityStore([fr, us]), registry)

        assert (await locator.locate("sale", "en", "US")).id == 2
        assert (await locator.locate("sale", "en", "FR")).id == 1

    async def test_visible_variant_hit_beats_hidden_base_hit(self, registry):
        hidden = make_article(id=1, base_slug="le-marche", regions=["FR"])
        visible = _article(2, "the-market", fr="le-marche")
        locator = ContentLocator(InMemoryEntityStore([hidden, visible]), registry)

        assert (await locator.locate("le-marche", "fr", "US")).id == 2
        assert (await locator.locate("le-marche", "fr")).id == 1

    async def test_hidden_hit_returned_when_nothing_visible(self, registry):
        fr_only = make_article(id=1, base_slug="fr-only", regions=["FR"])
        locator = ContentLocator(InMemoryEntityStore([fr_only]), registry)

        assert (await locator.locate("fr-only", "en", "US")).id == 1
