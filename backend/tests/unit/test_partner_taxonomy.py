import logging

import pytest

from partnerfinder.domain.partners.models import TaxonomyEntry
from partnerfinder.domain.partners.taxonomy import (
    BUILTIN_TAXONOMY,
    TaxonomyRegistry,
    build_lookup,
    builtin_lookup,
    resolve,
    resolve_styles,
)


class _StaticSource:
    def __init__(self, entries):
        self.entries = entries
        self.calls = 0

    async def fetch_style_taxonomy(self):
        self.calls += 1
        return list(self.entries)


class _BrokenSource:
    async def fetch_style_taxonomy(self):
        raise ConnectionError("directory offline")


def test_builtin_table_has_eleven_styles():
    assert len(BUILTIN_TAXONOMY) == 11
    assert resolve("hip-hop", builtin_lookup()) == "Hip Hop"
    assert resolve("MODERN DANS", builtin_lookup()) == "Modern Dans"


def test_build_lookup_indexes_id_value_and_label():
    lookup = build_lookup([TaxonomyEntry(id="st-1", label="West Coast Swing", value="wcs")])
    assert resolve("st-1", lookup) == "West Coast Swing"
    assert resolve("WCS", lookup) == "West Coast Swing"
    assert resolve("west coast swing", lookup) == "West Coast Swing"


def test_build_lookup_is_read_only():
    lookup = build_lookup(BUILTIN_TAXONOMY)
    with pytest.raises(TypeError):
        lookup["salsa"] = TaxonomyEntry(id="x", label="X")  # type: ignore[index]


def test_taxonomy_entry_value_defaults_to_label():
    entry = TaxonomyEntry.from_record({"id": "7", "label": "Lindy Hop", "value": None})
    assert entry.value == "Lindy Hop"


def test_resolve_unknown_returns_raw_value():
    assert resolve("Capoeira", builtin_lookup()) == "Capoeira"


@pytest.mark.parametrize("raw", ["salsa", "SALSA", "Salsa", "bachata", "hip-hop", "Capoeira", "  "])
def test_resolve_is_idempotent(raw):
    lookup = builtin_lookup()
    once = resolve(raw, lookup)
    assert resolve(once, lookup) == once


def test_resolve_styles_drops_blanks_and_repeats():
    assert resolve_styles(["salsa", "", "Salsa", "tango", None], builtin_lookup()) == ("Salsa", "Tango")


@pytest.mark.asyncio
async def test_empty_taxonomy_falls_back_to_builtin():
    registry = TaxonomyRegistry()
    lookup = await registry.refresh(_StaticSource([]))
    assert resolve("salsa", lookup) == "Salsa"
    assert registry.source == "builtin"


@pytest.mark.asyncio
async def test_failing_taxonomy_source_falls_back_to_builtin():
    registry = TaxonomyRegistry()
    lookup = await registry.refresh(_BrokenSource())
    assert resolve("salsa", lookup) == "Salsa"
    assert registry.source == "builtin"


@pytest.mark.asyncio
async def test_refresh_swaps_lookup_without_touching_previous_table():
    registry = TaxonomyRegistry()
    before = registry.lookup
    lookup = await registry.refresh(_StaticSource([TaxonomyEntry(id="1", label="Salsa Cubana", value="salsa")]))
    assert registry.lookup is lookup
    assert registry.source == "store"
    assert resolve("salsa", lookup) == "Salsa Cubana"
    assert resolve("salsa", before) == "Salsa"
    assert [entry.label for entry in registry.entries] == ["Salsa Cubana"]


@pytest.mark.asyncio
async def test_degraded_tracks_last_refresh_outcome():
    registry = TaxonomyRegistry()
    await registry.refresh(_BrokenSource())
    assert registry.degraded is True
    await registry.refresh(_StaticSource([]))
    assert registry.degraded is False
    await registry.refresh(_StaticSource([TaxonomyEntry(id="1", label="Salsa", value="salsa")]))
    assert registry.degraded is False


@pytest.mark.asyncio
async def test_failed_fetch_is_not_logged_as_empty(caplog):
    caplog.set_level(logging.INFO, logger="partnerfinder.domain.partners.taxonomy")
    await TaxonomyRegistry().refresh(_BrokenSource())
    messages = [record.getMessage() for record in caplog.records]
    assert any("fetch failed" in message for message in messages)
    assert not any("empty" in message for message in messages)


@pytest.mark.asyncio
async def test_empty_store_is_logged_once(caplog):
    caplog.set_level(logging.INFO, logger="partnerfinder.domain.partners.taxonomy")
    await TaxonomyRegistry().refresh(_StaticSource([]))
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["style taxonomy empty, using built-in styles"]
