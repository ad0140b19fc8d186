"""Dance style taxonomy: canonical labels for heterogeneous style spellings.

Candidate records store styles as short ids, machine values or display labels
interchangeably. A lookup table keyed by all three (lower-cased) maps any of
them onto the entry's display label. Tables are immutable; a refresh builds a
new table and swaps the reference held by the registry.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Sequence, Tuple

from partnerfinder.domain.partners.models import TaxonomyEntry
from partnerfinder.obs import metrics as obs_metrics

if TYPE_CHECKING:  # pragma: no cover
	from partnerfinder.domain.partners.directory import StyleTaxonomySource

logger = logging.getLogger(__name__)

StyleLookup = Mapping[str, TaxonomyEntry]

BUILTIN_TAXONOMY: Tuple[TaxonomyEntry, ...] = (
	TaxonomyEntry(id="salsa", label="Salsa", value="salsa"),
	TaxonomyEntry(id="bachata", label="Bachata", value="bachata"),
	TaxonomyEntry(id="kizomba", label="Kizomba", value="kizomba"),
	TaxonomyEntry(id="tango", label="Tango", value="tango"),
	TaxonomyEntry(id="vals", label="Vals", value="vals"),
	TaxonomyEntry(id="hip-hop", label="Hip Hop", value="hip-hop"),
	TaxonomyEntry(id="modern-dans", label="Modern Dans", value="modern-dans"),
	TaxonomyEntry(id="bale", label="Bale", value="bale"),
	TaxonomyEntry(id="flamenko", label="Flamenko", value="flamenko"),
	TaxonomyEntry(id="zeybek", label="Zeybek", value="zeybek"),
	TaxonomyEntry(id="jazz", label="Jazz", value="jazz"),
)


def _key(text: str) -> str:
	return text.strip().lower()


def build_lookup(entries: Iterable[TaxonomyEntry]) -> StyleLookup:
	"""Index entries by id, value and label. Later entries win on key collisions."""
	table: dict[str, TaxonomyEntry] = {}
	for entry in entries:
		for spelling in (entry.id, entry.value, entry.label):
			if spelling and spelling.strip():
				table[_key(spelling)] = entry
	return MappingProxyType(table)


def resolve(raw: str, lookup: StyleLookup) -> str:
	"""Return the canonical label for ``raw``, or ``raw`` itself when unknown."""
	if not isinstance(raw, str) or not raw.strip():
		return raw
	entry = lookup.get(_key(raw))
	return entry.label if entry is not None else raw


def resolve_styles(values: Optional[Sequence[str]], lookup: StyleLookup) -> Tuple[str, ...]:
	"""Resolve every value, dropping blanks and repeats while keeping order."""
	if not values:
		return ()
	resolved: List[str] = []
	for value in values:
		if not isinstance(value, str) or not value.strip():
			continue
		resolved.append(resolve(value, lookup))
	return tuple(dict.fromkeys(resolved))


_BUILTIN_LOOKUP = build_lookup(BUILTIN_TAXONOMY)


def builtin_lookup() -> StyleLookup:
	return _BUILTIN_LOOKUP


class TaxonomyRegistry:
	"""Holds the lookup table of one session.

	Readers grab ``registry.lookup`` once per operation; ``refresh`` only ever
	replaces the reference, so a reader never sees a half-built table.
	"""

	def __init__(self, lookup: Optional[StyleLookup] = None, *, source: str = "builtin") -> None:
		self._lookup: StyleLookup = lookup if lookup is not None else _BUILTIN_LOOKUP
		self._source = source
		self._degraded = False

	@property
	def lookup(self) -> StyleLookup:
		return self._lookup

	@property
	def source(self) -> str:
		return self._source

	@property
	def degraded(self) -> bool:
		"""True when the last refresh fell back because the source failed."""
		return self._degraded

	@property
	def entries(self) -> Tuple[TaxonomyEntry, ...]:
		return tuple(dict.fromkeys(self._lookup.values()))

	async def refresh(self, source: "StyleTaxonomySource") -> StyleLookup:
		"""Rebuild from ``source``; an empty or failing source yields the built-in table."""
		failed = False
		try:
			entries = list(await source.fetch_style_taxonomy())
		except Exception:
			logger.warning("style taxonomy fetch failed, using built-in styles", exc_info=True)
			entries, failed = [], True
		if entries:
			lookup, origin = build_lookup(entries), "store"
		else:
			lookup, origin = _BUILTIN_LOOKUP, "builtin"
			if not failed:
				logger.info("style taxonomy empty, using built-in styles")
		self._lookup = lookup
		self._source = origin
		self._degraded = failed
		obs_metrics.inc_taxonomy_refresh(origin)
		return lookup
