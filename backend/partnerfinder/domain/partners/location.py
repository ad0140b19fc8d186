"""Free-text location matching between a candidate and a seeker query."""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from partnerfinder.domain.partners.text import normalize

# canonical (normalized) city -> normalized spellings/abbreviations users type
CITY_ALIASES: Mapping[str, Tuple[str, ...]] = {
	"istanbul": ("ist", "istanbul", "stanbul"),
	"ankara": ("ank", "ankara"),
	"izmir": ("izm", "izmir"),
	"antalya": ("ant", "antalya"),
	"bursa": ("bur", "brs", "bursa"),
}

_ALIAS_TO_CITY = {alias: city for city, aliases in CITY_ALIASES.items() for alias in aliases}


def known_city(query: Optional[str]) -> Optional[str]:
	"""Return the canonical city a query abbreviates, if any."""
	return _ALIAS_TO_CITY.get(normalize(query))


def matches(candidate_location: Optional[str], query: Optional[str]) -> bool:
	"""Decide whether ``candidate_location`` satisfies the location ``query``.

	Anchored checks run before the substring fallback: a recognised city alias
	must match its full city name, then any word of the location may equal or
	start with the query. The relation is not transitive.
	"""
	location = normalize(candidate_location)
	needle = normalize(query)
	if not location or not needle:
		return False

	city = _ALIAS_TO_CITY.get(needle)
	if city is not None and city in location:
		return True

	for token in location.split(" "):
		if token == needle or token.startswith(needle):
			return True

	return needle in location
