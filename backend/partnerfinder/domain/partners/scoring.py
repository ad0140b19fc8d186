"""Relevance scoring between a seeker and one candidate."""

from __future__ import annotations

from typing import Optional

from partnerfinder.domain.partners.models import Candidate, SeekerPreference
from partnerfinder.domain.partners.taxonomy import StyleLookup, resolve_styles
from partnerfinder.domain.partners.text import normalize

STYLE_MATCH_POINTS = 20
LEVEL_EXACT_POINTS = 15
LEVEL_ADJACENT_POINTS = 10
LOCATION_POINTS = 15
AVAILABILITY_SLOT_POINTS = 5


def style_points(candidate: Candidate, preference: SeekerPreference, lookup: StyleLookup) -> int:
	offered = {normalize(style) for style in resolve_styles(candidate.dance_styles, lookup)}
	wanted = resolve_styles(preference.dance_styles, lookup)
	return STYLE_MATCH_POINTS * sum(1 for style in wanted if normalize(style) in offered)


def level_points(candidate: Candidate, preference: SeekerPreference) -> int:
	if preference.level is None or candidate.level is None:
		return 0
	if preference.level == candidate.level:
		return LEVEL_EXACT_POINTS
	if preference.level.is_adjacent(candidate.level):
		return LEVEL_ADJACENT_POINTS
	return 0


def location_points(candidate: Candidate, preference: SeekerPreference) -> int:
	city = normalize(preference.city)
	if city and city in normalize(candidate.location):
		return LOCATION_POINTS
	return 0


def availability_points(candidate: Candidate, preference: SeekerPreference) -> int:
	shared = preference.availability.intersection(candidate.availability)
	return AVAILABILITY_SLOT_POINTS * len(shared)


def score(candidate: Candidate, preference: Optional[SeekerPreference], lookup: StyleLookup) -> int:
	"""Additive, unbounded compatibility score; 0 for anonymous seekers."""
	if preference is None:
		return 0
	return (
		style_points(candidate, preference, lookup)
		+ level_points(candidate, preference)
		+ location_points(candidate, preference)
		+ availability_points(candidate, preference)
	)
