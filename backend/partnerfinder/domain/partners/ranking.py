"""Candidate filtering and ordering."""

from __future__ import annotations

import dataclasses
import random
from typing import Iterable, List, Optional, Sequence

from partnerfinder.domain.partners import scoring
from partnerfinder.domain.partners.filters import build_predicates
from partnerfinder.domain.partners.models import Candidate, SeekerPreference
from partnerfinder.domain.partners.schemas import PartnerFilters, RankedCandidate
from partnerfinder.domain.partners.taxonomy import StyleLookup, resolve_styles


def resolve_candidates(pool: Iterable[Candidate], lookup: StyleLookup) -> List[Candidate]:
	"""Replace raw style spellings with canonical labels, once per pool load."""
	return [
		dataclasses.replace(candidate, dance_styles=resolve_styles(candidate.dance_styles, lookup))
		for candidate in pool
	]


def rank(
	pool: Sequence[Candidate],
	filters: PartnerFilters,
	preference: Optional[SeekerPreference],
	*,
	lookup: StyleLookup,
	rng: Optional[random.Random] = None,
) -> List[RankedCandidate]:
	"""Filter ``pool`` and order it for the seeker.

	With a preference, survivors are sorted by relevance (stable on pool order).
	Anonymous seekers get a shuffled list so no profile is always on top.
	"""
	predicates = build_predicates(filters, lookup)
	survivors = [c for c in pool if all(predicate(c) for predicate in predicates)]

	if preference is None:
		shuffled = list(survivors)
		(rng or random.Random()).shuffle(shuffled)
		return [RankedCandidate.from_candidate(c, 0) for c in shuffled]

	scored = [RankedCandidate.from_candidate(c, scoring.score(c, preference, lookup)) for c in survivors]
	scored.sort(key=lambda item: item.relevance_score, reverse=True)
	return scored
