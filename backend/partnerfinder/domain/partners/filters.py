"""Filter state transitions and candidate predicates."""

from __future__ import annotations

from typing import Callable, List, Optional

from partnerfinder.domain.partners import location as location_matcher
from partnerfinder.domain.partners.models import Candidate, DanceLevel
from partnerfinder.domain.partners.schemas import FilterField, PartnerFilters
from partnerfinder.domain.partners.taxonomy import StyleLookup, resolve
from partnerfinder.domain.partners.text import normalize

CandidatePredicate = Callable[[Candidate], bool]


def apply_selection(
	filters: PartnerFilters,
	field: FilterField,
	value: Optional[str],
	*,
	reselecting_same_value_clears: bool = True,
) -> PartnerFilters:
	"""Return the filter state after the seeker picks ``value`` for ``field``.

	Picking the value that is already active clears the criterion when
	``reselecting_same_value_clears`` is set. For availability the value is a
	single slot that is toggled in or out of the selected set.
	"""
	selected = (value or "").strip()
	if field == "availability":
		slots = list(filters.availability)
		if not selected:
			return filters.model_copy(update={"availability": ()})
		if selected in slots:
			if reselecting_same_value_clears:
				slots.remove(selected)
		else:
			slots.append(selected)
		return filters.model_copy(update={"availability": tuple(slots)})

	current = getattr(filters, field)
	if reselecting_same_value_clears and selected and selected == current:
		selected = ""
	return filters.model_copy(update={field: selected})


def build_predicates(filters: PartnerFilters, lookup: StyleLookup) -> List[CandidatePredicate]:
	"""One predicate per supplied criterion; blank criteria contribute none."""
	predicates: List[CandidatePredicate] = []

	if filters.dance_style.strip():
		wanted = normalize(resolve(filters.dance_style, lookup))
		predicates.append(
			lambda c: any(normalize(resolve(style, lookup)) == wanted for style in c.dance_styles)
		)

	if filters.gender.strip():
		gender = filters.gender.strip()
		predicates.append(lambda c: c.gender == gender)

	if filters.level.strip():
		level = DanceLevel.parse(filters.level)
		if level is not None:
			predicates.append(lambda c: c.level == level)

	if filters.location.strip():
		query = filters.location
		predicates.append(lambda c: location_matcher.matches(c.location, query))

	slots = {slot for slot in filters.availability if slot and slot.strip()}
	if slots:
		predicates.append(lambda c: not slots.isdisjoint(c.availability))

	return predicates
