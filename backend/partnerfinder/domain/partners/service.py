"""Partner search orchestration over the external directory."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from partnerfinder.domain.partners.directory import CandidateDirectory, StyleTaxonomySource
from partnerfinder.domain.partners.exceptions import CandidatePoolUnavailable, SeekerPreferenceUnavailable
from partnerfinder.domain.partners.filters import apply_selection
from partnerfinder.domain.partners.models import AVAILABILITY_SLOTS, GENDERS, Candidate, DanceLevel, SeekerPreference
from partnerfinder.domain.partners.ranking import rank, resolve_candidates
from partnerfinder.domain.partners.schemas import (
	FilterField,
	LevelOption,
	PartnerFilters,
	PartnerSearchOptions,
	PartnerSearchResponse,
)
from partnerfinder.domain.partners.taxonomy import StyleLookup, TaxonomyRegistry
from partnerfinder.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class PartnerSearchService:
	def __init__(
		self,
		directory: CandidateDirectory,
		taxonomy_source: StyleTaxonomySource,
		*,
		registry: Optional[TaxonomyRegistry] = None,
		rng: Optional[random.Random] = None,
	) -> None:
		self._directory = directory
		self._taxonomy_source = taxonomy_source
		self._registry = registry or TaxonomyRegistry()
		self._taxonomy_loaded = registry is not None
		self._rng = rng or random.Random()

	@property
	def registry(self) -> TaxonomyRegistry:
		return self._registry

	async def refresh_taxonomy(self) -> StyleLookup:
		lookup = await self._registry.refresh(self._taxonomy_source)
		# A failed fetch is retried on the next use; an empty store is final.
		self._taxonomy_loaded = not self._registry.degraded
		return lookup

	async def _ensure_taxonomy(self) -> StyleLookup:
		if not self._taxonomy_loaded:
			return await self.refresh_taxonomy()
		return self._registry.lookup

	async def load_pool(self, viewer_id: Optional[str]) -> List[Candidate]:
		return await self._load_pool(viewer_id, await self._ensure_taxonomy())

	async def _load_pool(self, viewer_id: Optional[str], lookup: StyleLookup) -> List[Candidate]:
		try:
			raw = await self._directory.fetch_candidate_pool(viewer_id)
		except Exception as exc:
			obs_metrics.inc_candidate_pool_failure()
			logger.warning("candidate pool fetch failed", extra={"viewer": viewer_id}, exc_info=True)
			raise CandidatePoolUnavailable() from exc
		return resolve_candidates(raw, lookup)

	async def seeker_preference(self, viewer_id: Optional[str]) -> Optional[SeekerPreference]:
		if not viewer_id:
			return None
		try:
			return await self._directory.fetch_seeker_preference(viewer_id)
		except Exception as exc:
			logger.warning("seeker preference fetch failed", extra={"viewer": viewer_id}, exc_info=True)
			raise SeekerPreferenceUnavailable() from exc

	async def options(self) -> PartnerSearchOptions:
		lookup = await self._ensure_taxonomy()
		return PartnerSearchOptions(
			dance_styles=[entry.label for entry in dict.fromkeys(lookup.values())],
			levels=[LevelOption(value=level, label=level.label) for level in DanceLevel],
			genders=list(GENDERS),
			availability=list(AVAILABILITY_SLOTS),
		)

	async def search(
		self,
		viewer_id: Optional[str],
		filters: PartnerFilters,
		preference: Optional[SeekerPreference],
	) -> PartnerSearchResponse:
		lookup = await self._ensure_taxonomy()
		pool = await self._load_pool(viewer_id, lookup)
		items = rank(pool, filters, preference, lookup=lookup, rng=self._rng)
		obs_metrics.inc_partner_search("ranked" if preference is not None else "shuffled", len(items))
		return PartnerSearchResponse(
			items=items,
			total=len(items),
			ranked=preference is not None,
			filters=filters,
		)


class RankingSession:
	"""Per-seeker search state across rapid filter changes.

	Every search takes a sequence token. A search that completes after a newer
	one has already been applied is dropped and yields ``None``, so the visible
	result never regresses to an older filter state.
	"""

	def __init__(
		self,
		service: PartnerSearchService,
		viewer_id: Optional[str],
		preference: Optional[SeekerPreference] = None,
	) -> None:
		self._service = service
		self._viewer_id = viewer_id
		self._preference = preference
		self._issued = 0
		self._applied = 0
		self.filters = PartnerFilters()
		self.result: Optional[PartnerSearchResponse] = None

	def _is_stale(self, token: int) -> bool:
		return token < self._applied

	async def search(self, filters: Optional[PartnerFilters] = None) -> Optional[PartnerSearchResponse]:
		if filters is not None:
			self.filters = filters
		self._issued += 1
		token = self._issued
		try:
			response = await self._service.search(self._viewer_id, self.filters, self._preference)
		except CandidatePoolUnavailable:
			if self._is_stale(token):
				obs_metrics.inc_stale_result()
				return None
			raise
		if self._is_stale(token):
			obs_metrics.inc_stale_result()
			logger.debug("discarding stale partner search", extra={"token": token, "applied": self._applied})
			return None
		self._applied = token
		self.result = response
		return response

	async def select(
		self,
		field: FilterField,
		value: Optional[str],
		*,
		reselecting_same_value_clears: bool = True,
	) -> Optional[PartnerSearchResponse]:
		filters = apply_selection(
			self.filters,
			field,
			value,
			reselecting_same_value_clears=reselecting_same_value_clears,
		)
		return await self.search(filters)
