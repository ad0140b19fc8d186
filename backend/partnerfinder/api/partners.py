"""Partner discovery endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from partnerfinder.api.deps import get_optional_viewer_id, get_partner_search_service
from partnerfinder.domain.partners.exceptions import (
	CandidatePoolUnavailable,
	PartnerSearchError,
	SeekerPreferenceUnavailable,
)
from partnerfinder.domain.partners.schemas import PartnerFilters, PartnerSearchOptions, PartnerSearchResponse
from partnerfinder.domain.partners.service import PartnerSearchService

router = APIRouter()


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, (CandidatePoolUnavailable, SeekerPreferenceUnavailable)):
		return HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.reason)
	if isinstance(exc, PartnerSearchError):
		return HTTPException(status.HTTP_400_BAD_REQUEST, detail=exc.reason)
	return HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/partners/search", response_model=PartnerSearchResponse)
async def search_partners(
	dance_style: str = Query(default=""),
	gender: str = Query(default=""),
	level: str = Query(default=""),
	location: str = Query(default=""),
	availability: Optional[List[str]] = Query(default=None),
	ranked: bool = Query(default=True, description="Score against the caller's saved preference"),
	viewer_id: Optional[str] = Depends(get_optional_viewer_id),
	service: PartnerSearchService = Depends(get_partner_search_service),
) -> PartnerSearchResponse:
	filters = PartnerFilters(
		dance_style=dance_style.strip(),
		gender=gender.strip(),
		level=level.strip(),
		location=location.strip(),
		availability=tuple(slot for slot in (availability or []) if slot.strip()),
	)
	try:
		preference = await service.seeker_preference(viewer_id) if ranked else None
		return await service.search(viewer_id, filters, preference)
	except PartnerSearchError as exc:
		raise _map_error(exc) from None


@router.get("/partners/options", response_model=PartnerSearchOptions)
async def partner_search_options(
	service: PartnerSearchService = Depends(get_partner_search_service),
) -> PartnerSearchOptions:
	return await service.options()
