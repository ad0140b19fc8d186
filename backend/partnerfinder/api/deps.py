"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

import random
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from partnerfinder.domain.contacts.cache import ActiveRequestCache, RedisSessionCache
from partnerfinder.domain.contacts.service import ContactRequestWorkflow
from partnerfinder.domain.contacts.store import PostgresContactRequestStore
from partnerfinder.domain.partners.directory import PostgresCandidateDirectory, PostgresStyleTaxonomySource
from partnerfinder.domain.partners.service import PartnerSearchService
from partnerfinder.settings import settings

_partner_service: Optional[PartnerSearchService] = None


async def get_optional_viewer_id(
	x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
) -> Optional[str]:
	"""Caller identity as forwarded by the gateway; anonymous browsing is allowed."""
	value = (x_user_id or "").strip()
	return value or None


async def get_viewer_id(viewer_id: Optional[str] = Depends(get_optional_viewer_id)) -> str:
	if viewer_id is None:
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing_user")
	return viewer_id


def get_partner_search_service() -> PartnerSearchService:
	global _partner_service
	if _partner_service is None:
		rng = random.Random(settings.partner_shuffle_seed) if settings.partner_shuffle_seed is not None else None
		_partner_service = PartnerSearchService(
			PostgresCandidateDirectory(),
			PostgresStyleTaxonomySource(),
			rng=rng,
		)
	return _partner_service


def reset_partner_search_service() -> None:
	global _partner_service
	_partner_service = None


async def get_contact_workflow(
	viewer_id: str = Depends(get_viewer_id),
	x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
) -> ContactRequestWorkflow:
	session_id = (x_session_id or "").strip() or viewer_id
	cache = ActiveRequestCache(
		RedisSessionCache(session_id),
		ttl_seconds=settings.contact_cache_ttl_seconds,
	)
	return ContactRequestWorkflow(PostgresContactRequestStore(), cache)
