"""Guard checks applied before a contact request is written or changed."""

from __future__ import annotations

from typing import Optional

from partnerfinder.domain.contacts.cache import ActiveRequestCache
from partnerfinder.domain.contacts.exceptions import (
	ContactRequestAlreadyPending,
	ContactRequestForbidden,
	ContactRequestNotFound,
	ContactRequestNotPending,
	ContactSelfRequest,
)
from partnerfinder.domain.contacts.models import ContactRequest


def guard_not_self(sender_id: str, receiver_id: str) -> None:
	if str(sender_id) == str(receiver_id):
		raise ContactSelfRequest()


async def ensure_no_cached_pending(cache: ActiveRequestCache, sender_id: str) -> None:
	cached = await cache.get(sender_id)
	if cached is not None and cached.is_pending:
		raise ContactRequestAlreadyPending()


def ensure_can_cancel(request: Optional[ContactRequest], sender_id: Optional[str]) -> ContactRequest:
	if request is None:
		raise ContactRequestNotFound()
	if sender_id is not None and str(request.sender.id) != str(sender_id):
		raise ContactRequestForbidden()
	if not request.is_pending:
		raise ContactRequestNotPending()
	return request
