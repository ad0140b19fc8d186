"""Contact request workflow: send, cancel and look up a sender's pending request."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional
from uuid import uuid4

from partnerfinder.domain.contacts import audit, policy
from partnerfinder.domain.contacts.cache import ActiveRequestCache
from partnerfinder.domain.contacts.exceptions import ContactError, ContactRequestNotPending
from partnerfinder.domain.contacts.models import ContactParty, ContactRequest, ContactRequestStatus
from partnerfinder.domain.contacts.store import ContactRequestStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class ContactRequestWorkflow:
	"""Moves a sender's request through ``NONE -> PENDING -> CANCELLED``.

	Accepted and rejected states are written by the receiver's side and only
	observed here. The cache is a per-session mirror; ``find_active_request``
	re-reads the store and corrects it.
	"""

	def __init__(
		self,
		store: ContactRequestStore,
		cache: ActiveRequestCache,
		*,
		clock: Callable[[], datetime] = _utcnow,
		id_factory: Callable[[], str] = lambda: str(uuid4()),
	) -> None:
		self._store = store
		self._cache = cache
		self._clock = clock
		self._id_factory = id_factory

	async def _after_commit(self, step: str, request_id: str, write: Callable[[], Awaitable[None]]) -> None:
		try:
			await write()
		except Exception:
			logger.warning(
				"contact request side effect failed",
				extra={"step": step, "request_id": request_id},
				exc_info=True,
			)

	async def send(self, sender: ContactParty, receiver: ContactParty) -> ContactRequest:
		try:
			policy.guard_not_self(sender.id, receiver.id)
			await policy.ensure_no_cached_pending(self._cache, sender.id)
			now = self._clock()
			request = ContactRequest(
				id=self._id_factory(),
				sender=sender,
				receiver=receiver,
				status=ContactRequestStatus.PENDING,
				created_at=now,
				updated_at=now,
			)
			request_id = await self._store.create(request)
		except ContactError as exc:
			audit.inc_reject("send", exc.reason)
			raise
		if request_id != request.id:
			request = ContactRequest(
				id=request_id,
				sender=request.sender,
				receiver=request.receiver,
				status=request.status,
				created_at=request.created_at,
				updated_at=request.updated_at,
			)
		# The row is committed; mirror and audit failures must not fail the send.
		await self._after_commit("cache_set", request.id, lambda: self._cache.set(request))
		audit.inc_contact_sent()
		await self._after_commit(
			"audit",
			request.id,
			lambda: audit.log_contact_event(
				"contact.sent",
				{"request_id": request.id, "sender_id": sender.id, "receiver_id": receiver.id},
			),
		)
		logger.info("contact request sent", extra={"request_id": request.id, "receiver_id": receiver.id})
		return request

	async def cancel(self, request_id: str, *, sender_id: Optional[str] = None) -> ContactRequest:
		try:
			current = policy.ensure_can_cancel(await self._store.get(request_id), sender_id)
			updated = await self._store.update_status(
				current.id,
				ContactRequestStatus.CANCELLED,
				expected=ContactRequestStatus.PENDING,
			)
			if updated is None:
				# Accepted, rejected or cancelled elsewhere between the read and the write.
				raise ContactRequestNotPending()
		except ContactError as exc:
			audit.inc_reject("cancel", exc.reason)
			raise
		await self._after_commit("cache_invalidate", updated.id, lambda: self._cache.invalidate(updated.sender.id))
		audit.inc_contact_cancelled()
		await self._after_commit(
			"audit",
			updated.id,
			lambda: audit.log_contact_event(
				"contact.cancelled",
				{"request_id": updated.id, "sender_id": updated.sender.id},
			),
		)
		logger.info("contact request cancelled", extra={"request_id": updated.id})
		return updated

	async def find_active_request(self, sender_id: str) -> Optional[ContactRequest]:
		request = await self._store.find_pending(sender_id)
		if request is None:
			await self._cache.invalidate(sender_id)
			return None
		await self._cache.set(request)
		return request

	async def peek_active_request(self, sender_id: str) -> Optional[ContactRequest]:
		"""Cache-only read; may be stale until the next ``find_active_request``."""
		cached = await self._cache.get(sender_id)
		if cached is not None and cached.is_pending:
			return cached
		return None
