"""Session-scoped cache mirroring a sender's active contact request.

The cache only saves a round trip on renders. The store stays the source of
truth: ``ContactRequestWorkflow.find_active_request`` overwrites or clears
the cached entry with whatever the store returns.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Protocol

from partnerfinder.domain.contacts.models import ACTIVE_REQUEST_TTL_SECONDS, ContactRequest
from partnerfinder.infra.redis import redis_client
from partnerfinder.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


class SessionCache(Protocol):
	async def get(self, key: str) -> Optional[Any]:
		...

	async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
		...

	async def invalidate(self, key: str) -> None:
		...


class RedisSessionCache:
	"""JSON values in redis under a per-session key prefix."""

	def __init__(self, session_id: str, *, client=redis_client) -> None:
		self._prefix = f"session:{session_id}"
		self._client = client

	def _key(self, key: str) -> str:
		return f"{self._prefix}:{key}"

	async def get(self, key: str) -> Optional[Any]:
		return await self._client.get_json(self._key(key))

	async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
		await self._client.set_json(self._key(key), value, ttl_seconds=ttl_seconds)

	async def invalidate(self, key: str) -> None:
		await self._client.delete(self._key(key))


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class ActiveRequestCache:
	"""Typed view over a :class:`SessionCache` for the sender's pending request.

	Entries carry their own expiry so backends without native TTLs still honour
	the validity window.
	"""

	def __init__(
		self,
		cache: SessionCache,
		*,
		ttl_seconds: int = ACTIVE_REQUEST_TTL_SECONDS,
		clock: Callable[[], datetime] = _utcnow,
	) -> None:
		self._cache = cache
		self._ttl_seconds = ttl_seconds
		self._clock = clock

	@staticmethod
	def key(sender_id: str) -> str:
		return f"contact:active:{sender_id}"

	async def get(self, sender_id: str) -> Optional[ContactRequest]:
		entry = await self._cache.get(self.key(sender_id))
		if not entry:
			obs_metrics.inc_contact_cache("miss")
			return None
		try:
			expires_at = datetime.fromisoformat(entry["expires_at"])
			request = ContactRequest.from_record(entry["request"])
		except (KeyError, TypeError, ValueError):
			logger.warning("dropping malformed contact cache entry", extra={"sender": sender_id})
			await self._cache.invalidate(self.key(sender_id))
			obs_metrics.inc_contact_cache("miss")
			return None
		if expires_at <= self._clock():
			await self._cache.invalidate(self.key(sender_id))
			obs_metrics.inc_contact_cache("expired")
			return None
		obs_metrics.inc_contact_cache("hit")
		return request

	async def set(self, request: ContactRequest) -> None:
		expires_at = self._clock() + timedelta(seconds=self._ttl_seconds)
		entry = {"request": request.to_record(), "expires_at": expires_at.isoformat()}
		await self._cache.set(self.key(request.sender.id), entry, self._ttl_seconds)

	async def invalidate(self, sender_id: str) -> None:
		await self._cache.invalidate(self.key(sender_id))
