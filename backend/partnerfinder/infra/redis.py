"""Redis connection management.

`redis_client` is a stable proxy: modules import it once and the underlying
client can be swapped at runtime (fakeredis in tests) without breaking those
references.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import redis.asyncio as redis

from partnerfinder.settings import settings


class RedisProxy:
	"""Forward attribute access to an underlying Redis client."""

	def __init__(self, client: redis.Redis):
		self._client: redis.Redis = client

	def set_client(self, client: redis.Redis) -> None:
		self._client = client

	async def get_json(self, name: str) -> Optional[Any]:
		raw = await self._client.get(name)
		if raw is None:
			return None
		if isinstance(raw, bytes):
			raw = raw.decode("utf-8")
		try:
			return json.loads(raw)
		except ValueError:
			# Corrupt entries are treated as a miss and dropped.
			await self._client.delete(name)
			return None

	async def set_json(self, name: str, value: Any, *, ttl_seconds: int) -> None:
		payload = json.dumps(value, separators=(",", ":"), default=str)
		await self._client.set(name, payload, ex=max(1, int(ttl_seconds)))

	def __getattr__(self, item):
		return getattr(self._client, item)


_real_client = redis.from_url(settings.redis_url, decode_responses=True)
redis_client: RedisProxy = RedisProxy(_real_client)


def set_redis_client(client: redis.Redis) -> None:
	redis_client.set_client(client)
