"""AsyncPG pool management for the directory and contact request stores."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from partnerfinder.settings import settings

_pool: Optional[asyncpg.pool.Pool] = None


def _dsn() -> str:
	# 127.0.0.1 avoids IPv6 resolution of localhost
	return settings.postgres_url.replace("localhost", "127.0.0.1")


async def init_pool() -> asyncpg.pool.Pool:
	global _pool
	if _pool is None:
		_pool = await asyncpg.create_pool(
			dsn=_dsn(),
			min_size=settings.postgres_min_pool_size,
			max_size=settings.postgres_max_pool_size,
		)
	return _pool


async def get_pool() -> asyncpg.pool.Pool:
	if _pool is None:
		await init_pool()
	assert _pool is not None
	return _pool


@asynccontextmanager
async def connection() -> AsyncIterator[asyncpg.Connection]:
	"""Acquire a pooled connection, resolving the pool lazily."""
	pool = await get_pool()
	async with pool.acquire() as conn:
		yield conn


async def close_pool() -> None:
	global _pool
	if _pool is not None:
		await _pool.close()
		_pool = None
