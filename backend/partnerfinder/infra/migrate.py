"""Apply ``infra/migrations/*.sql`` in order, recording versions in ``schema_migrations``.

Run with ``python -m partnerfinder.infra.migrate``.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib
from typing import Iterable, List

import asyncpg

from partnerfinder.infra import postgres

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = pathlib.Path(__file__).resolve().parents[3] / "infra" / "migrations"


def migration_version(path: pathlib.Path) -> str:
	return path.name.split("_", 1)[0]


def pending_migrations(paths: Iterable[pathlib.Path], applied: Iterable[str]) -> List[pathlib.Path]:
	done = set(applied)
	return [path for path in sorted(paths) if migration_version(path) not in done]


async def apply_migrations(conn: asyncpg.Connection, directory: pathlib.Path = MIGRATIONS_DIR) -> List[str]:
	paths = sorted(directory.glob("*.sql"))
	if not paths:
		raise RuntimeError(f"no migration files found in {directory}")
	await conn.execute(
		"""
		CREATE TABLE IF NOT EXISTS schema_migrations (
			version TEXT PRIMARY KEY,
			applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
		)
		"""
	)
	rows = await conn.fetch("SELECT version FROM schema_migrations")
	applied: List[str] = []
	for path in pending_migrations(paths, (row["version"] for row in rows)):
		version = migration_version(path)
		async with conn.transaction():
			await conn.execute(path.read_text(encoding="utf-8"))
			await conn.execute(
				"""
				INSERT INTO schema_migrations (version)
				VALUES ($1)
				ON CONFLICT (version) DO UPDATE SET applied_at = NOW()
				""",
				version,
			)
		logger.info("applied migration", extra={"migration": path.name})
		applied.append(version)
	return applied


async def _main() -> None:
	try:
		async with postgres.connection() as conn:
			await apply_migrations(conn)
	finally:
		await postgres.close_pool()


if __name__ == "__main__":
	logging.basicConfig(level=logging.INFO)
	asyncio.run(_main())
