"""Sources for the candidate pool and the dance style taxonomy."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from partnerfinder.domain.partners.models import Candidate, SeekerPreference, TaxonomyEntry
from partnerfinder.infra import postgres
from partnerfinder.settings import settings


class CandidateDirectory(Protocol):
	async def fetch_candidate_pool(self, viewer_id: Optional[str]) -> List[Candidate]:
		"""Matchable users, excluding the viewer."""
		...

	async def fetch_seeker_preference(self, user_id: str) -> Optional[SeekerPreference]:
		...


class StyleTaxonomySource(Protocol):
	async def fetch_style_taxonomy(self) -> List[TaxonomyEntry]:
		...


_CANDIDATE_POOL_SQL = """
SELECT u.id, u.display_name, u.photo_url, u.level, u.dance_styles, u.city,
	u.available_times, u.gender, u.age, u.rating, u.height, u.weight
FROM users u
WHERE u.roles && $1::text[]
  AND u.deleted_at IS NULL
  AND ($2::text IS NULL OR u.id::text <> $2::text)
ORDER BY u.created_at DESC
LIMIT $3
"""

_SEEKER_SQL = """
SELECT u.dance_styles, u.level, u.city, u.available_times, u.height, u.weight
FROM users u
WHERE u.id::text = $1 AND u.deleted_at IS NULL
"""


class PostgresCandidateDirectory:
	"""Reads partner candidates from the shared ``users`` table."""

	def __init__(
		self,
		*,
		roles: Sequence[str] = settings.candidate_roles,
		limit: int = settings.candidate_pool_limit,
	) -> None:
		self._roles = list(roles)
		self._limit = limit

	async def fetch_candidate_pool(self, viewer_id: Optional[str]) -> List[Candidate]:
		async with postgres.connection() as conn:
			rows = await conn.fetch(_CANDIDATE_POOL_SQL, self._roles, viewer_id, self._limit)
		return [Candidate.from_record(dict(row)) for row in rows]

	async def fetch_seeker_preference(self, user_id: str) -> Optional[SeekerPreference]:
		async with postgres.connection() as conn:
			row = await conn.fetchrow(_SEEKER_SQL, user_id)
		return SeekerPreference.from_record(dict(row)) if row else None


class PostgresStyleTaxonomySource:
	async def fetch_style_taxonomy(self) -> List[TaxonomyEntry]:
		async with postgres.connection() as conn:
			rows = await conn.fetch("SELECT id, label, value FROM dance_styles ORDER BY label")
		return [TaxonomyEntry.from_record(dict(row)) for row in rows]
