"""Persistence boundary for contact requests."""

from __future__ import annotations

from typing import Optional, Protocol

import asyncpg

from partnerfinder.domain.contacts.exceptions import ContactRequestAlreadyPending
from partnerfinder.domain.contacts.models import ContactRequest, ContactRequestStatus
from partnerfinder.infra import postgres


class ContactRequestStore(Protocol):
	async def create(self, request: ContactRequest) -> str:
		"""Persist ``request`` and return its identifier."""
		...

	async def get(self, request_id: str) -> Optional[ContactRequest]:
		...

	async def update_status(
		self,
		request_id: str,
		status: ContactRequestStatus,
		*,
		expected: Optional[ContactRequestStatus] = None,
	) -> Optional[ContactRequest]:
		"""Set ``status``; returns None when the row is missing or not in ``expected``."""
		...

	async def find_pending(self, sender_id: str) -> Optional[ContactRequest]:
		...


_INSERT_SQL = """
INSERT INTO contact_requests (
	id, sender_id, sender_name, sender_photo_url,
	receiver_id, receiver_name, receiver_photo_url,
	status, created_at, updated_at
)
VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
RETURNING id
"""

_UPDATE_SQL = """
UPDATE contact_requests
SET status = $2, updated_at = NOW()
WHERE id = $1
  AND ($3::text IS NULL OR status = $3::text)
RETURNING *
"""

_FIND_PENDING_SQL = """
SELECT *
FROM contact_requests
WHERE sender_id = $1 AND status = 'pending'
ORDER BY created_at DESC
LIMIT 1
"""


class PostgresContactRequestStore:
	"""Stores requests in ``contact_requests``.

	The partial unique index ``contact_requests_one_pending_per_sender`` makes
	the one-pending-request rule hold across sessions and processes.
	"""

	async def create(self, request: ContactRequest) -> str:
		async with postgres.connection() as conn:
			try:
				row = await conn.fetchrow(
					_INSERT_SQL,
					request.id,
					request.sender.id,
					request.sender.display_name,
					request.sender.photo_url,
					request.receiver.id,
					request.receiver.display_name,
					request.receiver.photo_url,
					request.status.value,
					request.created_at,
					request.updated_at,
				)
			except asyncpg.UniqueViolationError as exc:
				raise ContactRequestAlreadyPending() from exc
		return str(row["id"])

	async def get(self, request_id: str) -> Optional[ContactRequest]:
		async with postgres.connection() as conn:
			row = await conn.fetchrow("SELECT * FROM contact_requests WHERE id = $1", request_id)
		return ContactRequest.from_record(dict(row)) if row else None

	async def update_status(
		self,
		request_id: str,
		status: ContactRequestStatus,
		*,
		expected: Optional[ContactRequestStatus] = None,
	) -> Optional[ContactRequest]:
		async with postgres.connection() as conn:
			row = await conn.fetchrow(
				_UPDATE_SQL,
				request_id,
				status.value,
				expected.value if expected is not None else None,
			)
		return ContactRequest.from_record(dict(row)) if row else None

	async def find_pending(self, sender_id: str) -> Optional[ContactRequest]:
		async with postgres.connection() as conn:
			row = await conn.fetchrow(_FIND_PENDING_SQL, sender_id)
		return ContactRequest.from_record(dict(row)) if row else None
