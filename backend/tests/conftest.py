import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fakeredis.aioredis import FakeRedis

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from partnerfinder.api import deps
from partnerfinder.domain.contacts.exceptions import ContactRequestAlreadyPending
from partnerfinder.domain.contacts.models import ContactRequest, ContactRequestStatus
from partnerfinder.infra import postgres
from partnerfinder.main import app


class InMemoryContactStore:
	"""Contact request store honouring the one-pending-per-sender index."""

	def __init__(self) -> None:
		self.rows: Dict[str, ContactRequest] = {}
		self.create_calls: List[ContactRequest] = []

	async def create(self, request: ContactRequest) -> str:
		self.create_calls.append(request)
		for row in self.rows.values():
			if row.sender.id == request.sender.id and row.is_pending:
				raise ContactRequestAlreadyPending()
		self.rows[request.id] = request
		return request.id

	async def get(self, request_id: str) -> Optional[ContactRequest]:
		return self.rows.get(request_id)

	async def update_status(self, request_id, status, *, expected=None):
		row = self.rows.get(request_id)
		if row is None or (expected is not None and row.status is not expected):
			return None
		updated = ContactRequest(
			id=row.id,
			sender=row.sender,
			receiver=row.receiver,
			status=status,
			created_at=row.created_at,
			updated_at=row.updated_at,
		)
		self.rows[request_id] = updated
		return updated

	async def find_pending(self, sender_id: str) -> Optional[ContactRequest]:
		for row in self.rows.values():
			if row.sender.id == sender_id and row.status is ContactRequestStatus.PENDING:
				return row
		return None


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from partnerfinder.infra.redis import redis_client, set_redis_client
	original = redis_client._client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture(autouse=True)
def reset_dependencies():
	deps.reset_partner_search_service()
	try:
		yield
	finally:
		app.dependency_overrides.clear()
		deps.reset_partner_search_service()


@pytest.fixture
def contact_store():
	return InMemoryContactStore()


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
