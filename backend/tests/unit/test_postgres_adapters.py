import unittest.mock
from datetime import datetime, timezone

import asyncpg
import pytest

from partnerfinder.domain.contacts.exceptions import ContactRequestAlreadyPending
from partnerfinder.domain.contacts.models import ContactParty, ContactRequest, ContactRequestStatus
from partnerfinder.domain.contacts.store import PostgresContactRequestStore
from partnerfinder.domain.partners.directory import PostgresCandidateDirectory, PostgresStyleTaxonomySource
from partnerfinder.domain.partners.models import DanceLevel
from partnerfinder.infra import postgres

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_conn(monkeypatch):
    conn = unittest.mock.AsyncMock()
    pool = unittest.mock.MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn

    async def _mock_get_pool():
        return pool

    monkeypatch.setattr(postgres, "get_pool", _mock_get_pool)
    return conn


def _row(**overrides):
    row = {
        "id": "req-1",
        "sender_id": "u1",
        "sender_name": "Ayşe",
        "sender_photo_url": None,
        "receiver_id": "u2",
        "receiver_name": "Mehmet",
        "receiver_photo_url": "/img/u2.jpg",
        "status": "pending",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def _request():
    return ContactRequest.from_record(_row())


@pytest.mark.asyncio
async def test_create_returns_identifier(mock_conn):
    mock_conn.fetchrow.return_value = {"id": "req-1"}
    store = PostgresContactRequestStore()
    assert await store.create(_request()) == "req-1"
    args = mock_conn.fetchrow.await_args.args
    assert "INSERT INTO contact_requests" in args[0]
    assert args[1:4] == ("req-1", "u1", "Ayşe")
    assert args[8] == "pending"


@pytest.mark.asyncio
async def test_create_translates_unique_violation(mock_conn):
    mock_conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key value")
    with pytest.raises(ContactRequestAlreadyPending):
        await PostgresContactRequestStore().create(_request())


@pytest.mark.asyncio
async def test_get_maps_row(mock_conn):
    mock_conn.fetchrow.return_value = _row()
    request = await PostgresContactRequestStore().get("req-1")
    assert request.sender == ContactParty(id="u1", display_name="Ayşe")
    assert request.receiver.photo_url == "/img/u2.jpg"
    assert request.is_pending


@pytest.mark.asyncio
async def test_get_missing_returns_none(mock_conn):
    mock_conn.fetchrow.return_value = None
    assert await PostgresContactRequestStore().get("nope") is None


@pytest.mark.asyncio
async def test_update_status_passes_expected_status(mock_conn):
    mock_conn.fetchrow.return_value = _row(status="cancelled")
    updated = await PostgresContactRequestStore().update_status(
        "req-1", ContactRequestStatus.CANCELLED, expected=ContactRequestStatus.PENDING
    )
    assert updated.status is ContactRequestStatus.CANCELLED
    assert mock_conn.fetchrow.await_args.args[1:] == ("req-1", "cancelled", "pending")


@pytest.mark.asyncio
async def test_find_pending(mock_conn):
    mock_conn.fetchrow.return_value = _row()
    request = await PostgresContactRequestStore().find_pending("u1")
    assert request.id == "req-1"
    assert mock_conn.fetchrow.await_args.args[1] == "u1"


@pytest.mark.asyncio
async def test_candidate_pool_query(mock_conn):
    mock_conn.fetch.return_value = [
        {
            "id": "u9",
            "display_name": "Can",
            "photo_url": None,
            "level": "İleri",
            "dance_styles": ["tango"],
            "city": "İzmir",
            "available_times": ["Akşam"],
            "gender": "Erkek",
            "age": 31,
            "rating": None,
            "height": 180,
            "weight": None,
        }
    ]
    directory = PostgresCandidateDirectory(roles=("user", "student"), limit=100)
    (candidate,) = await directory.fetch_candidate_pool("viewer-1")

    assert mock_conn.fetch.await_args.args[1:] == (["user", "student"], "viewer-1", 100)
    assert candidate.level is DanceLevel.ADVANCED
    assert candidate.photo_url == "/assets/images/dance/egitmen1.jpg"
    assert candidate.rating == 4.0
    assert candidate.height == 180.0
    assert candidate.availability == ("Akşam",)


@pytest.mark.asyncio
async def test_seeker_preference_query(mock_conn):
    mock_conn.fetchrow.return_value = {
        "dance_styles": ["salsa"],
        "level": "beginner",
        "city": "Ist",
        "available_times": ["Sabah", "Akşam"],
        "height": None,
        "weight": None,
    }
    preference = await PostgresCandidateDirectory().fetch_seeker_preference("viewer-1")
    assert preference.level is DanceLevel.BEGINNER
    assert preference.availability == frozenset({"Sabah", "Akşam"})


@pytest.mark.asyncio
async def test_style_taxonomy_query(mock_conn):
    mock_conn.fetch.return_value = [{"id": "1", "label": "Salsa", "value": None}]
    (entry,) = await PostgresStyleTaxonomySource().fetch_style_taxonomy()
    assert (entry.id, entry.label, entry.value) == ("1", "Salsa", "Salsa")
