from datetime import datetime, timedelta, timezone

import pytest

from partnerfinder.domain.contacts.cache import ActiveRequestCache, RedisSessionCache
from partnerfinder.domain.contacts.models import ContactParty, ContactRequest, ContactRequestStatus

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _request(request_id="req-1", sender_id="u1"):
    return ContactRequest(
        id=request_id,
        sender=ContactParty(id=sender_id, display_name="Ayşe"),
        receiver=ContactParty(id="u2", display_name="Mehmet", photo_url="/img/u2.jpg"),
        status=ContactRequestStatus.PENDING,
        created_at=NOW,
        updated_at=NOW,
    )


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_cached_request_round_trips(fake_redis):
    cache = ActiveRequestCache(RedisSessionCache("s1"), clock=Clock(NOW))
    await cache.set(_request())
    cached = await cache.get("u1")
    assert cached == _request()
    assert await fake_redis.ttl("session:s1:contact:active:u1") > 0


@pytest.mark.asyncio
async def test_entry_expires_after_validity_window(fake_redis):
    clock = Clock(NOW)
    cache = ActiveRequestCache(RedisSessionCache("s1"), clock=clock)
    await cache.set(_request())

    clock.now = NOW + timedelta(hours=23)
    assert await cache.get("u1") is not None

    clock.now = NOW + timedelta(hours=24, seconds=1)
    assert await cache.get("u1") is None
    assert await fake_redis.get("session:s1:contact:active:u1") is None


@pytest.mark.asyncio
async def test_sessions_do_not_share_entries():
    await ActiveRequestCache(RedisSessionCache("s1"), clock=Clock(NOW)).set(_request())
    other = ActiveRequestCache(RedisSessionCache("s2"), clock=Clock(NOW))
    assert await other.get("u1") is None


@pytest.mark.asyncio
async def test_malformed_entry_is_dropped(fake_redis):
    await fake_redis.set("session:s1:contact:active:u1", '{"request": {"id": "x"}}')
    cache = ActiveRequestCache(RedisSessionCache("s1"), clock=Clock(NOW))
    assert await cache.get("u1") is None
    assert await fake_redis.get("session:s1:contact:active:u1") is None


@pytest.mark.asyncio
async def test_invalidate_removes_entry():
    cache = ActiveRequestCache(RedisSessionCache("s1"), clock=Clock(NOW))
    await cache.set(_request())
    await cache.invalidate("u1")
    assert await cache.get("u1") is None
