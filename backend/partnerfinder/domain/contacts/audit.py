"""Audit helpers for contact requests."""

from __future__ import annotations

from typing import Dict

from partnerfinder.infra.redis import redis_client
from partnerfinder.obs import metrics as obs_metrics


async def log_contact_event(event: str, fields: Dict[str, str]) -> None:
	payload = {"event": event, **fields}
	await redis_client.xadd("x:contacts.events", payload)


def inc_contact_sent() -> None:
	obs_metrics.inc_contact_sent()


def inc_contact_cancelled() -> None:
	obs_metrics.inc_contact_cancelled()


def inc_reject(op: str, reason: str) -> None:
	obs_metrics.inc_contact_reject(op, reason)
