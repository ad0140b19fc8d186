"""Domain models for contact requests between dancers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

ACTIVE_REQUEST_TTL_SECONDS = 24 * 60 * 60


class ContactRequestStatus(str, Enum):
	"""Lifecycle of a contact request. Only PENDING and CANCELLED are written here."""

	PENDING = "pending"
	ACCEPTED = "accepted"
	REJECTED = "rejected"
	CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class ContactParty:
	"""Display snapshot of one side of a request."""

	id: str
	display_name: str = ""
	photo_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ContactRequest:
	id: str
	sender: ContactParty
	receiver: ContactParty
	status: ContactRequestStatus
	created_at: datetime
	updated_at: datetime

	@property
	def is_pending(self) -> bool:
		return self.status is ContactRequestStatus.PENDING

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "ContactRequest":
		return cls(
			id=str(record["id"]),
			sender=ContactParty(
				id=str(record["sender_id"]),
				display_name=record.get("sender_name") or "",
				photo_url=record.get("sender_photo_url"),
			),
			receiver=ContactParty(
				id=str(record["receiver_id"]),
				display_name=record.get("receiver_name") or "",
				photo_url=record.get("receiver_photo_url"),
			),
			status=ContactRequestStatus(record["status"]),
			created_at=_as_datetime(record["created_at"]),
			updated_at=_as_datetime(record["updated_at"]),
		)

	def to_record(self) -> dict[str, Any]:
		return {
			"id": self.id,
			"sender_id": self.sender.id,
			"sender_name": self.sender.display_name,
			"sender_photo_url": self.sender.photo_url,
			"receiver_id": self.receiver.id,
			"receiver_name": self.receiver.display_name,
			"receiver_photo_url": self.receiver.photo_url,
			"status": self.status.value,
			"created_at": self.created_at.isoformat(),
			"updated_at": self.updated_at.isoformat(),
		}


def _as_datetime(value: Any) -> datetime:
	if isinstance(value, datetime):
		return value
	return datetime.fromisoformat(str(value))
