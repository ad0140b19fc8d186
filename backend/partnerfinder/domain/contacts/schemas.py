"""Pydantic schemas for contact requests."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from partnerfinder.domain.contacts.models import ContactRequest


class ContactRequestSend(BaseModel):
	receiver_id: str = Field(..., min_length=1, description="Dancer being contacted")
	receiver_name: str = Field(default="", description="Display name snapshot shown in the pending banner")
	receiver_photo_url: Optional[str] = None
	sender_name: str = Field(default="", description="Caller's display name snapshot")
	sender_photo_url: Optional[str] = None


class ContactPartySummary(BaseModel):
	id: str
	display_name: str = ""
	photo_url: Optional[str] = None


class ContactRequestSummary(BaseModel):
	id: str
	sender: ContactPartySummary
	receiver: ContactPartySummary
	status: Literal["pending", "accepted", "rejected", "cancelled"]
	created_at: datetime
	updated_at: datetime

	@classmethod
	def from_domain(cls, request: ContactRequest) -> "ContactRequestSummary":
		return cls(
			id=request.id,
			sender=ContactPartySummary(
				id=request.sender.id,
				display_name=request.sender.display_name,
				photo_url=request.sender.photo_url,
			),
			receiver=ContactPartySummary(
				id=request.receiver.id,
				display_name=request.receiver.display_name,
				photo_url=request.receiver.photo_url,
			),
			status=request.status.value,
			created_at=request.created_at,
			updated_at=request.updated_at,
		)


class ActiveContactRequest(BaseModel):
	request: Optional[ContactRequestSummary] = None
