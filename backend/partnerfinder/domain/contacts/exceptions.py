"""Domain-level exceptions for contact requests."""

from __future__ import annotations


class ContactError(Exception):
	"""Base class for contact request errors."""

	reason: str = "unknown"

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class ContactConflict(ContactError):
	reason = "conflict"


class ContactRequestAlreadyPending(ContactConflict):
	reason = "already_pending"


class ContactSelfRequest(ContactConflict):
	reason = "self_request"


class ContactRequestNotFound(ContactError):
	reason = "not_found"


class ContactRequestNotPending(ContactError):
	reason = "not_pending"


class ContactRequestForbidden(ContactError):
	reason = "forbidden"
