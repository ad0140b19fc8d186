"""Domain-level exceptions for partner search."""

from __future__ import annotations


class PartnerSearchError(Exception):
	"""Base class for partner search errors."""

	reason: str = "unknown"

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class CandidatePoolUnavailable(PartnerSearchError):
	reason = "candidate_pool_unavailable"


class SeekerPreferenceUnavailable(PartnerSearchError):
	reason = "seeker_preference_unavailable"
