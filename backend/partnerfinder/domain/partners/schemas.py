"""Pydantic schemas for partner search."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from partnerfinder.domain.partners.models import Candidate, DanceLevel


class PartnerFilters(BaseModel):
	"""Search criteria picked by the seeker; blank criteria are not applied."""

	model_config = ConfigDict(frozen=True)

	dance_style: str = ""
	gender: str = ""
	level: str = ""
	location: str = ""
	availability: tuple[str, ...] = ()

	def is_empty(self) -> bool:
		return not (self.dance_style or self.gender or self.level or self.location or self.availability)


FilterField = Literal["dance_style", "gender", "level", "location", "availability"]


class RankedCandidate(BaseModel):
	id: str
	display_name: str
	dance_styles: list[str] = Field(default_factory=list)
	gender: str
	age: int = 0
	level: Optional[DanceLevel] = None
	level_label: Optional[str] = None
	location: str
	availability: list[str] = Field(default_factory=list)
	photo_url: str
	rating: float
	height: Optional[float] = None
	weight: Optional[float] = None
	relevance_score: int = 0

	@classmethod
	def from_candidate(cls, candidate: Candidate, relevance_score: int) -> "RankedCandidate":
		return cls(
			id=candidate.id,
			display_name=candidate.display_name,
			dance_styles=list(candidate.dance_styles),
			gender=candidate.gender,
			age=candidate.age,
			level=candidate.level,
			level_label=candidate.level.label if candidate.level else None,
			location=candidate.location,
			availability=list(candidate.availability),
			photo_url=candidate.photo_url,
			rating=candidate.rating,
			height=candidate.height,
			weight=candidate.weight,
			relevance_score=relevance_score,
		)


class PartnerSearchResponse(BaseModel):
	items: list[RankedCandidate] = Field(default_factory=list)
	total: int = 0
	ranked: bool = False
	filters: PartnerFilters = Field(default_factory=PartnerFilters)


class LevelOption(BaseModel):
	value: DanceLevel
	label: str


class PartnerSearchOptions(BaseModel):
	"""Choices offered by the filter controls."""

	dance_styles: list[str] = Field(default_factory=list)
	levels: list[LevelOption] = Field(default_factory=list)
	genders: list[str] = Field(default_factory=list)
	availability: list[str] = Field(default_factory=list)
