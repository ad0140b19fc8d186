"""Domain models for partner discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple

from partnerfinder.domain.partners.text import normalize

PLACEHOLDER_PARTNER_PHOTO = "/assets/images/dance/egitmen1.jpg"
UNNAMED_USER = "İsimsiz Kullanıcı"
UNSPECIFIED = "Belirtilmemiş"
DEFAULT_RATING = 4.0

AVAILABILITY_SLOTS: Tuple[str, ...] = ("Sabah", "Öğlen", "Akşam", "Hafta Sonu")
GENDERS: Tuple[str, ...] = ("Kadın", "Erkek")


class DanceLevel(str, Enum):
	"""Skill levels, declared in ascending order."""

	BEGINNER = "beginner"
	INTERMEDIATE = "intermediate"
	ADVANCED = "advanced"
	PROFESSIONAL = "professional"

	@property
	def rank(self) -> int:
		return _LEVEL_ORDER.index(self)

	@property
	def label(self) -> str:
		return _LEVEL_LABELS[self]

	def is_adjacent(self, other: "DanceLevel") -> bool:
		return abs(self.rank - other.rank) == 1

	@classmethod
	def parse(cls, value: object) -> Optional["DanceLevel"]:
		"""Accept a machine value or a display label; unknown values yield None."""
		if isinstance(value, DanceLevel):
			return value
		if not isinstance(value, str):
			return None
		text = value.strip()
		if not text:
			return None
		try:
			return cls(text.lower())
		except ValueError:
			pass
		folded = normalize(text)
		for level, label in _LEVEL_LABELS.items():
			if normalize(label) == folded:
				return level
		return None


_LEVEL_ORDER = list(DanceLevel)
_LEVEL_LABELS = {
	DanceLevel.BEGINNER: "Başlangıç",
	DanceLevel.INTERMEDIATE: "Orta",
	DanceLevel.ADVANCED: "İleri",
	DanceLevel.PROFESSIONAL: "Profesyonel",
}


def _str_tuple(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
	if not values or isinstance(values, str):
		return ()
	return tuple(str(item) for item in values if item is not None and str(item).strip())


def _optional_float(value: Any) -> Optional[float]:
	if value is None or value == "":
		return None
	try:
		return float(value)
	except (TypeError, ValueError):
		return None


@dataclass(frozen=True, slots=True)
class TaxonomyEntry:
	"""A canonical dance style record."""

	id: str
	label: str
	value: str = ""

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "TaxonomyEntry":
		label = str(record.get("label") or "")
		return cls(
			id=str(record["id"]),
			label=label,
			value=str(record.get("value") or label),
		)


@dataclass(frozen=True, slots=True)
class Candidate:
	"""A prospective partner as handed over by the user directory."""

	id: str
	display_name: str = UNNAMED_USER
	dance_styles: Tuple[str, ...] = ()
	gender: str = UNSPECIFIED
	age: int = 0
	level: Optional[DanceLevel] = None
	location: str = UNSPECIFIED
	availability: Tuple[str, ...] = ()
	photo_url: str = PLACEHOLDER_PARTNER_PHOTO
	rating: float = DEFAULT_RATING
	height: Optional[float] = None
	weight: Optional[float] = None

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Candidate":
		age = record.get("age")
		rating = _optional_float(record.get("rating"))
		return cls(
			id=str(record["id"]),
			display_name=record.get("display_name") or UNNAMED_USER,
			dance_styles=_str_tuple(record.get("dance_styles")),
			gender=record.get("gender") or UNSPECIFIED,
			age=int(age) if isinstance(age, (int, float)) else 0,
			level=DanceLevel.parse(record.get("level")),
			location=record.get("city") or record.get("location") or UNSPECIFIED,
			availability=_str_tuple(record.get("available_times") or record.get("availability")),
			photo_url=record.get("photo_url") or PLACEHOLDER_PARTNER_PHOTO,
			rating=rating if rating is not None else DEFAULT_RATING,
			height=_optional_float(record.get("height")),
			weight=_optional_float(record.get("weight")),
		)


@dataclass(frozen=True, slots=True)
class SeekerPreference:
	"""Profile snapshot of the user searching for partners."""

	dance_styles: Tuple[str, ...] = ()
	level: Optional[DanceLevel] = None
	city: str = ""
	availability: frozenset[str] = field(default_factory=frozenset)
	height: Optional[float] = None
	weight: Optional[float] = None

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "SeekerPreference":
		return cls(
			dance_styles=_str_tuple(record.get("dance_styles")),
			level=DanceLevel.parse(record.get("level")),
			city=str(record.get("city") or ""),
			availability=frozenset(_str_tuple(record.get("available_times") or record.get("availability"))),
			height=_optional_float(record.get("height")),
			weight=_optional_float(record.get("weight")),
		)
