"""Text canonicalisation for comparing free-text profile fields."""

from __future__ import annotations

import re
from typing import Optional

# Only letters of the Turkish alphabet are folded; other diacritics pass through.
_TURKISH_FOLD = str.maketrans(
	{
		"ç": "c",
		"Ç": "c",
		"ğ": "g",
		"Ğ": "g",
		"ı": "i",
		"I": "i",
		"İ": "i",
		"ö": "o",
		"Ö": "o",
		"ş": "s",
		"Ş": "s",
		"ü": "u",
		"Ü": "u",
	}
)

_WHITESPACE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
	"""Lower-case, fold Turkish letters, drop commas and collapse whitespace.

	Folding happens before lower-casing: ``"İ".lower()`` yields ``"i̇"`` (with a
	combining dot) which would never match a plain ``"i"``.
	"""
	if not text:
		return ""
	folded = text.translate(_TURKISH_FOLD).lower().replace(",", " ")
	return _WHITESPACE.sub(" ", folded).strip()
