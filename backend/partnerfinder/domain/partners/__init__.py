"""Partner discovery exports."""

from .exceptions import CandidatePoolUnavailable, PartnerSearchError, SeekerPreferenceUnavailable  # noqa: F401
from .models import Candidate, DanceLevel, SeekerPreference, TaxonomyEntry  # noqa: F401
from .schemas import PartnerFilters, PartnerSearchOptions, PartnerSearchResponse, RankedCandidate  # noqa: F401
from .service import PartnerSearchService, RankingSession  # noqa: F401
