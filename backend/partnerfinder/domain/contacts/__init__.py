"""Contact request exports."""

from .cache import ActiveRequestCache, RedisSessionCache, SessionCache  # noqa: F401
from .exceptions import (  # noqa: F401
	ContactConflict,
	ContactError,
	ContactRequestAlreadyPending,
	ContactRequestForbidden,
	ContactRequestNotFound,
	ContactRequestNotPending,
	ContactSelfRequest,
)
from .models import ContactParty, ContactRequest, ContactRequestStatus  # noqa: F401
from .service import ContactRequestWorkflow  # noqa: F401
from .store import ContactRequestStore, PostgresContactRequestStore  # noqa: F401
