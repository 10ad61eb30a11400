from .venues import Venue, SearchCriteria
from .slots import TimeSlot, DateSelection, BookingHandoff
from .auth import AuthClaim, AccessCode, AccessResult, AccessExplanation

__all__ = [
    "Venue",
    "SearchCriteria",
    "TimeSlot",
    "DateSelection",
    "BookingHandoff",
    "AuthClaim",
    "AccessCode",
    "AccessResult",
    "AccessExplanation",
]
