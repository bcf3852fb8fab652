"""Services for ReviewDesk."""

from .approval_store import ApprovalStore
from .google_client import GooglePlacesService
from .hostaway_client import HostawayService
from .review_service import ReviewService

__all__ = [
    "ApprovalStore",
    "GooglePlacesService",
    "HostawayService",
    "ReviewService",
]
