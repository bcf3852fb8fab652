"""ReviewDesk - guest review aggregation and approval for property managers."""

__version__ = "1.0.0"
__author__ = "ReviewDesk Team"

from .core.models import *
from .core.config import settings
from .services.review_service import ReviewService
from .services.approval_store import ApprovalStore

__all__ = [
    "settings",
    "ReviewService",
    "ApprovalStore",
    "NormalizedReview",
    "ReviewAnalytics",
]
