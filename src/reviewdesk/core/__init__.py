"""Core modules for ReviewDesk."""

from .models import *
from .config import settings
from .errors import *
from .normalizer import derive_property_id, normalize
from .analytics import compute_analytics
from .filters import ReviewFilters, apply_filters

__all__ = [
    "settings",
    "ReviewSource",
    "ReviewType",
    "ReviewCategory",
    "NormalizedReview",
    "ApprovalRecord",
    "ApprovalUpdate",
    "ReviewAnalytics",
    "TrendPoint",
    "ReviewFilters",
    "apply_filters",
    "compute_analytics",
    "derive_property_id",
    "normalize",
]
