"""Data models for ReviewDesk."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class ReviewSource(Enum):
    HOSTAWAY = "hostaway"
    GOOGLE = "google"
    AIRBNB = "airbnb"


class ReviewType(Enum):
    GUEST_REVIEW = "guest-review"
    HOST_REVIEW = "host-review"


@dataclass(frozen=True)
class ReviewCategory:
    """A provider sub-score (e.g. cleanliness) on the provider's native scale."""
    category: str
    rating: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReviewCategory":
        return cls(category=data["category"], rating=data["rating"])

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "rating": self.rating}


@dataclass(frozen=True)
class NormalizedReview:
    """Provider-agnostic review.

    Built fresh on every fetch. ``is_approved`` and ``is_public`` hold the
    provider defaults until the approval store merges manager decisions on
    top of them.
    """
    id: str
    source: ReviewSource
    property_id: str
    property_name: str
    guest_name: str
    rating: float  # 1-5 scale
    comment: str
    submitted_at: datetime
    categories: Tuple[ReviewCategory, ...] = ()
    channel: str = ""
    is_approved: bool = False
    is_public: bool = False
    type: ReviewType = ReviewType.GUEST_REVIEW

    @property
    def submitted_date(self) -> str:
        """Calendar date of submission as YYYY-MM-DD."""
        return self.submitted_at.date().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source.value,
            "propertyId": self.property_id,
            "propertyName": self.property_name,
            "guestName": self.guest_name,
            "rating": self.rating,
            "comment": self.comment,
            "submittedAt": self.submitted_at.isoformat(),
            "categories": [c.to_dict() for c in self.categories],
            "channel": self.channel,
            "isApproved": self.is_approved,
            "isPublic": self.is_public,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class ApprovalRecord:
    """Manager decision stored for one review id."""
    is_approved: bool
    is_public: bool

    def to_dict(self) -> Dict[str, bool]:
        return {"isApproved": self.is_approved, "isPublic": self.is_public}


@dataclass
class ApprovalUpdate:
    """One entry of a bulk approval update. Omitted flags are None."""
    review_id: Optional[str]
    is_approved: Optional[bool] = None
    is_public: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApprovalUpdate":
        """Parse the camelCase wire shape; snake_case keys are accepted too."""
        return cls(
            review_id=data.get("reviewId", data.get("review_id")),
            is_approved=data.get("isApproved", data.get("is_approved")),
            is_public=data.get("isPublic", data.get("is_public")),
        )


@dataclass(frozen=True)
class TrendPoint:
    """Average rating and review count for one submission date."""
    date: str
    rating: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "rating": self.rating, "count": self.count}


@dataclass
class ReviewAnalytics:
    """Summary statistics for the dashboard."""
    total_reviews: int
    average_rating: float
    rating_distribution: Dict[int, int] = field(default_factory=dict)
    category_averages: Dict[str, float] = field(default_factory=dict)
    trends_over_time: Tuple[TrendPoint, ...] = ()
    top_issues: Tuple[str, ...] = ()
    best_performing_properties: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReviews": self.total_reviews,
            "averageRating": self.average_rating,
            "ratingDistribution": dict(self.rating_distribution),
            "categoryAverages": dict(self.category_averages),
            "trendsOverTime": [t.to_dict() for t in self.trends_over_time],
            "topIssues": list(self.top_issues),
            "bestPerformingProperties": list(self.best_performing_properties),
        }
