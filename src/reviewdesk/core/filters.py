"""Query filters applied to merged reviews before presentation."""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .constants import StatusFilter
from .errors import InvalidInputError
from .models import NormalizedReview, ReviewSource, ReviewType


@dataclass
class ReviewFilters:
    """Dashboard and property-page filters. Unset fields match everything."""
    property: Optional[str] = None
    min_rating: Optional[float] = None
    status: Optional[str] = None
    search: Optional[str] = None
    channels: Sequence[str] = field(default_factory=tuple)
    source: Optional[ReviewSource] = None
    review_type: Optional[ReviewType] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.status is not None:
            self.status = self.status.lower()
            if self.status not in StatusFilter.ALL:
                raise InvalidInputError(
                    f"Invalid status filter: {self.status}",
                    details=f"Expected one of {', '.join(StatusFilter.ALL)}",
                )
        if self.min_rating is not None:
            try:
                self.min_rating = float(self.min_rating)
            except (TypeError, ValueError):
                raise InvalidInputError(f"Invalid rating filter: {self.min_rating!r}")

    def matches(self, review: NormalizedReview) -> bool:
        if self.property:
            wanted = self.property.lower()
            if review.property_id != self.property and wanted not in review.property_name.lower():
                return False
        if self.min_rating is not None and review.rating < self.min_rating:
            return False
        if self.status and not _matches_status(review, self.status):
            return False
        if self.search:
            needle = self.search.lower()
            haystack = (review.guest_name, review.property_name, review.comment)
            if not any(needle in text.lower() for text in haystack):
                return False
        if self.channels and review.channel not in self.channels:
            return False
        if self.source is not None and review.source is not self.source:
            return False
        if self.review_type is not None and review.type is not self.review_type:
            return False
        submitted = review.submitted_at.date()
        if self.start is not None and submitted < self.start:
            return False
        if self.end is not None and submitted > self.end:
            return False
        return True


def _matches_status(review: NormalizedReview, status: str) -> bool:
    if status == StatusFilter.APPROVED:
        return review.is_approved
    if status == StatusFilter.PENDING:
        return not review.is_approved
    if status == StatusFilter.PUBLIC:
        return review.is_public
    return not review.is_public


def apply_filters(reviews: Iterable[NormalizedReview],
                  filters: Optional[ReviewFilters] = None) -> List[NormalizedReview]:
    if filters is None:
        return list(reviews)
    return [review for review in reviews if filters.matches(review)]


def public_reviews(reviews: Iterable[NormalizedReview], property_id: str) -> List[NormalizedReview]:
    """Reviews a property page may show: approved, public and for that property."""
    return [
        r for r in reviews
        if r.property_id == property_id and r.is_approved and r.is_public
    ]
