"""Review service: the interface presentation layers call."""

import logging
from typing import Dict, List, Optional, Sequence

from ..core.analytics import compute_analytics
from ..core.errors import InvalidInputError
from ..core.filters import ReviewFilters, apply_filters, public_reviews
from ..core.models import ApprovalRecord, NormalizedReview, ReviewAnalytics
from .approval_store import ApprovalStore
from .google_client import GooglePlacesService
from .hostaway_client import HostawayService

logger = logging.getLogger(__name__)


class ReviewService:
    """Wires provider adapters, the approval store and filters together.

    The store is owned by whoever builds the service; pass the same store to
    every request handler in a process so manager decisions are shared.
    """

    def __init__(self, hostaway: Optional[HostawayService] = None,
                 google: Optional[GooglePlacesService] = None,
                 store: Optional[ApprovalStore] = None):
        self.hostaway = hostaway or HostawayService()
        self.google = google or GooglePlacesService()
        self.store = store if store is not None else ApprovalStore()

    def list_normalized_reviews(self) -> List[NormalizedReview]:
        """Hostaway reviews with manager decisions applied."""
        return self.store.merge_onto_reviews(self.hostaway.get_reviews())

    def list_reviews(self, filters: Optional[ReviewFilters] = None) -> List[NormalizedReview]:
        return apply_filters(self.list_normalized_reviews(), filters)

    def list_analytics(self, reviews: Optional[Sequence[NormalizedReview]] = None) -> ReviewAnalytics:
        if reviews is None:
            reviews = self.list_normalized_reviews()
        return compute_analytics(reviews)

    def get_review(self, review_id: str) -> Optional[NormalizedReview]:
        for review in self.list_normalized_reviews():
            if review.id == review_id:
                return review
        return None

    def public_reviews_for_property(self, property_id: str) -> List[NormalizedReview]:
        """Reviews shown on a public property page."""
        return public_reviews(self.list_normalized_reviews(), property_id)

    def approve(self, review_id: str) -> ApprovalRecord:
        logger.info(f"Approving review {review_id}")
        return self.store.set_approval(review_id, is_approved=True)

    def reject(self, review_id: str) -> ApprovalRecord:
        logger.info(f"Rejecting review {review_id}")
        return self.store.set_approval(review_id, is_approved=False)

    def set_public(self, review_id: str, is_public: bool) -> ApprovalRecord:
        logger.info(f"Setting review {review_id} public={is_public}")
        return self.store.set_approval(review_id, is_public=is_public)

    def toggle_public(self, review_id: str) -> ApprovalRecord:
        """Flip public visibility, keeping the review's current approval."""
        review = self.get_review(review_id)
        if review is None:
            raise InvalidInputError(f"Unknown review: {review_id}")
        return self.store.set_approval(review_id, is_approved=review.is_approved,
                                       is_public=not review.is_public)

    def bulk_approve(self, updates) -> Dict[str, ApprovalRecord]:
        return self.store.bulk_set_approval(updates)

    def search_places_reviews(self, property_name: str,
                              address: Optional[str] = None) -> List[NormalizedReview]:
        """Google reviews for a property with manager decisions applied."""
        if not property_name:
            raise InvalidInputError("Property name is required")
        return self.store.merge_onto_reviews(self.google.get_reviews_for_property(property_name, address))
