"""Basic usage examples for ReviewDesk."""

from reviewdesk import ApprovalStore, ReviewService
from reviewdesk.core.errors import ConfigurationError, UpstreamError
from reviewdesk.core.filters import ReviewFilters


def example_dashboard(service: ReviewService):
    """Example: manager dashboard flow."""
    print("📋 Loading Hostaway reviews")

    reviews = service.list_normalized_reviews()
    print(f"📊 {len(reviews)} reviews loaded")

    analytics = service.list_analytics(reviews)
    print(f"⭐ Average rating: {analytics.average_rating}")
    print(f"⚠️  Top issues: {', '.join(analytics.top_issues) or 'none'}")

    # Approve and publish the best reviews in one batch
    updates = [
        {"reviewId": r.id, "isApproved": True, "isPublic": True}
        for r in service.list_reviews(ReviewFilters(min_rating=5))
    ]
    service.bulk_approve(updates)
    print(f"✅ Published {len(updates)} five-star reviews")

    pending = service.list_reviews(ReviewFilters(status="pending"))
    print(f"⏳ {len(pending)} reviews still pending")


def example_property_page(service: ReviewService):
    """Example: reviews shown on one public property page."""
    print("\n🏠 Public reviews for 2b_n1_a")
    for review in service.public_reviews_for_property("2b_n1_a"):
        print(f"  {review.rating:.1f}/5 {review.guest_name}: {review.comment[:60]}...")


def example_google_reviews(service: ReviewService):
    """Example: Google reviews for a property."""
    print("\n🔍 Google reviews for 2B N1 A - 29 Shoreditch Heights")
    try:
        reviews = service.search_places_reviews("2B N1 A - 29 Shoreditch Heights", "London")
    except ConfigurationError as e:
        print(f"  Google Places not configured: {e.details}")
        return
    except UpstreamError as e:
        print(f"  Google Places unavailable: {e.message}")
        return
    print(f"  Found {len(reviews)} reviews")


if __name__ == "__main__":
    service = ReviewService(store=ApprovalStore())
    example_dashboard(service)
    example_property_page(service)
    example_google_reviews(service)
