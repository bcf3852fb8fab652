"""Raw review records in each provider's native shape."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import ReviewCategory


@dataclass(frozen=True)
class HostawayReview:
    """A review as returned by the Hostaway ``/reviews`` endpoint."""
    id: int
    type: str  # "host-to-guest" or "guest-to-host"
    status: str  # "published", "pending" or "draft"
    rating: Optional[float]
    public_review: str
    review_category: Tuple[ReviewCategory, ...]
    submitted_at: str  # "YYYY-MM-DD HH:MM:SS"
    guest_name: str
    listing_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HostawayReview":
        """Build from the API's camelCase JSON. Missing required keys raise KeyError."""
        return cls(
            id=data["id"],
            type=data["type"],
            status=data.get("status", "published"),
            rating=data.get("rating"),
            public_review=data.get("publicReview") or "",
            review_category=tuple(
                ReviewCategory.from_dict(c) for c in data.get("reviewCategory") or []
            ),
            submitted_at=data["submittedAt"],
            guest_name=data["guestName"],
            listing_name=data["listingName"],
        )


@dataclass(frozen=True)
class GoogleReview:
    """A Google Places review plus the place context attached by the adapter."""
    author_name: str
    rating: float
    text: str
    time: int  # unix seconds
    place_id: str
    place_name: str
    property_name: str  # the property name the caller searched for
    index: int  # position in the place's review list
    relative_time_description: str = ""
    language: str = ""
    author_url: Optional[str] = None
    profile_photo_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, place_id: str, place_name: str,
                  property_name: str, index: int) -> "GoogleReview":
        return cls(
            author_name=data["author_name"],
            rating=data["rating"],
            text=data.get("text", ""),
            time=data["time"],
            place_id=place_id,
            place_name=place_name,
            property_name=property_name,
            index=index,
            relative_time_description=data.get("relative_time_description", ""),
            language=data.get("language", ""),
            author_url=data.get("author_url"),
            profile_photo_url=data.get("profile_photo_url"),
        )


@dataclass
class PlaceMatch:
    """Place resolved from a property name."""
    place_id: str
    name: str
    address: Optional[str] = None


@dataclass
class GooglePlaceDetails:
    """Subset of the Places details response used by ReviewDesk."""
    place_id: str
    name: str
    rating: Optional[float] = None
    user_ratings_total: int = 0
    formatted_address: Optional[str] = None
    reviews: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], max_reviews: int) -> "GooglePlaceDetails":
        return cls(
            place_id=data.get("place_id", ""),
            name=data.get("name", ""),
            rating=data.get("rating"),
            user_ratings_total=data.get("user_ratings_total", 0),
            formatted_address=data.get("formatted_address"),
            reviews=list(data.get("reviews") or [])[:max_reviews],
        )


@dataclass
class PlaceSummary:
    """A text-search result."""
    id: str
    name: str
    address: str = ""
    rating: Optional[float] = None
    user_ratings_total: int = 0
    types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlaceSummary":
        return cls(
            id=data["place_id"],
            name=data.get("name", ""),
            address=data.get("formatted_address", ""),
            rating=data.get("rating"),
            user_ratings_total=data.get("user_ratings_total", 0),
            types=list(data.get("types") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "rating": self.rating,
            "userRatingsTotal": self.user_ratings_total,
            "types": self.types,
        }


@dataclass
class HostawayFetchResult:
    """Raw Hostaway reviews and whether they came from the sample dataset."""
    reviews: List[HostawayReview]
    used_fallback: bool = False
    fallback_reason: str = ""
