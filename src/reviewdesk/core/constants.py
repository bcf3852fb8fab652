"""Constants and configuration values for ReviewDesk."""

# Provider Constants
class ProviderConstants:
    """Constants describing the external review providers."""

    HOSTAWAY_CHANNEL = "Hostaway"  # display label for Hostaway reviews
    GOOGLE_CHANNEL = "Google Reviews"  # display label for Google reviews
    GOOGLE_ID_PREFIX = "google"  # prefix of synthetic Google review ids

    HOSTAWAY_SUCCESS_STATUS = "success"
    GUEST_TO_HOST = "guest-to-host"  # Hostaway review direction written by guests

    PLACES_MAX_REVIEWS = 5  # Google Places details returns at most 5 reviews
    PLACES_DEFAULT_TYPE = "lodging"  # default place type for rental properties
    PLACES_DEFAULT_RADIUS = 1000  # metres
    PLACES_DETAILS_FIELDS = "place_id,name,rating,reviews,user_ratings_total,formatted_address"
    PLACES_FIND_FIELDS = "place_id,name,formatted_address"

# Google Places status codes
class PlacesStatus:
    """Status strings returned in Google Places response bodies."""

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    NOT_FOUND = "NOT_FOUND"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"

# Rating Constants
class RatingConstants:
    """Constants for rating scales and derived ratings."""

    CATEGORY_SCALE_DIVISOR = 2.0  # Hostaway categories are 0-10, reviews are 1-5
    DEFAULT_RATING = 5.0  # rating given to reviews with no rating and no categories
    RATING_PRECISION = 1  # decimal places kept on ratings and averages
    MIN_RATING = 1
    MAX_RATING = 5

# Analytics Constants
class AnalyticsConstants:
    """Constants for dashboard analytics."""

    ISSUE_THRESHOLD = 4.0  # category averages below this are reported as issues
    MAX_TOP_ISSUES = 3
    MAX_BEST_PROPERTIES = 3

# Review status filter values
class StatusFilter:
    """Values accepted by the review status filter."""

    APPROVED = "approved"
    PENDING = "pending"
    PUBLIC = "public"
    PRIVATE = "private"

    ALL = (APPROVED, PENDING, PUBLIC, PRIVATE)

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    SAMPLE_REVIEWS_FILE = "sample_reviews.yaml"  # bundled Hostaway sandbox dataset
    CACHE_DIR_PREFIX = "reviewdesk-places-"  # temp dir prefix for the places cache
    CACHE_KEY_LENGTH = 8  # length of cache key for logging
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
