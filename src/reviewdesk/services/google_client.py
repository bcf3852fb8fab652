"""Google Places reviews collection service for ReviewDesk."""

import atexit
import hashlib
import logging
import re
import shutil
import tempfile
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests
from diskcache import Cache

from ..core.config import Settings, settings
from ..core.constants import FileConstants, PlacesStatus, ProviderConstants
from ..core.errors import (
    AccessDeniedError,
    ConfigurationError,
    InvalidInputError,
    InvalidRequestError,
    QuotaExceededError,
    UpstreamError,
)
from ..core.models import NormalizedReview
from ..core.normalizer import normalize_all
from ..core.provider_models import GooglePlaceDetails, GoogleReview, PlaceMatch, PlaceSummary

logger = logging.getLogger(__name__)

# Listing names such as "2B N1 A - ..." start with a bedroom-count property code.
PROPERTY_CODE_RE = re.compile(r"\d+B\s")

_SUCCESS_STATUSES = (PlacesStatus.OK, PlacesStatus.ZERO_RESULTS, PlacesStatus.NOT_FOUND)

# Process-wide response caches, keyed by configured cache_dir ("" = temp dir)
_caches: Dict[str, Cache] = {}
_caches_lock = threading.Lock()


def shared_cache(cache_dir: str = "") -> Cache:
    """The process-wide Places response cache, opened on first use.

    Without a ``cache_dir`` the cache lives in a temporary directory that
    is removed when the process exits.
    """
    with _caches_lock:
        cache = _caches.get(cache_dir)
        if cache is None:
            if cache_dir:
                cache = Cache(cache_dir)
            else:
                directory = tempfile.mkdtemp(prefix=FileConstants.CACHE_DIR_PREFIX)
                atexit.register(shutil.rmtree, directory, True)
                cache = Cache(directory)
                logger.debug(f"Places cache opened in {directory}")
            # atexit is LIFO: close runs before the rmtree registered above
            atexit.register(cache.close)
            _caches[cache_dir] = cache
        return cache


class GooglePlacesService:
    """Google Places client: resolves a property to a place and reads its reviews.

    Successful responses are cached for ``places_cache_ttl`` seconds, keyed
    by the full request. Unless a cache is injected, all instances share
    the process-wide cache from ``shared_cache``. Provider errors are
    raised as ReviewDesk errors and are never retried here.
    """

    def __init__(self, config: Optional[Settings] = None, cache: Optional[Cache] = None):
        self.config = config or settings
        self.api_key = self.config.google_places_api_key
        self.base_url = self.config.google_places_base_url.rstrip("/")
        self._cache = cache
        if not self.api_key:
            logger.warning("GOOGLE_PLACES_API_KEY not configured; Google reviews are disabled")

    @property
    def cache(self) -> Cache:
        if self._cache is None:
            self._cache = shared_cache(self.config.cache_dir)
        return self._cache

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def find_place(self, name: str, address: Optional[str] = None) -> Optional[PlaceMatch]:
        """Resolve a property to a place, trying query variants in order."""
        for query in self._query_variants(name, address):
            data = self._request("findplacefromtext", {
                "input": query,
                "inputtype": "textquery",
                "fields": ProviderConstants.PLACES_FIND_FIELDS,
            })
            candidates = data.get("candidates") or []
            if data.get("status") == PlacesStatus.OK and candidates:
                candidate = candidates[0]
                logger.info(f"Matched '{name}' to place {candidate['place_id']} via query '{query}'")
                return PlaceMatch(
                    place_id=candidate["place_id"],
                    name=candidate.get("name") or name,
                    address=candidate.get("formatted_address"),
                )
            logger.debug(f"No place candidates for query '{query}'")
        return None

    def get_place_details(self, place_id: str) -> Optional[GooglePlaceDetails]:
        """Details for a place, including at most 5 reviews."""
        data = self._request("details", {
            "place_id": place_id,
            "fields": ProviderConstants.PLACES_DETAILS_FIELDS,
        })
        result = data.get("result")
        if data.get("status") != PlacesStatus.OK or not result:
            return None
        return GooglePlaceDetails.from_dict(result, ProviderConstants.PLACES_MAX_REVIEWS)

    def get_reviews_for_property(self, property_name: str,
                                 property_address: Optional[str] = None) -> List[NormalizedReview]:
        """Normalized Google reviews for a property; empty if nothing matches."""
        match = self.find_place(property_name, property_address)
        if match is None:
            logger.info(f"No Google Place found for: {property_name}")
            return []

        details = self.get_place_details(match.place_id)
        if details is None or not details.reviews:
            logger.info(f"No reviews found for place: {property_name}")
            return []

        raw_reviews = [
            GoogleReview.from_dict(
                review,
                place_id=match.place_id,
                place_name=details.name or match.name,
                property_name=property_name,
                index=index,
            )
            for index, review in enumerate(details.reviews)
        ]
        logger.info(f"Retrieved {len(raw_reviews)} Google reviews for {property_name}")
        return normalize_all(raw_reviews)

    def search_places(self, query: str, place_type: str = ProviderConstants.PLACES_DEFAULT_TYPE,
                      location: Optional[str] = None,
                      radius: int = ProviderConstants.PLACES_DEFAULT_RADIUS) -> List[PlaceSummary]:
        """Text search for places, lodging by default."""
        if not query:
            raise InvalidInputError("Query parameter is required")
        params: Dict[str, Any] = {"query": query, "type": place_type}
        if location:
            params["location"] = location
            params["radius"] = radius
        data = self._request("textsearch", params)
        places = [PlaceSummary.from_dict(p) for p in data.get("results") or []]
        logger.info(f"Found {len(places)} places for query: {query}")
        return places

    def _query_variants(self, name: str, address: Optional[str]) -> List[str]:
        variants = []
        if address:
            variants.append(f"{name} {address}")
        variants.append(name)
        if PROPERTY_CODE_RE.search(name):
            variants.extend(f"{name} {suffix}" for suffix in self.config.places_query_suffixes)
        unique = []
        for variant in variants:
            variant = variant.strip()
            if variant and variant not in unique:
                unique.append(variant)
        return unique

    def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError(
                "Google Places API not configured",
                details="GOOGLE_PLACES_API_KEY environment variable is required",
            )

        query = dict(params, key=self.api_key)
        cache_key = hashlib.md5(f"{endpoint}?{urlencode(sorted(query.items()))}".encode()).hexdigest()
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for Places request: {cache_key[:FileConstants.CACHE_KEY_LENGTH]}...")
            return cached

        try:
            response = requests.get(
                f"{self.base_url}/{endpoint}/json",
                params=query,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Google Places {endpoint} request failed: {e}")
            raise UpstreamError("Google Places API request failed", details=str(e)) from e

        if response.status_code == 429:
            raise QuotaExceededError("Google Places API quota exceeded. Please try again later.")
        if response.status_code == 403:
            raise AccessDeniedError("Google Places API access forbidden. Check your API key and permissions.")
        if not 200 <= response.status_code < 300:
            raise UpstreamError(f"Google Places API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("Google Places API returned invalid JSON", details=str(e)) from e
        if not isinstance(data, dict):
            raise UpstreamError("Google Places API returned an unexpected payload")

        status = data.get("status")
        error_message = data.get("error_message", "")
        if status == PlacesStatus.OVER_QUERY_LIMIT:
            raise QuotaExceededError("Google Places API quota exceeded. Please try again later.",
                                     details=error_message)
        if status == PlacesStatus.REQUEST_DENIED:
            raise AccessDeniedError("Google Places API access denied. Check your API key configuration.",
                                    details=error_message)
        if status == PlacesStatus.INVALID_REQUEST:
            raise InvalidRequestError("Invalid request to Google Places API. Please check your parameters.",
                                      details=error_message)
        if status not in _SUCCESS_STATUSES:
            raise UpstreamError(f"Google Places API error: {status}", details=error_message)

        self.cache.set(cache_key, data, expire=self.config.places_cache_ttl)
        return data
