"""Hostaway reviews collection service for ReviewDesk."""

import logging
import os
from functools import lru_cache
from typing import List, Optional, Tuple

import requests
import yaml
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.config import Settings, settings
from ..core.constants import FileConstants, ProviderConstants
from ..core.models import NormalizedReview
from ..core.normalizer import normalize_all
from ..core.provider_models import HostawayFetchResult, HostawayReview

logger = logging.getLogger(__name__)

SAMPLE_REVIEWS_PATH = os.path.join(os.path.dirname(__file__), "..", "data", FileConstants.SAMPLE_REVIEWS_FILE)

_TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


@lru_cache(maxsize=1)
def load_sample_reviews() -> Tuple[HostawayReview, ...]:
    """The bundled sandbox dataset served when the live API is unavailable."""
    with open(SAMPLE_REVIEWS_PATH, "r", encoding="utf-8") as f:
        records = yaml.safe_load(f) or []
    return tuple(HostawayReview.from_dict(r) for r in records)


class HostawayService:
    """Hostaway reviews API client with a sample-data degrade path.

    Any failure to get live reviews (missing credentials, network error,
    non-2xx response, error status or an empty result) is logged and
    answered with the bundled sample dataset instead of an exception.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings
        self.account_id = self.config.hostaway_account_id
        self.base_url = self.config.hostaway_base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {self.config.hostaway_api_key}",
            "Content-Type": "application/json",
        } if self.config.hostaway_api_key else {}
        if not self.config.hostaway_configured:
            logger.warning("Hostaway credentials not configured (HOSTAWAY_ACCOUNT_ID / HOSTAWAY_API_KEY); serving sample reviews")

    def fetch_raw_reviews(self) -> HostawayFetchResult:
        """Fetch raw reviews for the account, falling back to sample data."""
        if not self.config.hostaway_configured:
            return self._fallback("credentials not configured")

        try:
            response = self._get("/reviews", params={"accountId": self.account_id})
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            return self._fallback(f"HTTP {e.response.status_code if e.response is not None else 'error'}")
        except (requests.RequestException, ValueError) as e:
            return self._fallback(f"request failed: {e}")

        if not isinstance(data, dict) or data.get("status") != ProviderConstants.HOSTAWAY_SUCCESS_STATUS:
            status = data.get("status") if isinstance(data, dict) else None
            return self._fallback(f"API status {status!r}")

        records = data.get("result") or []
        if not records:
            return self._fallback("account has no reviews")

        reviews = [HostawayReview.from_dict(r) for r in records]
        logger.info(f"Retrieved {len(reviews)} Hostaway reviews for account {self.account_id}")
        return HostawayFetchResult(reviews=reviews)

    def get_reviews(self) -> List[NormalizedReview]:
        """All reviews for the account, normalized."""
        return normalize_all(self.fetch_raw_reviews().reviews)

    def get_reviews_by_property(self, property_id: str) -> List[NormalizedReview]:
        return [r for r in self.get_reviews() if r.property_id == property_id]

    def get_review_by_id(self, review_id: str) -> Optional[NormalizedReview]:
        for review in self.get_reviews():
            if review.id == review_id:
                return review
        return None

    def _get(self, endpoint: str, params: dict) -> requests.Response:
        """GET with exponential backoff on connection errors and timeouts."""
        retrying = Retrying(
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            stop=stop_after_attempt(max(1, self.config.max_retries)),
            wait=wait_exponential(multiplier=self.config.retry_delay, max=self.config.retry_backoff * 10),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return requests.get(
                    f"{self.base_url}{endpoint}",
                    headers=self.headers,
                    params=params,
                    timeout=self.config.request_timeout,
                )

    def _fallback(self, reason: str) -> HostawayFetchResult:
        logger.warning(f"Hostaway live reviews unavailable ({reason}); using sample dataset")
        return HostawayFetchResult(reviews=list(load_sample_reviews()), used_fallback=True, fallback_reason=reason)
