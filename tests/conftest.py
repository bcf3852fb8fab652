"""Shared fixtures for ReviewDesk tests."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from reviewdesk.core.config import Settings
from reviewdesk.core.models import NormalizedReview, ReviewCategory, ReviewSource, ReviewType


@pytest.fixture
def offline_settings():
    """Settings with no provider credentials."""
    return Settings(
        hostaway_account_id="",
        hostaway_api_key="",
        google_places_api_key="",
        max_retries=1,
        retry_delay=0,
    )


@pytest.fixture
def live_settings():
    """Settings with (fake) provider credentials and instant retries."""
    return Settings(
        hostaway_account_id="61148",
        hostaway_api_key="test-token",
        google_places_api_key="test-key",
        max_retries=2,
        retry_delay=0,
    )


@pytest.fixture
def make_review():
    """Factory for NormalizedReview with sensible defaults."""
    def _make(review_id="1", rating=4.0, submitted_at=None, categories=(), **overrides):
        fields = dict(
            id=review_id,
            source=ReviewSource.HOSTAWAY,
            property_id="2b_n1_a",
            property_name="2B N1 A - 29 Shoreditch Heights",
            guest_name="Guest",
            rating=rating,
            comment="Lovely stay",
            submitted_at=submitted_at or datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc),
            categories=tuple(ReviewCategory(c, r) for c, r in categories),
            channel="Hostaway",
            is_approved=False,
            is_public=False,
            type=ReviewType.GUEST_REVIEW,
        )
        fields.update(overrides)
        return NormalizedReview(**fields)
    return _make


def make_response(payload=None, status_code=200):
    """Mock requests.Response returning ``payload`` from json()."""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def response():
    return make_response
