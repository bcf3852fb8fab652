"""Tests for the Google Places service."""

from unittest.mock import Mock, patch

import pytest
import requests
from diskcache import Cache

from reviewdesk.core.errors import (
    AccessDeniedError,
    ConfigurationError,
    InvalidInputError,
    InvalidRequestError,
    QuotaExceededError,
    UpstreamError,
)
from reviewdesk.services import google_client
from reviewdesk.services.google_client import GooglePlacesService

GET = "reviewdesk.services.google_client.requests.get"
LISTING = "2B N1 A - 29 Shoreditch Heights"

ZERO = {"status": "ZERO_RESULTS", "candidates": []}
FOUND = {
    "status": "OK",
    "candidates": [{"place_id": "ChIJabc", "name": "Shoreditch Heights",
                    "formatted_address": "29 Shoreditch High St, London"}],
}


def _google_review(i):
    return {
        "author_name": f"Reviewer {i}",
        "rating": 5 - (i % 3),
        "text": f"Review number {i}",
        "time": 1700000000 + i * 86400,
        "relative_time_description": "a month ago",
        "language": "en",
        "profile_photo_url": "https://example.com/p.png",
    }


def _details(count):
    return {
        "status": "OK",
        "result": {
            "place_id": "ChIJabc",
            "name": "Shoreditch Heights",
            "rating": 4.4,
            "user_ratings_total": 212,
            "reviews": [_google_review(i) for i in range(count)],
        },
    }


@pytest.fixture
def service(live_settings, tmp_path):
    return GooglePlacesService(live_settings, cache=Cache(str(tmp_path / "cache")))


def _queries(mock_get):
    return [call.kwargs["params"]["input"] for call in mock_get.call_args_list]


class TestFindPlace:
    def test_query_variants_in_order(self, service, response):
        with patch(GET, side_effect=[response(ZERO), response(ZERO), response(ZERO), response(ZERO)]) as mock_get:
            assert service.find_place(LISTING, "London E1") is None

        assert _queries(mock_get) == [
            f"{LISTING} London E1",
            LISTING,
            f"{LISTING} apartment London",
            f"{LISTING} hotel London",
        ]

    def test_first_match_wins(self, service, response):
        with patch(GET, side_effect=[response(ZERO), response(FOUND)]) as mock_get:
            match = service.find_place(LISTING, "London E1")

        assert match.place_id == "ChIJabc"
        assert match.name == "Shoreditch Heights"
        assert match.address == "29 Shoreditch High St, London"
        assert mock_get.call_count == 2

    def test_plain_name_has_single_variant(self, service, response):
        with patch(GET, return_value=response(ZERO)) as mock_get:
            assert service.find_place("The Ritz") is None
        assert _queries(mock_get) == ["The Ritz"]

    def test_request_shape(self, service, response, live_settings):
        with patch(GET, return_value=response(FOUND)) as mock_get:
            service.find_place("The Ritz")

        args, kwargs = mock_get.call_args
        assert args[0] == "https://maps.googleapis.com/maps/api/place/findplacefromtext/json"
        assert kwargs["params"]["key"] == "test-key"
        assert kwargs["params"]["inputtype"] == "textquery"
        assert kwargs["timeout"] == live_settings.request_timeout


class TestReviewsForProperty:
    def test_no_place_means_no_reviews(self, service, response):
        with patch(GET, return_value=response(ZERO)):
            assert service.get_reviews_for_property(LISTING) == []

    def test_place_without_reviews(self, service, response):
        with patch(GET, side_effect=[response(FOUND), response(_details(0))]):
            assert service.get_reviews_for_property("The Ritz") == []

    def test_details_not_ok(self, service, response):
        with patch(GET, side_effect=[response(FOUND), response({"status": "NOT_FOUND"})]):
            assert service.get_reviews_for_property("The Ritz") == []

    def test_reviews_normalized_and_capped(self, service, response):
        with patch(GET, side_effect=[response(FOUND), response(_details(7))]):
            reviews = service.get_reviews_for_property(LISTING)

        assert [r.id for r in reviews] == [f"google_ChIJabc_{i}" for i in range(5)]
        first = reviews[0]
        assert first.rating == 5.0
        assert first.property_id == "2b_n1_a"
        assert first.property_name == "Shoreditch Heights"
        assert first.is_approved is True
        assert first.is_public is False


class TestErrors:
    @pytest.mark.parametrize("status_code, error", [
        (429, QuotaExceededError),
        (403, AccessDeniedError),
        (500, UpstreamError),
    ])
    def test_http_status(self, service, response, status_code, error):
        with patch(GET, return_value=response({}, status_code=status_code)):
            with pytest.raises(error):
                service.find_place("The Ritz")

    @pytest.mark.parametrize("status, error", [
        ("OVER_QUERY_LIMIT", QuotaExceededError),
        ("REQUEST_DENIED", AccessDeniedError),
        ("INVALID_REQUEST", InvalidRequestError),
        ("UNKNOWN_ERROR", UpstreamError),
    ])
    def test_body_status(self, service, response, status, error):
        with patch(GET, return_value=response({"status": status, "error_message": "nope"})):
            with pytest.raises(error) as excinfo:
                service.get_reviews_for_property("The Ritz")
        assert excinfo.value.details == "nope"

    def test_errors_propagate_without_trying_other_variants(self, service, response):
        with patch(GET, return_value=response({"status": "OVER_QUERY_LIMIT"})) as mock_get:
            with pytest.raises(QuotaExceededError):
                service.find_place(LISTING, "London")
        assert mock_get.call_count == 1

    def test_transport_error_is_generic(self, service):
        with patch(GET, side_effect=requests.ConnectionError("reset")):
            with pytest.raises(UpstreamError) as excinfo:
                service.find_place("The Ritz")
        assert type(excinfo.value) is UpstreamError

    def test_missing_key(self, offline_settings, tmp_path):
        service = GooglePlacesService(offline_settings, cache=Cache(str(tmp_path)))
        assert service.is_configured is False
        with patch(GET) as mock_get:
            with pytest.raises(ConfigurationError) as excinfo:
                service.get_reviews_for_property("The Ritz")
        assert excinfo.value.status_code == 501
        mock_get.assert_not_called()


class TestCaching:
    def test_identical_requests_hit_cache(self, service, response):
        with patch(GET, return_value=response(FOUND)) as mock_get:
            first = service.find_place("The Ritz")
            second = service.find_place("The Ritz")
        assert first == second
        assert mock_get.call_count == 1

    def test_different_requests_miss_cache(self, service, response):
        with patch(GET, return_value=response(FOUND)) as mock_get:
            service.find_place("The Ritz")
            service.find_place("The Savoy")
        assert mock_get.call_count == 2

    def test_errors_are_not_cached(self, service, response):
        with patch(GET, side_effect=[response({}, status_code=429), response(FOUND)]) as mock_get:
            with pytest.raises(QuotaExceededError):
                service.find_place("The Ritz")
            assert service.find_place("The Ritz").place_id == "ChIJabc"
        assert mock_get.call_count == 2

    def test_entries_stored_with_configured_ttl(self, live_settings, response):
        live_settings.places_cache_ttl = 3600
        cache = Mock(spec=Cache)
        cache.get.return_value = None
        service = GooglePlacesService(live_settings, cache=cache)
        with patch(GET, return_value=response(FOUND)):
            service.find_place("The Ritz")
        assert cache.set.call_args.kwargs["expire"] == 3600

    def test_entries_expire_after_ttl(self, live_settings, tmp_path, response):
        live_settings.places_cache_ttl = 60
        service = GooglePlacesService(live_settings, cache=Cache(str(tmp_path / "cache")))
        now = [1_700_000_000.0]
        with patch("diskcache.core.time.time", side_effect=lambda: now[0]), \
                patch(GET, return_value=response(FOUND)) as mock_get:
            service.find_place("The Ritz")
            now[0] += 59
            service.find_place("The Ritz")
            assert mock_get.call_count == 1
            now[0] += 2
            service.find_place("The Ritz")
        assert mock_get.call_count == 2


class TestSharedCache:
    @pytest.fixture(autouse=True)
    def fresh_caches(self, monkeypatch):
        monkeypatch.setattr(google_client, "_caches", {})

    def test_instances_share_cache(self, live_settings, tmp_path, response):
        live_settings.cache_dir = str(tmp_path / "shared")
        first = GooglePlacesService(live_settings)
        second = GooglePlacesService(live_settings)
        with patch(GET, return_value=response(FOUND)) as mock_get:
            assert first.find_place("The Ritz") == second.find_place("The Ritz")
        assert mock_get.call_count == 1
        assert first.cache is second.cache

    def test_default_cache_is_one_temp_dir_per_process(self, live_settings):
        live_settings.cache_dir = ""
        with patch("reviewdesk.services.google_client.tempfile.mkdtemp", wraps=google_client.tempfile.mkdtemp) as mkdtemp:
            first = GooglePlacesService(live_settings).cache
            second = GooglePlacesService(live_settings).cache
        assert first is second
        assert mkdtemp.call_count == 1

    def test_unconfigured_service_opens_no_cache(self, offline_settings):
        service = GooglePlacesService(offline_settings)
        with pytest.raises(ConfigurationError):
            service.find_place("The Ritz")
        assert google_client._caches == {}


class TestSearchPlaces:
    def test_results(self, service, response):
        payload = {
            "status": "OK",
            "results": [{
                "place_id": "ChIJabc",
                "name": "Shoreditch Heights",
                "formatted_address": "29 Shoreditch High St, London",
                "rating": 4.4,
                "user_ratings_total": 212,
                "types": ["lodging"],
            }],
        }
        with patch(GET, return_value=response(payload)) as mock_get:
            (place,) = service.search_places("shoreditch apartments", location="51.52,-0.08", radius=500)

        assert place.id == "ChIJabc"
        assert place.to_dict()["userRatingsTotal"] == 212
        params = mock_get.call_args.kwargs["params"]
        assert params["type"] == "lodging"
        assert params["location"] == "51.52,-0.08"
        assert params["radius"] == 500

    def test_zero_results(self, service, response):
        with patch(GET, return_value=response({"status": "ZERO_RESULTS", "results": []})):
            assert service.search_places("nowhere") == []

    def test_query_required(self, service):
        with pytest.raises(InvalidInputError):
            service.search_places("")
