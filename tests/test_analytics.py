"""Tests for dashboard analytics."""

from datetime import datetime, timezone

from reviewdesk.core.analytics import (
    average_rating,
    best_performing_properties,
    category_averages,
    compute_analytics,
    top_issues,
)


def _day(day):
    return datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc)


def test_three_reviews_on_three_dates(make_review):
    reviews = [
        make_review("a", rating=5, submitted_at=_day(3)),
        make_review("b", rating=4, submitted_at=_day(1)),
        make_review("c", rating=3, submitted_at=_day(2)),
    ]
    analytics = compute_analytics(reviews)

    assert analytics.total_reviews == 3
    assert analytics.average_rating == 4.0
    assert analytics.rating_distribution == {5: 1, 4: 1, 3: 1}
    assert [t.date for t in analytics.trends_over_time] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert all(t.count == 1 for t in analytics.trends_over_time)


def test_empty_input():
    analytics = compute_analytics([])
    assert analytics.total_reviews == 0
    assert analytics.average_rating == 0.0
    assert analytics.rating_distribution == {}
    assert analytics.category_averages == {}
    assert analytics.trends_over_time == ()
    assert analytics.top_issues == ()
    assert analytics.best_performing_properties == ()


def test_distribution_floors_ratings(make_review):
    reviews = [make_review("a", rating=4.6), make_review("b", rating=4.1), make_review("c", rating=2.5)]
    analytics = compute_analytics(reviews)
    assert analytics.rating_distribution == {4: 2, 2: 1}


def test_trend_buckets_by_date(make_review):
    reviews = [
        make_review("a", rating=4, submitted_at=datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)),
        make_review("b", rating=5, submitted_at=datetime(2024, 2, 1, 21, 0, tzinfo=timezone.utc)),
    ]
    (point,) = compute_analytics(reviews).trends_over_time
    assert point.date == "2024-02-01"
    assert point.rating == 4.5
    assert point.count == 2


def test_category_averages_on_five_point_scale(make_review):
    reviews = [
        make_review("a", categories=[("cleanliness", 10), ("noise", 2)]),
        make_review("b", categories=[("cleanliness", 8)]),
    ]
    assert category_averages(reviews) == {"cleanliness": 4.5, "noise": 1.0}


def test_average_rating_rounds():
    assert average_rating([4, 5, 5]) == 4.7
    assert average_rating([]) == 0.0


def test_top_issues_lowest_first():
    averages = {"cleanliness": 4.5, "noise": 1.0, "maintenance": 2.0, "location": 3.9, "value": 3.5}
    assert top_issues(averages) == ("noise", "maintenance", "value")


def test_best_performing_properties(make_review):
    reviews = [
        make_review("a", rating=5, property_name="3B W1 C - 42 Notting Hill Garden"),
        make_review("b", rating=4, property_name="3B W1 C - 42 Notting Hill Garden"),
        make_review("c", rating=5, property_name="2B EC1 D - 8 City Financial District"),
        make_review("d", rating=2, property_name="1B E2 E - 23 Brick Lane Modern"),
        make_review("e", rating=3, property_name="1B S2 B - 15 Canary Wharf Luxury"),
    ]
    assert best_performing_properties(reviews) == (
        "2B EC1 D - 8 City Financial District",
        "3B W1 C - 42 Notting Hill Garden",
        "1B S2 B - 15 Canary Wharf Luxury",
    )


def test_to_dict_shape(make_review):
    data = compute_analytics([make_review("a", rating=5, categories=[("cleanliness", 10)])]).to_dict()
    assert data["totalReviews"] == 1
    assert data["averageRating"] == 5.0
    assert data["categoryAverages"] == {"cleanliness": 5.0}
    assert data["trendsOverTime"] == [{"date": "2024-01-15", "rating": 5.0, "count": 1}]
