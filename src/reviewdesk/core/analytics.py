"""Dashboard analytics over normalized reviews."""

import logging
import math
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from .constants import AnalyticsConstants
from .models import NormalizedReview, ReviewAnalytics, TrendPoint
from .normalizer import round_rating, to_five_point_scale

logger = logging.getLogger(__name__)


def average_rating(ratings: Sequence[float]) -> float:
    """Mean rounded to one decimal; 0.0 when there is nothing to average."""
    if not ratings:
        return 0.0
    return round_rating(sum(ratings) / len(ratings))


def rating_distribution(reviews: Sequence[NormalizedReview]) -> Dict[int, int]:
    distribution: Dict[int, int] = defaultdict(int)
    for review in reviews:
        distribution[math.floor(review.rating)] += 1
    return dict(distribution)


def category_averages(reviews: Sequence[NormalizedReview]) -> Dict[str, float]:
    """Average each category label across all reviews, projected onto 1-5."""
    grouped: Dict[str, List[float]] = defaultdict(list)
    for review in reviews:
        for sample in review.categories:
            grouped[sample.category].append(sample.rating)
    return {
        label: round_rating(to_five_point_scale(sum(values) / len(values)))
        for label, values in grouped.items()
    }


def trends_over_time(reviews: Sequence[NormalizedReview]) -> Tuple[TrendPoint, ...]:
    by_date: Dict[str, List[float]] = defaultdict(list)
    for review in reviews:
        by_date[review.submitted_date].append(review.rating)
    return tuple(
        TrendPoint(date=date, rating=average_rating(ratings), count=len(ratings))
        for date, ratings in sorted(by_date.items())
    )


def top_issues(averages: Dict[str, float]) -> Tuple[str, ...]:
    """Lowest-scoring categories below the issue threshold, worst first."""
    weak = [(score, label) for label, score in averages.items()
            if score < AnalyticsConstants.ISSUE_THRESHOLD]
    weak.sort()
    return tuple(label for _, label in weak[:AnalyticsConstants.MAX_TOP_ISSUES])


def best_performing_properties(reviews: Sequence[NormalizedReview]) -> Tuple[str, ...]:
    by_property: Dict[str, List[float]] = defaultdict(list)
    for review in reviews:
        by_property[review.property_name].append(review.rating)
    ranked = sorted(
        by_property.items(),
        key=lambda item: (-(sum(item[1]) / len(item[1])), -len(item[1]), item[0]),
    )
    return tuple(name for name, _ in ranked[:AnalyticsConstants.MAX_BEST_PROPERTIES])


def compute_analytics(reviews: Sequence[NormalizedReview]) -> ReviewAnalytics:
    """Reduce a review collection into dashboard statistics."""
    reviews = list(reviews)
    averages = category_averages(reviews)
    analytics = ReviewAnalytics(
        total_reviews=len(reviews),
        average_rating=average_rating([r.rating for r in reviews]),
        rating_distribution=rating_distribution(reviews),
        category_averages=averages,
        trends_over_time=trends_over_time(reviews),
        top_issues=top_issues(averages),
        best_performing_properties=best_performing_properties(reviews),
    )
    logger.debug(f"Computed analytics over {analytics.total_reviews} reviews (avg {analytics.average_rating})")
    return analytics
