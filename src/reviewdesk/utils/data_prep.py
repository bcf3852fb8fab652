"""Data preparation for export."""

import datetime
import json
from typing import Any, Dict, Sequence

from ..core.models import NormalizedReview, ReviewAnalytics


def prepare_export(reviews: Sequence[NormalizedReview], analytics: ReviewAnalytics,
                   filters: Dict[str, Any] = None) -> Dict[str, Any]:
    """Prepare reviews and analytics in the dashboard's JSON shape."""
    return {
        "success": True,
        "data": {
            "reviews": [review.to_dict() for review in reviews],
            "analytics": analytics.to_dict(),
            "total": len(reviews),
            "filters": filters or {},
        },
        "metadata": {
            "export_timestamp": None,  # Will be set by caller
            "version": "1.0.0",
        },
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data["metadata"]["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
